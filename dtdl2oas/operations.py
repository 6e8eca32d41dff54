"""Templated CRUD operations for a mapped resource.

Pattern per resource:
  GET    /{resource}       -> list{Schema}
  POST   /{resource}       -> create{Schema}
  GET    /{resource}/{id}  -> get{Schema}
  PATCH  /{resource}/{id}  -> update{Schema}
  PUT    /{resource}/{id}  -> replace{Schema}
  DELETE /{resource}/{id}  -> delete{Schema}
"""

from __future__ import annotations

from .oas import Array, Operation, Parameter, PathItem, Primitive, Reference, RequestBody, Response

ID_PARAMETER = "id"


def collection_path(resource_name: str) -> str:
    return f"/{resource_name}"


def item_path(resource_name: str) -> str:
    return f"/{resource_name}/{{{ID_PARAMETER}}}"


def _operation_id(verb: str, schema_name: str) -> str:
    return verb + schema_name[:1].upper() + schema_name[1:]


def _id_parameter(label: str) -> Parameter:
    return Parameter(
        name=ID_PARAMETER,
        location="path",
        schema=Primitive("string"),
        required=True,
        description=f"Id of the '{label}' object",
    )


def _not_found(label: str) -> Response:
    return Response(f"'{label}' not found")


def list_operation(schema_name: str, label: str) -> Operation:
    return Operation(
        operation_id=_operation_id("list", schema_name),
        summary=f"Get all '{label}' objects",
        tags=[label],
        responses={
            "200": Response(f"'{label}' objects", Array(Reference(schema_name))),
        },
    )


def create_operation(schema_name: str, label: str) -> Operation:
    return Operation(
        operation_id=_operation_id("create", schema_name),
        summary=f"Create a new '{label}' object",
        tags=[label],
        request_body=RequestBody(Reference(schema_name), description=f"New '{label}' object"),
        responses={
            "201": Response(f"'{label}' created", Reference(schema_name)),
        },
    )


def get_operation(schema_name: str, label: str) -> Operation:
    return Operation(
        operation_id=_operation_id("get", schema_name),
        summary=f"Get a single '{label}' object",
        tags=[label],
        parameters=[_id_parameter(label)],
        responses={
            "200": Response(f"A single '{label}' object", Reference(schema_name)),
            "404": _not_found(label),
        },
    )


def patch_operation(schema_name: str, label: str) -> Operation:
    return Operation(
        operation_id=_operation_id("update", schema_name),
        summary=f"Update a single '{label}' object",
        tags=[label],
        parameters=[_id_parameter(label)],
        request_body=RequestBody(Reference(schema_name), description=f"Fields to update on the '{label}' object"),
        responses={
            "200": Response(f"'{label}' updated", Reference(schema_name)),
            "404": _not_found(label),
        },
    )


def put_operation(schema_name: str, label: str) -> Operation:
    return Operation(
        operation_id=_operation_id("replace", schema_name),
        summary=f"Replace a single '{label}' object",
        tags=[label],
        parameters=[_id_parameter(label)],
        request_body=RequestBody(Reference(schema_name), description=f"Replacement '{label}' object"),
        responses={
            "200": Response(f"'{label}' replaced", Reference(schema_name)),
            "404": _not_found(label),
        },
    )


def delete_operation(schema_name: str, label: str) -> Operation:
    return Operation(
        operation_id=_operation_id("delete", schema_name),
        summary=f"Delete a single '{label}' object",
        tags=[label],
        parameters=[_id_parameter(label)],
        responses={
            "204": Response(f"'{label}' deleted"),
            "404": _not_found(label),
        },
    )


def build_path_items(resource_name: str, schema_name: str, label: str) -> dict[str, PathItem]:
    """Return the collection and item path items for one resource."""
    return {
        collection_path(resource_name): PathItem(
            get=list_operation(schema_name, label),
            post=create_operation(schema_name, label),
        ),
        item_path(resource_name): PathItem(
            get=get_operation(schema_name, label),
            patch=patch_operation(schema_name, label),
            put=put_operation(schema_name, label),
            delete=delete_operation(schema_name, label),
        ),
    }
