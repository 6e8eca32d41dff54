"""OpenAPI object model.

Each node renders itself with to_dict(): camelCase keys, and any field
holding None or an empty collection is left out of the output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

OPENAPI_VERSION = "3.0.1"
SCHEMA_REF_PREFIX = "#/components/schemas/"


def _compact(node: dict[str, Any]) -> dict[str, Any]:
    """Drop None values and empty containers."""
    return {
        key: value
        for key, value in node.items()
        if value is not None and value != {} and value != [] and value != ""
    }


@dataclass(frozen=True)
class Primitive:
    type: str
    format: str | None = None
    default: Any = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"type": self.type, "format": self.format, "default": self.default})


@dataclass(frozen=True)
class Reference:
    """$ref to an entry in components.schemas."""

    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"$ref": SCHEMA_REF_PREFIX + self.name}


@dataclass(frozen=True)
class Array:
    items: SchemaNode
    min_items: int | None = None
    max_items: int | None = None

    def to_dict(self) -> dict[str, Any]:
        node = {
            "type": "array",
            "items": self.items.to_dict(),
            "minItems": self.min_items,
            "maxItems": self.max_items,
        }
        return {k: v for k, v in node.items() if v is not None}


@dataclass
class Complex:
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "type": "object",
            "properties": {name: schema.to_dict() for name, schema in self.properties.items()},
            "required": list(self.required),
        })


SchemaNode = Union[Primitive, Reference, Array, Complex]


@dataclass(frozen=True)
class Parameter:
    name: str
    location: str
    schema: SchemaNode
    required: bool = False
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "name": self.name,
            "in": self.location,
            "description": self.description,
            "required": self.required or None,
            "schema": self.schema.to_dict(),
        })


@dataclass(frozen=True)
class Response:
    description: str
    schema: SchemaNode | None = None
    media_type: str = "application/json"

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"description": self.description}
        if self.schema is not None:
            node["content"] = {self.media_type: {"schema": self.schema.to_dict()}}
        return node


@dataclass(frozen=True)
class RequestBody:
    schema: SchemaNode
    description: str | None = None
    required: bool = True
    media_type: str = "application/json"

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "description": self.description,
            "content": {self.media_type: {"schema": self.schema.to_dict()}},
            "required": self.required or None,
        })


@dataclass
class Operation:
    operation_id: str
    summary: str
    responses: dict[str, Response]
    tags: list[str] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)
    request_body: RequestBody | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "tags": list(self.tags),
            "summary": self.summary,
            "operationId": self.operation_id,
            "parameters": [p.to_dict() for p in self.parameters],
            "requestBody": self.request_body.to_dict() if self.request_body else None,
            "responses": {code: r.to_dict() for code, r in self.responses.items()},
        })


# Output order of methods within a path item
HTTP_METHODS = ("get", "post", "put", "patch", "delete")


@dataclass
class PathItem:
    get: Operation | None = None
    post: Operation | None = None
    put: Operation | None = None
    patch: Operation | None = None
    delete: Operation | None = None

    def operations(self) -> dict[str, Operation]:
        ops = {method: getattr(self, method) for method in HTTP_METHODS}
        return {method: op for method, op in ops.items() if op is not None}

    def to_dict(self) -> dict[str, Any]:
        return {method: op.to_dict() for method, op in self.operations().items()}


@dataclass(frozen=True)
class Contact:
    name: str | None = None
    email: str | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"name": self.name, "url": self.url, "email": self.email})


@dataclass(frozen=True)
class License:
    name: str
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"name": self.name, "url": self.url})


@dataclass(frozen=True)
class Info:
    title: str
    version: str
    description: str | None = None
    contact: Contact | None = None
    license: License | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "title": self.title,
            "description": self.description,
            "contact": self.contact.to_dict() if self.contact else None,
            "license": self.license.to_dict() if self.license else None,
            "version": self.version,
        })


@dataclass(frozen=True)
class Server:
    url: str
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"url": self.url, "description": self.description})


@dataclass
class Document:
    info: Info
    servers: list[Server] = field(default_factory=list)
    schemas: dict[str, SchemaNode] = field(default_factory=dict)
    paths: dict[str, PathItem] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "openapi": OPENAPI_VERSION,
            "info": self.info.to_dict(),
            "servers": [s.to_dict() for s in self.servers],
            "paths": {path: item.to_dict() for path, item in self.paths.items()},
            "components": _compact({
                "schemas": {name: schema.to_dict() for name, schema in self.schemas.items()},
            }),
        })
