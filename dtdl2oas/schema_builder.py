"""Build OpenAPI schemas for mapped interfaces.

Every generated schema has:
- @id: string
- @type: string, defaulting to the interface's full identifier
- one entry per relationship: an {@id, @type} stub, or an array of stubs
  unless maxMultiplicity is 1
- one entry per property: type/format from the primitive table, string
  for anything else

Relationship targets are referenced by stub, never embedded, so cyclic
ontologies produce finite schemas.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from .loader import EndpointMapping, MappingError
from .naming import api_name, schema_key
from .oas import Array, Complex, Primitive, SchemaNode
from .ontology import EntityGraph, EntityId, Interface, PrimitiveKind, PrimitiveSchema, Property, Relationship

logger = logging.getLogger(__name__)

# Primitive kind -> (OAS type, OAS format); "" means no format
TYPE_MAP: Mapping[PrimitiveKind, tuple[str, str]] = MappingProxyType({
    PrimitiveKind.BOOLEAN: ("boolean", ""),
    PrimitiveKind.DATE: ("string", "date"),
    PrimitiveKind.DATE_TIME: ("string", "date-time"),
    PrimitiveKind.DOUBLE: ("number", "double"),
    PrimitiveKind.FLOAT: ("number", "float"),
    PrimitiveKind.INTEGER: ("integer", "int32"),
    PrimitiveKind.LONG: ("integer", "int64"),
    PrimitiveKind.STRING: ("string", ""),
})

ID_KEY = "@id"
TYPE_KEY = "@type"


def property_schema(prop: Property) -> Primitive:
    """Resolve a property's schema; non-primitive schemas become strings."""
    if isinstance(prop.schema, PrimitiveSchema):
        oas_type, oas_format = TYPE_MAP[prop.schema.kind]
        return Primitive(oas_type, oas_format or None)
    return Primitive("string")


def relationship_schema(relationship: Relationship) -> SchemaNode:
    """Build the {@id, @type} stub for a relationship, wrapped per multiplicity."""
    target_type = str(relationship.target) if relationship.target else None
    stub = Complex(
        properties={
            ID_KEY: Primitive("string"),
            TYPE_KEY: Primitive("string", default=target_type),
        },
        required=[ID_KEY],
    )
    if relationship.is_singular:
        return stub
    return Array(
        items=stub,
        min_items=relationship.min_multiplicity,
        max_items=relationship.max_multiplicity,
    )


def interface_schema(interface: Interface) -> Complex:
    schema = Complex(properties={
        ID_KEY: Primitive("string"),
        TYPE_KEY: Primitive("string", default=str(interface.id)),
    })
    for relationship in interface.relationships:
        schema.properties[api_name(relationship)] = relationship_schema(relationship)
    for prop in interface.properties:
        schema.properties[api_name(prop)] = property_schema(prop)
    return schema


def resolve_mappings(
    mappings: list[EndpointMapping],
    graph: EntityGraph,
    abbreviations: Mapping[str, str] | None = None,
    strict: bool = False,
) -> list[tuple[EndpointMapping, Interface, str]]:
    """Pair each mapping with its interface and schema key.

    A key already taken by a different interface (e.g. two namespaces
    sharing a local name) drops the later mapping, or raises MappingError
    when strict.
    """
    resolved: list[tuple[EndpointMapping, Interface, str]] = []
    owners: dict[str, EntityId] = {}
    for mapping in mappings:
        interface = graph[mapping.target]
        if not isinstance(interface, Interface):
            continue
        key = schema_key(api_name(interface, abbreviations))
        owner = owners.setdefault(key, interface.id)
        if owner != interface.id:
            row = f"{mapping.resource_name};{mapping.target}"
            if strict:
                raise MappingError(row, f"schema name {key!r} already used by {owner}")
            logger.warning(
                "Skipping resource %r: schema name %r already used by %s",
                mapping.resource_name, key, owner,
            )
            continue
        resolved.append((mapping, interface, key))
    return resolved


def build_schemas(
    mappings: list[EndpointMapping],
    graph: EntityGraph,
    abbreviations: Mapping[str, str] | None = None,
    strict: bool = False,
) -> dict[str, Complex]:
    """Build components.schemas entries in mapping order."""
    schemas: dict[str, Complex] = {}
    for _, interface, key in resolve_mappings(mappings, graph, abbreviations, strict):
        schemas.setdefault(key, interface_schema(interface))
    return schemas
