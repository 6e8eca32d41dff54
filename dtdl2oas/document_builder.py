"""Assemble the OpenAPI document.

Combines the metadata header, the server block, generated schemas plus the
fixed JSON-LD Context schema, and the CRUD paths for every mapping, in
mapping-table order.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .loader import EndpointMapping
from .naming import documentation_name
from .oas import Complex, Contact, Document, Info, License, PathItem, Primitive, Server
from .operations import build_path_items
from .ontology import EntityGraph
from .schema_builder import build_schemas, resolve_mappings

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "http://localhost:8080/"
CONTEXT_SCHEMA_NAME = "Context"
HYDRA_NAMESPACE = "http://www.w3.org/ns/hydra/core#"


def build_info(metadata: Mapping[str, str]) -> Info:
    """Build the info block; title falls back to the package id."""
    contact = None
    contact_name = metadata.get("contactName") or metadata.get("authors")
    contact_email = metadata.get("contactEmail")
    contact_url = metadata.get("contactUrl")
    if contact_name or contact_email or contact_url:
        contact = Contact(name=contact_name, email=contact_email, url=contact_url)

    license_block = None
    if metadata.get("licenseName"):
        license_block = License(name=metadata["licenseName"], url=metadata.get("licenseUrl") or None)

    return Info(
        title=metadata.get("title") or metadata.get("id", ""),
        version=metadata.get("version", ""),
        description=metadata.get("description") or None,
        contact=contact,
        license=license_block,
    )


def context_schema() -> Complex:
    return Complex(
        properties={
            "@vocab": Primitive("string", "uri"),
            "@base": Primitive("string", "uri"),
            "hydra": Primitive("string", "uri", default=HYDRA_NAMESPACE),
        },
        required=["@vocab", "@base", "hydra"],
    )


def build_paths(
    mappings: list[EndpointMapping],
    graph: EntityGraph,
    abbreviations: Mapping[str, str] | None = None,
) -> dict[str, PathItem]:
    paths: dict[str, PathItem] = {}
    for mapping, interface, schema_name in resolve_mappings(mappings, graph, abbreviations):
        label = documentation_name(interface)
        paths.update(build_path_items(mapping.resource_name, schema_name, label))
    return paths


def build_document(
    graph: EntityGraph,
    mappings: list[EndpointMapping],
    metadata: Mapping[str, str],
    server: str = DEFAULT_SERVER,
    abbreviations: Mapping[str, str] | None = None,
    strict: bool = False,
) -> Document:
    """Build the complete document for the given inputs."""
    # Drop schema-name collisions once so schemas and paths agree
    mappings = [m for m, _, _ in resolve_mappings(mappings, graph, abbreviations, strict)]
    schemas = dict(build_schemas(mappings, graph, abbreviations))
    if schemas.pop(CONTEXT_SCHEMA_NAME, None) is not None:
        logger.warning("Interface schema %r replaced by the JSON-LD context schema", CONTEXT_SCHEMA_NAME)
    # Context always goes last
    schemas[CONTEXT_SCHEMA_NAME] = context_schema()

    document = Document(
        info=build_info(metadata),
        servers=[Server(server)],
        schemas=schemas,
        paths=build_paths(mappings, graph, abbreviations),
    )
    logger.info(
        "Built document with %d schema(s) and %d path(s)",
        len(document.schemas), len(document.paths),
    )
    return document
