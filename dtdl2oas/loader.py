"""Load ontology models, endpoint mappings and namespace abbreviations.

Ontology input is a single DTDL JSON file or a directory scanned
recursively for *.json. Each file holds one Interface or an array of them.
Only Interface / Property / Relationship are read; other content types
(Telemetry, Command, Component) are skipped.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .ontology import (
    ComplexSchema,
    EntityGraph,
    EntityId,
    Interface,
    PrimitiveKind,
    PrimitiveSchema,
    Property,
    Relationship,
    Schema,
)

logger = logging.getLogger(__name__)

CSV_DELIMITER = ";"


class OntologyParseError(Exception):
    """Raised when the ontology cannot be read into an entity graph."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"{len(errors)} ontology error(s):\n" + "\n".join(errors))


class MappingError(Exception):
    """Raised in strict mode for a mapping row that cannot be used."""

    def __init__(self, row: str, reason: str):
        self.row = row
        self.reason = reason
        super().__init__(f"{reason}: {row!r}")


@dataclass(frozen=True)
class EndpointMapping:
    resource_name: str
    target: EntityId


# ---------------------------------------------------------------------------
# Ontology
# ---------------------------------------------------------------------------

def _has_type(node: dict[str, Any], type_name: str) -> bool:
    types = node.get("@type")
    if isinstance(types, list):
        return type_name in types
    return types == type_name


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _parse_schema(value: Any) -> Schema:
    """Map a DTDL schema to a primitive kind when possible."""
    if isinstance(value, str):
        kind = PrimitiveKind.from_name(value)
        if kind is not None:
            return PrimitiveSchema(kind)
        return ComplexSchema(value)
    if isinstance(value, dict):
        return ComplexSchema(str(value.get("@type", "Object")))
    return ComplexSchema("unknown")


def _parse_multiplicity(content: dict[str, Any], key: str, errors: list[str], where: str) -> int | None:
    value = content.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        errors.append(f"{where}: {key} must be a non-negative integer, got {value!r}")
        return None
    return value


def _parse_display_names(value: Any) -> dict[str, str]:
    if isinstance(value, str):
        return {"": value}
    if isinstance(value, dict):
        return {str(locale): str(name) for locale, name in value.items()}
    return {}


def _parse_interface(
    node: dict[str, Any], source: Path, errors: list[str],
) -> tuple[Interface, list[Property], list[Relationship]] | None:
    raw_id = node.get("@id")
    if not isinstance(raw_id, str) or not raw_id.strip():
        errors.append(f"{source}: Interface without @id")
        return None
    entity_id = EntityId.parse(raw_id)

    properties: list[Property] = []
    relationships: list[Relationship] = []
    for content in _as_list(node.get("contents")):
        if not isinstance(content, dict):
            errors.append(f"{source}: {entity_id}: content entry is not an object")
            continue
        is_property = _has_type(content, "Property")
        is_relationship = _has_type(content, "Relationship")
        if not (is_property or is_relationship):
            continue
        name = content.get("name")
        if not isinstance(name, str) or not name:
            errors.append(f"{source}: {entity_id}: content without name")
            continue
        where = f"{source}: {entity_id}.{name}"
        if is_property:
            properties.append(Property(name, _parse_schema(content.get("schema"))))
        else:
            target = content.get("target")
            relationships.append(Relationship(
                name=name,
                target=EntityId.parse(target) if isinstance(target, str) and target else None,
                min_multiplicity=_parse_multiplicity(content, "minMultiplicity", errors, where),
                max_multiplicity=_parse_multiplicity(content, "maxMultiplicity", errors, where),
            ))

    interface = Interface(
        id=entity_id,
        display_names=_parse_display_names(node.get("displayName")),
        extends=tuple(EntityId.parse(e) for e in _as_list(node.get("extends")) if isinstance(e, str)),
    )
    return interface, properties, relationships


def _merge_by_name(owned: list[Any], inherited: list[Any]) -> list[Any]:
    """Owned definitions first; inherited ones only if the name is new."""
    merged = {item.name: item for item in owned}
    for item in inherited:
        merged.setdefault(item.name, item)
    return list(merged.values())


def _resolve_inheritance(
    interfaces: dict[EntityId, tuple[Interface, list[Property], list[Relationship]]],
    errors: list[str],
) -> EntityGraph:
    resolved: dict[EntityId, Interface] = {}

    def resolve(entity_id: EntityId, stack: tuple[EntityId, ...]) -> Interface | None:
        if entity_id in resolved:
            return resolved[entity_id]
        if entity_id in stack:
            chain = " -> ".join(str(e) for e in stack + (entity_id,))
            errors.append(f"inheritance cycle: {chain}")
            return None
        interface, properties, relationships = interfaces[entity_id]
        for parent_id in interface.extends:
            if parent_id not in interfaces:
                errors.append(f"{entity_id}: extends unknown interface {parent_id}")
                continue
            parent = resolve(parent_id, stack + (entity_id,))
            if parent is None:
                continue
            properties = _merge_by_name(properties, list(parent.properties))
            relationships = _merge_by_name(relationships, list(parent.relationships))
        result = Interface(
            id=interface.id,
            display_names=interface.display_names,
            properties=tuple(properties),
            relationships=tuple(relationships),
            extends=interface.extends,
        )
        resolved[entity_id] = result
        return result

    for entity_id in interfaces:
        resolve(entity_id, ())
    return dict(resolved)


def _ontology_files(path: Path) -> list[Path]:
    if path.is_dir():
        return sorted(path.rglob("*.json"))
    return [path]


def load_ontology(path: Path) -> EntityGraph:
    """Read all ontology files under path into an entity graph.

    Raises OntologyParseError with every problem found across all files.
    """
    if not path.exists():
        raise OntologyParseError([f"{path}: no such file or directory"])

    errors: list[str] = []
    interfaces: dict[EntityId, tuple[Interface, list[Property], list[Relationship]]] = {}

    files = _ontology_files(path)
    for source in files:
        try:
            with open(source, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            errors.append(f"{source}: {e}")
            continue

        for node in _as_list(data):
            if not isinstance(node, dict) or not _has_type(node, "Interface"):
                continue
            parsed = _parse_interface(node, source, errors)
            if parsed is None:
                continue
            entity_id = parsed[0].id
            if entity_id in interfaces:
                errors.append(f"{source}: duplicate interface {entity_id}")
                continue
            interfaces[entity_id] = parsed

    graph = _resolve_inheritance(interfaces, errors)
    if errors:
        raise OntologyParseError(errors)

    logger.info("Loaded %d interfaces from %d file(s)", len(graph), len(files))
    return graph


# ---------------------------------------------------------------------------
# CSV-like mapping files
# ---------------------------------------------------------------------------

def _read_rows(path: Path) -> list[tuple[str, str, str]]:
    """Return (line, key, value) for each data row; header is skipped."""
    with open(path, encoding="utf-8") as f:
        lines = f.read().splitlines()

    rows = []
    for line in lines[1:]:
        if not line.strip():
            continue
        key, _, value = line.partition(CSV_DELIMITER)
        rows.append((line, key.strip(), value.strip().strip('"')))
    return rows


def load_endpoint_mappings(
    path: Path,
    graph: EntityGraph,
    strict: bool = False,
) -> list[EndpointMapping]:
    """Load resourceName;"identifier" rows, in file order.

    Rows naming an identifier that is not an interface in the graph are
    dropped, as are repeated resource names. With strict=True either case
    raises MappingError instead.
    """
    mappings: list[EndpointMapping] = []
    seen: set[str] = set()

    for line, resource_name, raw_id in _read_rows(path):
        target = EntityId.parse(raw_id)
        if not isinstance(graph.get(target), Interface):
            if strict:
                raise MappingError(line, "unknown interface")
            logger.debug("Skipping mapping for unknown interface: %s", line)
            continue
        if resource_name in seen:
            if strict:
                raise MappingError(line, "duplicate resource name")
            logger.warning("Skipping duplicate resource name %r", resource_name)
            continue
        seen.add(resource_name)
        mappings.append(EndpointMapping(resource_name, target))

    logger.info("Loaded %d endpoint mapping(s) from %s", len(mappings), path)
    return mappings


def load_namespace_abbreviations(path: Path) -> dict[str, str]:
    """Load namespace;"abbreviation" rows."""
    return {namespace: abbreviation for _, namespace, abbreviation in _read_rows(path)}
