"""In-memory ontology model.

Entities are immutable snapshots built once by the loader:
- EntityId: hierarchical identifier, e.g. dtmi:com:acme:Thing;1
- Interface: display names, properties and relationships (owned + inherited)
- Property: name + PrimitiveSchema or ComplexSchema
- Relationship: name, optional target, multiplicity bounds
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

SEGMENT_DELIMITER = ":"
VERSION_DELIMITER = ";"


@dataclass(frozen=True)
class EntityId:
    """Hierarchical namespaced identifier, optionally version-suffixed."""

    absolute: str

    @classmethod
    def parse(cls, value: str) -> EntityId:
        return cls(value.strip())

    @property
    def versionless(self) -> str:
        return self.absolute.split(VERSION_DELIMITER, 1)[0]

    @property
    def version(self) -> str | None:
        if VERSION_DELIMITER not in self.absolute:
            return None
        return self.absolute.split(VERSION_DELIMITER, 1)[1]

    @property
    def namespace(self) -> str:
        """All segments but the last, e.g. 'dtmi:com:acme'."""
        head, _, _ = self.versionless.rpartition(SEGMENT_DELIMITER)
        return head

    @property
    def local_name(self) -> str:
        """Final segment, e.g. 'Thing'."""
        return self.versionless.rpartition(SEGMENT_DELIMITER)[2]

    def __str__(self) -> str:
        return self.absolute


class PrimitiveKind(Enum):
    """Ontology primitive schema kinds."""

    BOOLEAN = "boolean"
    DATE = "date"
    DATE_TIME = "dateTime"
    DOUBLE = "double"
    FLOAT = "float"
    INTEGER = "integer"
    LONG = "long"
    STRING = "string"

    @classmethod
    def from_name(cls, name: str) -> PrimitiveKind | None:
        for kind in cls:
            if kind.value == name:
                return kind
        return None


@dataclass(frozen=True)
class PrimitiveSchema:
    kind: PrimitiveKind


@dataclass(frozen=True)
class ComplexSchema:
    """Any non-primitive schema (Object, Enum, Map, Array, duration...)."""

    kind: str


Schema = Union[PrimitiveSchema, ComplexSchema]


@dataclass(frozen=True)
class Property:
    name: str
    schema: Schema


@dataclass(frozen=True)
class Relationship:
    name: str
    target: EntityId | None = None
    min_multiplicity: int | None = None
    max_multiplicity: int | None = None

    @property
    def is_singular(self) -> bool:
        return self.max_multiplicity == 1


@dataclass(frozen=True)
class Interface:
    """An ontology class with its full (owned + inherited) contents."""

    id: EntityId
    display_names: Mapping[str, str] = field(default_factory=dict, hash=False)
    properties: tuple[Property, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    extends: tuple[EntityId, ...] = ()

    def __post_init__(self):
        # Copy so later edits to the caller's dict do not leak in
        object.__setattr__(self, "display_names", MappingProxyType(dict(self.display_names)))


EntityDescriptor = Union[Interface, Property, Relationship, PrimitiveSchema, ComplexSchema]

# Keyed by full identifier; written once by the loader.
EntityGraph = dict[EntityId, EntityDescriptor]
