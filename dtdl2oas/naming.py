"""Resolve API-facing names for ontology entities.

- Properties and relationships keep their declared name.
- Interfaces derive a name from their identifier: the local segment,
  prefixed with a namespace abbreviation when one is configured.

Examples (no abbreviations):
  dtmi:com:acme:Thing;1             -> Thing
With {"dtmi:com:acme": "acme"}:
  dtmi:com:acme:Thing;1             -> acme:Thing   (schema key acme_Thing)
"""

from __future__ import annotations

from typing import Mapping

from .ontology import EntityDescriptor, EntityId, Interface, Property, Relationship

# Locales tried in order before falling back to whatever is present
_CANONICAL_LOCALES = ("", "en")


def _name_from_id(entity_id: EntityId, abbreviations: Mapping[str, str]) -> str:
    abbreviation = abbreviations.get(entity_id.namespace)
    if abbreviation:
        return f"{abbreviation}:{entity_id.local_name}"
    return entity_id.local_name


def api_name(
    entity: EntityDescriptor | EntityId,
    abbreviations: Mapping[str, str] | None = None,
) -> str:
    """Return the API name of an entity.

    Named entities (properties, relationships) return their name verbatim.
    Everything else is named after its identifier.
    """
    abbreviations = abbreviations or {}
    if isinstance(entity, (Property, Relationship)):
        return entity.name
    if isinstance(entity, Interface):
        return _name_from_id(entity.id, abbreviations)
    if isinstance(entity, EntityId):
        return _name_from_id(entity, abbreviations)
    # Bare schemas carry no identifier of their own
    return entity.kind if isinstance(entity.kind, str) else entity.kind.value


def schema_key(name: str) -> str:
    """Make an API name safe for use as a components.schemas key."""
    return name.replace(":", "_")


def documentation_name(interface: Interface) -> str:
    """Return the human-readable label for an interface.

    Precedence: unlocalized name, then English, then the first name
    available, then the versionless identifier.
    """
    names = interface.display_names
    for locale in _CANONICAL_LOCALES:
        if names.get(locale):
            return names[locale]
    for name in names.values():
        if name:
            return name
    return interface.id.versionless
