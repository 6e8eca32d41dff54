"""Read ontology annotations into a flat string map.

Two formats:
- annotation file: key=value lines (title, version, licenseName required)
- nuspec package manifest (id, version, description, authors required)
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

logger = logging.getLogger(__name__)

REQUIRED_ANNOTATION_KEYS = ("title", "version", "licenseName")
REQUIRED_NUSPEC_KEYS = ("id", "version", "description", "authors")

# nuspec element -> metadata key, copied when present
_OPTIONAL_NUSPEC_KEYS: dict[str, str] = {
    "title": "title",
    "projectUrl": "contactUrl",
    "license": "licenseName",
    "licenseUrl": "licenseUrl",
}

_NUSPEC_SUFFIXES = (".nuspec", ".xml")


class MetadataError(Exception):
    """Raised when a mandatory metadata key is missing."""

    def __init__(self, key: str, source: Path | None = None):
        self.key = key
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Missing mandatory metadata key '{key}'{where}")


class MetadataParseError(Exception):
    """Raised when a metadata file is not well-formed."""

    def __init__(self, source: Path, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read metadata from {source}: {reason}")


def require_keys(metadata: dict[str, str], keys: tuple[str, ...], source: Path | None = None) -> None:
    for key in keys:
        if not metadata.get(key):
            raise MetadataError(key, source)


def parse_annotations(text: str) -> dict[str, str]:
    """Parse key=value lines; the key is everything before the first '='."""
    metadata: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        metadata[key.strip()] = value.strip()
    return metadata


def load_annotations(path: Path) -> dict[str, str]:
    metadata = parse_annotations(path.read_text(encoding="utf-8"))
    require_keys(metadata, REQUIRED_ANNOTATION_KEYS, path)
    return metadata


def _namespace(root: ET.Element) -> dict[str, str]:
    if root.tag.startswith("{"):
        return {"nu": root.tag[1:].split("}", 1)[0]}
    return {}


def parse_nuspec(text: str | bytes) -> dict[str, str]:
    root = ET.fromstring(text)
    ns = _namespace(root)
    prefix = "nu:" if ns else ""

    def lookup(name: str) -> str | None:
        node = root.find(f"./{prefix}metadata/{prefix}{name}", ns)
        if node is None or node.text is None:
            return None
        return node.text.strip()

    metadata: dict[str, str] = {}
    for key in REQUIRED_NUSPEC_KEYS:
        value = lookup(key)
        if value:
            metadata[key] = value
    for element, key in _OPTIONAL_NUSPEC_KEYS.items():
        value = lookup(element)
        if value:
            metadata[key] = value
    return metadata


def load_nuspec(path: Path) -> dict[str, str]:
    try:
        metadata = parse_nuspec(path.read_bytes())
    except ET.ParseError as e:
        raise MetadataParseError(path, str(e)) from e
    require_keys(metadata, REQUIRED_NUSPEC_KEYS, path)
    return metadata


def load_metadata(path: Path) -> dict[str, str]:
    """Load metadata, picking the format from the file suffix."""
    if path.suffix.lower() in _NUSPEC_SUFFIXES:
        metadata = load_nuspec(path)
    else:
        metadata = load_annotations(path)
    logger.info("Loaded %d metadata key(s) from %s", len(metadata), path)
    return metadata
