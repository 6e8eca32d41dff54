"""Shared fixtures: a small building ontology on disk and in memory."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dtdl2oas.ontology import (
    ComplexSchema,
    EntityId,
    Interface,
    PrimitiveKind,
    PrimitiveSchema,
    Property,
    Relationship,
)


# ---------------------------------------------------------------------------
# DTDL documents
# ---------------------------------------------------------------------------

SPACE = {
    "@id": "dtmi:org:brick:Space;1",
    "@type": "Interface",
    "@context": "dtmi:dtdl:context;2",
    "displayName": {"en": "Space", "sv": "Utrymme"},
    "contents": [
        {"@type": "Property", "name": "name", "schema": "string"},
        {"@type": "Property", "name": "area", "schema": "double"},
        {
            "@type": "Relationship",
            "name": "isPartOf",
            "target": "dtmi:org:brick:Space;1",
            "maxMultiplicity": 1,
        },
        {"@type": "Telemetry", "name": "occupancy", "schema": "integer"},
    ],
}

ROOM = {
    "@id": "dtmi:org:brick:Room;1",
    "@type": "Interface",
    "@context": "dtmi:dtdl:context;2",
    "displayName": "Room",
    "extends": "dtmi:org:brick:Space;1",
    "contents": [
        {"@type": "Property", "name": "capacity", "schema": "integer"},
        {"@type": ["Property", "Writable"], "name": "builtOn", "schema": "date"},
        {
            "@type": "Property",
            "name": "status",
            "schema": {"@type": "Enum", "valueSchema": "string", "enumValues": []},
        },
        {
            "@type": "Relationship",
            "name": "hasSensor",
            "target": "dtmi:org:brick:Sensor;1",
            "minMultiplicity": 0,
            "maxMultiplicity": 10,
        },
    ],
}

SENSOR = {
    "@id": "dtmi:org:brick:Sensor;1",
    "@type": "Interface",
    "@context": "dtmi:dtdl:context;2",
    "contents": [
        {"@type": "Property", "name": "lastReading", "schema": "dateTime"},
        {"@type": "Relationship", "name": "feeds"},
    ],
}


@pytest.fixture
def ontology_dir(tmp_path: Path) -> Path:
    """Space and Room in one nested file, Sensor in another."""
    root = tmp_path / "ontology"
    (root / "spaces").mkdir(parents=True)
    (root / "spaces" / "spaces.json").write_text(json.dumps([SPACE, ROOM]))
    (root / "sensor.json").write_text(json.dumps(SENSOR))
    (root / "README.md").write_text("not an ontology file")
    return root


@pytest.fixture
def mappings_file(tmp_path: Path) -> Path:
    path = tmp_path / "mappings.csv"
    path.write_text(
        "Endpoint;Interface\n"
        'rooms;"dtmi:org:brick:Room;1"\n'
        "\n"
        'sensors;"dtmi:org:brick:Sensor;1"\n'
        'pumps;"dtmi:org:brick:Pump;1"\n'
    )
    return path


@pytest.fixture
def annotations_file(tmp_path: Path) -> Path:
    path = tmp_path / "annotations.txt"
    path.write_text(
        "title=Building API\n"
        "version=2.1.0\n"
        "licenseName=MIT\n"
        "licenseUrl=https://opensource.org/licenses/MIT\n"
        "description=Rooms, spaces and sensors\n"
    )
    return path


# ---------------------------------------------------------------------------
# In-memory entities
# ---------------------------------------------------------------------------

@pytest.fixture
def thing() -> Interface:
    """com:acme:Thing with one string property and one singular relationship."""
    return Interface(
        id=EntityId("com:acme:Thing;1"),
        properties=(Property("label", PrimitiveSchema(PrimitiveKind.STRING)),),
        relationships=(
            Relationship("partOf", target=EntityId("com:acme:Thing;1"), max_multiplicity=1),
        ),
    )


@pytest.fixture
def widget() -> Interface:
    return Interface(
        id=EntityId("com:example:Widget;2"),
        display_names={"en": "Widget"},
        properties=(
            Property("enabled", PrimitiveSchema(PrimitiveKind.BOOLEAN)),
            Property("settings", ComplexSchema("Object")),
        ),
        relationships=(
            Relationship("connectedTo", target=EntityId("com:acme:Thing;1"), min_multiplicity=1, max_multiplicity=4),
            Relationship("tags"),
        ),
    )
