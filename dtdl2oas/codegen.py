"""Serialize the document and write the generated YAML file.

The document is dumped with PyYAML and rendered through
templates/openapi.yaml.j2, which adds a generated-file banner.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
import yaml

from .oas import Document

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "openapi.yaml.j2"


def dump_yaml(document: Document) -> str:
    """Serialize the document, keeping insertion order."""
    return yaml.safe_dump(
        document.to_dict(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def render(document: Document, source: str = "") -> str:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template(TEMPLATE_NAME)
    context: dict[str, Any] = {
        "source": source,
        "title": document.info.title,
        "version": document.info.version,
        "schema_count": len(document.schemas),
        "path_count": len(document.paths),
        "body": dump_yaml(document).rstrip("\n"),
    }
    return template.render(**context)


def generate(document: Document, output_path: Path, source: str = "") -> None:
    """Render the document and write it to output_path."""
    output = render(document, source)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(output, encoding="utf-8")

    print(f"Generated {output_path} ({len(document.schemas)} schemas, {len(document.paths)} paths)")
