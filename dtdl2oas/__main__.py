"""Entry point: python -m dtdl2oas

Reads a DTDL ontology, an endpoint mapping CSV and an annotation (or nuspec)
file, and writes an OpenAPI YAML document.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .codegen import generate
from .document_builder import DEFAULT_SERVER, build_document
from .loader import (
    MappingError,
    OntologyParseError,
    load_endpoint_mappings,
    load_namespace_abbreviations,
    load_ontology,
)
from .metadata import MetadataError, MetadataParseError, load_metadata

logger = logging.getLogger("dtdl2oas")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dtdl2oas",
        description="Translate a DTDL ontology into an OpenAPI specification.",
    )
    parser.add_argument(
        "-s", "--server", default=DEFAULT_SERVER,
        help="The server URL (where presumably an API implementation is running).",
    )
    parser.add_argument(
        "-i", "--inputPath", dest="input_path", type=Path, required=True,
        help="The path to the on-disk root ontology directory or file to translate.",
    )
    parser.add_argument(
        "-m", "--mappingsPath", dest="mappings_path", type=Path, required=True,
        help="Path to mappings CSV file matching endpoint names to DTDL Interfaces.",
    )
    parser.add_argument(
        "-a", "--annotationsPath", dest="annotations_path", type=Path, required=True,
        help="Path to the ontology annotation file (key=value) or .nuspec manifest.",
    )
    parser.add_argument(
        "-o", "--outputPath", dest="output_path", type=Path, required=True,
        help="The path at which to put the generated OAS file.",
    )
    parser.add_argument(
        "-n", "--namespaceAbbreviationsPath", dest="abbreviations_path", type=Path,
        help="Optional CSV file mapping namespaces to short prefixes.",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Fail on mapping rows that reference unknown interfaces.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def run(args: argparse.Namespace) -> None:
    metadata = load_metadata(args.annotations_path)
    graph = load_ontology(args.input_path)
    mappings = load_endpoint_mappings(args.mappings_path, graph, strict=args.strict)
    abbreviations = (
        load_namespace_abbreviations(args.abbreviations_path)
        if args.abbreviations_path else {}
    )

    document = build_document(
        graph, mappings, metadata,
        server=args.server,
        abbreviations=abbreviations,
        strict=args.strict,
    )
    generate(document, args.output_path, source=str(args.input_path))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except OntologyParseError as e:
        for error in e.errors:
            logger.error(error)
        return 1
    except (MappingError, MetadataError, MetadataParseError) as e:
        logger.error(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
