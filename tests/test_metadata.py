"""Tests for the metadata module."""

import pytest

from dtdl2oas.metadata import (
    MetadataError,
    MetadataParseError,
    load_annotations,
    load_metadata,
    parse_annotations,
    parse_nuspec,
)

NUSPEC = """<?xml version="1.0" encoding="utf-8"?>
<package xmlns="http://schemas.microsoft.com/packaging/2013/05/nuspec.xsd">
  <metadata>
    <id>Acme.Building.Ontology</id>
    <title>Acme Building Ontology</title>
    <version>3.2.0</version>
    <description>Ontology for buildings</description>
    <authors>Acme Labs</authors>
    <license type="expression">Apache-2.0</license>
    <licenseUrl>https://www.apache.org/licenses/LICENSE-2.0</licenseUrl>
    <projectUrl>https://example.com/ontology</projectUrl>
  </metadata>
</package>
"""


class TestParseAnnotations:

    def test_key_value(self):
        assert parse_annotations("title=Acme\nversion=1.0\n") == {"title": "Acme", "version": "1.0"}

    def test_split_on_first_equals(self):
        assert parse_annotations("description=a=b") == {"description": "a=b"}

    def test_blank_and_comment_lines(self):
        assert parse_annotations("\n# comment\ntitle = Acme \n") == {"title": "Acme"}


class TestLoadAnnotations:

    def test_required_keys_present(self, annotations_file):
        metadata = load_annotations(annotations_file)
        assert metadata["title"] == "Building API"
        assert metadata["licenseName"] == "MIT"

    @pytest.mark.parametrize("missing", ["title", "version", "licenseName"])
    def test_missing_required_key(self, tmp_path, missing):
        values = {"title": "Acme", "version": "1.0", "licenseName": "MIT"}
        del values[missing]
        path = tmp_path / "annotations.txt"
        path.write_text("\n".join(f"{k}={v}" for k, v in values.items()))
        with pytest.raises(MetadataError) as exc:
            load_annotations(path)
        assert exc.value.key == missing
        assert missing in str(exc.value)


class TestNuspec:

    def test_fields_extracted(self):
        metadata = parse_nuspec(NUSPEC.encode("utf-8"))
        assert metadata == {
            "id": "Acme.Building.Ontology",
            "version": "3.2.0",
            "description": "Ontology for buildings",
            "authors": "Acme Labs",
            "title": "Acme Building Ontology",
            "licenseName": "Apache-2.0",
            "licenseUrl": "https://www.apache.org/licenses/LICENSE-2.0",
            "contactUrl": "https://example.com/ontology",
        }

    def test_without_namespace(self):
        text = "<package><metadata><id>x</id><version>1</version></metadata></package>"
        assert parse_nuspec(text) == {"id": "x", "version": "1"}

    def test_load_by_suffix(self, tmp_path):
        path = tmp_path / "ontology.nuspec"
        path.write_text(NUSPEC)
        assert load_metadata(path)["id"] == "Acme.Building.Ontology"

    def test_missing_authors(self, tmp_path):
        path = tmp_path / "ontology.nuspec"
        path.write_text(NUSPEC.replace("<authors>Acme Labs</authors>", ""))
        with pytest.raises(MetadataError) as exc:
            load_metadata(path)
        assert exc.value.key == "authors"

    def test_annotations_by_default(self, annotations_file):
        assert load_metadata(annotations_file)["version"] == "2.1.0"

    def test_malformed_manifest(self, tmp_path):
        path = tmp_path / "broken.nuspec"
        path.write_text("<package><metadata>")
        with pytest.raises(MetadataParseError) as exc:
            load_metadata(path)
        assert exc.value.source == path
        assert "broken.nuspec" in str(exc.value)
