"""Tests for manifest loading and persistence."""

import json

import pytest

from skill_catalog.core.manifest import (
    ManifestDocument,
    load_manifest,
    parse_manifest,
    save_manifest,
)
from skill_catalog.errors import ManifestSchemaError


class TestParseManifest:
    """Test schema checks on decoded manifest data."""

    def test_valid_document(self):
        document = parse_manifest({"schemaVersion": 1, "skills": [{"id": "a"}]})
        assert document.schema_version == 1
        assert document.skills == ({"id": "a"},)

    def test_wrong_schema_version(self):
        with pytest.raises(ManifestSchemaError, match="schemaVersion"):
            parse_manifest({"schemaVersion": 2, "skills": []})

    def test_string_schema_version_rejected(self):
        with pytest.raises(ManifestSchemaError):
            parse_manifest({"schemaVersion": "1", "skills": []})

    def test_boolean_schema_version_rejected(self):
        with pytest.raises(ManifestSchemaError):
            parse_manifest({"schemaVersion": True, "skills": []})

    def test_missing_skills_array(self):
        with pytest.raises(ManifestSchemaError, match='"skills" array'):
            parse_manifest({"schemaVersion": 1})

    def test_skills_must_be_list(self):
        with pytest.raises(ManifestSchemaError):
            parse_manifest({"schemaVersion": 1, "skills": {"a": {}}})

    def test_document_must_be_object(self):
        with pytest.raises(ManifestSchemaError, match="JSON object"):
            parse_manifest([1, 2, 3])

    def test_extra_keys_preserved(self):
        document = parse_manifest({"schemaVersion": 1, "owner": "team", "skills": []})
        assert document.to_dict() == {"schemaVersion": 1, "owner": "team", "skills": []}


class TestLoadManifest:
    """Test reading manifests from disk."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestSchemaError, match="Unable to read manifest"):
            load_manifest(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text("{not json")
        with pytest.raises(ManifestSchemaError, match="not valid JSON"):
            load_manifest(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_bytes(b"\xff{}")
        with pytest.raises(ManifestSchemaError, match="not valid UTF-8"):
            load_manifest(path)

    def test_loads_entries(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps({"schemaVersion": 1, "skills": [{"id": "x"}]}))
        assert load_manifest(path).skills == ({"id": "x"},)


class TestManifestDocument:
    """Test immutable document updates and saving."""

    def test_with_entry_returns_new_sorted_document(self):
        document = ManifestDocument(skills=({"id": "m"}, {"id": "z"}))
        updated = document.with_entry({"id": "b"})

        assert [item["id"] for item in updated.skills] == ["b", "m", "z"]
        assert [item["id"] for item in document.skills] == ["m", "z"]

    def test_save_format(self, tmp_path):
        path = tmp_path / "out" / "manifest.json"
        document = ManifestDocument(skills=({"id": "a", "icon": "🧠"},))

        save_manifest(document, path)

        text = path.read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert '  "schemaVersion": 1' in text
        assert "🧠" in text
        assert json.loads(text) == {"schemaVersion": 1, "skills": [{"id": "a", "icon": "🧠"}]}
