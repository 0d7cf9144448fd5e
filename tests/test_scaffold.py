"""Tests for manifest entry scaffolding."""

import json

import pytest

from skill_catalog.core.coverage import check_coverage
from skill_catalog.core.discovery import discover_skills
from skill_catalog.core.entries import load_entries
from skill_catalog.core.scaffold import (
    add_manifest_entry,
    infer_channel,
    resolve_skill_directory,
    scaffold_entry,
)
from skill_catalog.errors import CatalogError, EntryValidationError, PathError


class TestInferChannel:
    """Test channel inference from skill paths."""

    def test_experimental_is_beta(self, layout):
        assert infer_channel("skills/.experimental/x", layout) == "beta"

    def test_other_channels_are_stable(self, layout):
        assert infer_channel("skills/.curated/x", layout) == "stable"
        assert infer_channel("skills/.experimental-ish/x", layout) == "stable"


class TestScaffoldEntry:
    """Test scaffold_entry derivation."""

    def test_uses_descriptor_defaults(self, layout, make_skill):
        skill_dir = make_skill(
            "skills/.curated/pdf-tools", name="PDF Tools", description="Handle PDFs"
        )

        entry = scaffold_entry(skill_dir, layout)

        assert entry == {
            "id": "pdf-tools",
            "slug": "pdf-tools",
            "path": "skills/.curated/pdf-tools",
            "version": "1.0.0",
            "channel": "stable",
            "title": "Pdf Tools",
            "summary": "Handle PDFs",
            "description": "Handle PDFs",
            "icon": "🧠",
            "skillName": "PDF Tools",
        }

    def test_falls_back_to_slug_and_title(self, layout, make_skill):
        entry = scaffold_entry(make_skill("skills/.curated/bare"), layout)

        assert entry["skillName"] == "bare"
        assert entry["description"] == "Bare"
        assert entry["summary"] == "Bare"

    def test_rejects_invalid_directory_name(self, layout, make_skill):
        with pytest.raises(EntryValidationError, match="--manifest-add"):
            scaffold_entry(make_skill("skills/.curated/Bad_Name"), layout)


class TestResolveSkillDirectory:
    """Test validation of the scaffold input path."""

    def test_empty_path(self, layout):
        with pytest.raises(PathError, match="non-empty"):
            resolve_skill_directory("  ", layout)

    def test_outside_root(self, layout):
        with pytest.raises(PathError, match="within repository root"):
            resolve_skill_directory("../outside", layout)

    def test_path_with_null_byte(self, layout):
        with pytest.raises(PathError, match="not usable"):
            resolve_skill_directory("skills/a\x00b", layout)

    def test_missing_directory(self, layout):
        with pytest.raises(PathError, match="does not exist"):
            resolve_skill_directory("skills/.curated/nope", layout)

    def test_file_instead_of_directory(self, layout, repo_root):
        (repo_root / "file.txt").write_text("x")
        with pytest.raises(PathError, match="must be a directory"):
            resolve_skill_directory("file.txt", layout)

    def test_missing_descriptor(self, layout, repo_root):
        (repo_root / "skills" / ".curated" / "x").mkdir(parents=True)
        with pytest.raises(PathError, match="Missing SKILL.md"):
            resolve_skill_directory("skills/.curated/x", layout)


class TestAddManifestEntry:
    """Test inserting a scaffolded entry into the manifest."""

    def test_scenario_experimental_skill(self, layout, single_skill_repo, make_skill):
        make_skill("skills/.experimental/x")

        entry = add_manifest_entry(layout, "skills/.experimental/x")

        assert entry["id"] == "x"
        assert entry["channel"] == "beta"
        assert entry["version"] == "1.0.0"

        data = json.loads(single_skill_repo.read_text(encoding="utf-8"))
        assert [item["id"] for item in data["skills"]] == ["a", "x"]
        assert data["skills"][1]["path"] == "skills/.experimental/x"

        entries = load_entries(layout)
        assert {item.id: item.channel for item in entries} == {"a": "stable", "x": "beta"}

    def test_entries_resorted_by_id(self, layout, make_skill, write_manifest):
        make_skill("skills/.curated/m")
        make_skill("skills/.curated/z")
        make_skill("skills/.curated/b")
        manifest = write_manifest(
            [
                {"id": "z", "slug": "z", "path": "skills/.curated/z", "version": "1.0.0"},
                {"id": "m", "slug": "m", "path": "skills/.curated/m", "version": "1.0.0"},
            ]
        )

        add_manifest_entry(layout, "skills/.curated/b")

        data = json.loads(manifest.read_text())
        assert [item["id"] for item in data["skills"]] == ["b", "m", "z"]

    def test_duplicate_path_leaves_manifest_untouched(self, layout, single_skill_repo):
        before = single_skill_repo.read_text()

        with pytest.raises(EntryValidationError, match="already contains path"):
            add_manifest_entry(layout, "skills/.curated/a")

        assert single_skill_repo.read_text() == before

    def test_duplicate_slug_in_other_channel(self, layout, single_skill_repo, make_skill):
        make_skill("skills/.experimental/a")
        before = single_skill_repo.read_text()

        with pytest.raises(EntryValidationError, match="already contains id a"):
            add_manifest_entry(layout, "skills/.experimental/a")

        assert single_skill_repo.read_text() == before

    def test_duplicate_slug_with_different_id(self, layout, make_skill, write_manifest):
        make_skill("skills/.curated/a")
        make_skill("skills/.experimental/a")
        manifest = write_manifest(
            [{"id": "alpha", "slug": "a", "path": "skills/.curated/a", "version": "1.0.0"}]
        )

        with pytest.raises(EntryValidationError, match="already contains slug a"):
            add_manifest_entry(layout, "skills/.experimental/a")

        assert len(json.loads(manifest.read_text())["skills"]) == 1

    def test_invalid_existing_manifest_is_not_rewritten(self, layout, make_skill, write_manifest):
        make_skill("skills/.curated/new")
        manifest = write_manifest(
            [{"id": "a", "slug": "a", "path": "skills/.curated/gone", "version": "1.0.0"}]
        )
        before = manifest.read_text()

        with pytest.raises(CatalogError):
            add_manifest_entry(layout, "skills/.curated/new")

        assert manifest.read_text() == before

    def test_scaffold_then_coverage_passes(self, layout, single_skill_repo, make_skill):
        make_skill("skills/.experimental/x")
        assert not check_coverage(load_entries(layout), discover_skills(layout)).ok

        add_manifest_entry(layout, "skills/.experimental/x")

        assert check_coverage(load_entries(layout), discover_skills(layout)).ok
