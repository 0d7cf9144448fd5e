"""Shared pytest fixtures for skill catalog tests."""

import json
from pathlib import Path

import pytest

from skill_catalog.config.schema import CatalogConfig, RepoLayout


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment overrides out of tests."""
    for name in (
        "SKILL_CATALOG_MANIFEST",
        "SKILL_CATALOG_OUTPUT",
        "SKILL_CATALOG_PACKAGE_HOST",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def repo_root(tmp_path):
    """Provide an empty repository root."""
    root = tmp_path / "repo"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def layout(repo_root):
    """Provide the default layout for the temporary repository."""
    return RepoLayout.from_config(repo_root, CatalogConfig(version="1.0"))


@pytest.fixture
def make_skill(repo_root):
    """Create a skill directory with a SKILL.md and optional extra files."""

    def _make(
        relative_path: str,
        name: str | None = None,
        description: str | None = None,
        files: dict[str, str] | None = None,
    ) -> Path:
        skill_dir = repo_root / relative_path
        skill_dir.mkdir(parents=True, exist_ok=True)

        header = []
        if name is not None:
            header.append(f"name: {name}")
        if description is not None:
            header.append(f'description: "{description}"')

        body = "# Skill\n\nInstructions go here.\n"
        if header:
            body = "---\n" + "\n".join(header) + "\n---\n\n" + body
        (skill_dir / "SKILL.md").write_text(body)

        for file_name, content in (files or {}).items():
            target = skill_dir / file_name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)

        return skill_dir

    return _make


@pytest.fixture
def write_manifest(repo_root):
    """Write a manifest document to catalog/skills.manifest.json."""

    def _write(skills: list, schema_version=1) -> Path:
        path = repo_root / "catalog" / "skills.manifest.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps({"schemaVersion": schema_version, "skills": skills}, indent=2)
            + "\n"
        )
        return path

    return _write


@pytest.fixture
def single_skill_repo(make_skill, write_manifest):
    """Repository with one curated skill 'a' listed in the manifest."""
    make_skill("skills/.curated/a", name="a", description="Skill A")
    return write_manifest(
        [{"id": "a", "slug": "a", "path": "skills/.curated/a", "version": "1.0.0"}]
    )
