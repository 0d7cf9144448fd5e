"""Scaffolding of manifest entries for skill directories missing from it."""

from pathlib import Path
from typing import Any

from skill_catalog.config.schema import RepoLayout
from skill_catalog.core.descriptor import read_descriptor
from skill_catalog.core.entries import (
    ResolutionContext,
    normalize_entries,
    resolve_defaults,
    validate_slug,
)
from skill_catalog.core.manifest import load_manifest, save_manifest
from skill_catalog.errors import EntryValidationError, PathError
from skill_catalog.utils.paths import (
    assert_inside_root,
    normalize_relative_path,
    relative_posix,
)

SCAFFOLD_LABEL = "--manifest-add"
INITIAL_VERSION = "1.0.0"


def infer_channel(relative_skill_path: str, layout: RepoLayout) -> str:
    """Skills under the experimental channel directory ship as beta."""
    skills_root = relative_posix(layout.root, layout.skills_dir)
    experimental_prefix = f"{skills_root}/{layout.experimental_dir}/"
    if normalize_relative_path(relative_skill_path).startswith(experimental_prefix):
        return "beta"
    return "stable"


def resolve_skill_directory(value: str, layout: RepoLayout) -> Path:
    """Resolve a user-supplied skill directory path.

    Raises:
        PathError: If the path is empty, escapes the root, is not an existing
            directory, or lacks a descriptor file
    """
    normalized = str(value or "").strip()
    if not normalized:
        raise PathError(f"{SCAFFOLD_LABEL} requires a non-empty path.")

    try:
        skill_dir = (layout.root / normalized).resolve()
    except (OSError, ValueError) as e:
        raise PathError(f"{SCAFFOLD_LABEL} path \"{normalized}\" is not usable: {e}.") from None
    assert_inside_root(layout.root, skill_dir)

    if not skill_dir.exists():
        raise PathError(f"Skill directory does not exist: {normalized}")
    if not skill_dir.is_dir():
        raise PathError(f"Skill path must be a directory: {normalized}")
    if not (skill_dir / layout.descriptor_file).is_file():
        raise PathError(f"Missing {layout.descriptor_file} in {normalized}")
    return skill_dir


def scaffold_entry(skill_dir: Path, layout: RepoLayout) -> dict[str, Any]:
    """Derive a raw manifest entry for ``skill_dir``.

    The id and slug both come from the directory name; text fields use the
    same default rules as normalization.
    """
    relative_path = relative_posix(layout.root, skill_dir)
    slug = validate_slug(skill_dir.name, SCAFFOLD_LABEL)

    ctx = ResolutionContext(
        raw={},
        descriptor=read_descriptor(skill_dir / layout.descriptor_file),
        default_icon=layout.default_icon,
        resolved={"slug": slug, "version": INITIAL_VERSION},
    )
    fields = resolve_defaults(ctx)

    return {
        "id": slug,
        "slug": slug,
        "path": relative_path,
        "version": INITIAL_VERSION,
        "channel": infer_channel(relative_path, layout),
        "title": fields["title"],
        "summary": fields["summary"],
        "description": fields["description"],
        "icon": fields["icon"],
        "skillName": fields["skillName"],
    }


def add_manifest_entry(layout: RepoLayout, skill_path: str) -> dict[str, Any]:
    """Add a scaffolded entry for ``skill_path`` to the manifest.

    The manifest on disk is only rewritten once the updated document has
    passed full validation; any failure leaves the file untouched.

    Args:
        layout: Repository layout
        skill_path: Skill directory, relative to the repository root

    Returns:
        The entry that was added

    Raises:
        CatalogError: If the current manifest is invalid, the directory is
            unusable, or the entry collides with an existing one
    """
    document = load_manifest(layout.manifest_path)
    existing = normalize_entries(document, layout)
    skill_dir = resolve_skill_directory(skill_path, layout)
    entry = scaffold_entry(skill_dir, layout)

    entry_path = normalize_relative_path(entry["path"]).lower()
    if any(
        normalize_relative_path(item.relative_skill_path).lower() == entry_path
        for item in existing
    ):
        raise EntryValidationError(
            SCAFFOLD_LABEL, f"manifest already contains path {entry['path']}."
        )
    if any(item.id.lower() == entry["id"].lower() for item in existing):
        raise EntryValidationError(
            SCAFFOLD_LABEL, f"manifest already contains id {entry['id']}."
        )
    if any(item.slug.lower() == entry["slug"].lower() for item in existing):
        raise EntryValidationError(
            SCAFFOLD_LABEL, f"manifest already contains slug {entry['slug']}."
        )

    updated = document.with_entry(entry)
    normalize_entries(updated, layout)
    save_manifest(updated, layout.manifest_path)
    return entry
