"""Packaging and catalog generation."""

from skill_catalog.build.catalog import (
    BuildResult,
    CatalogEntry,
    build_catalog,
    normalize_repo_slug,
)
from skill_catalog.build.packager import package_skill, sha256_file

__all__ = [
    "BuildResult",
    "CatalogEntry",
    "build_catalog",
    "normalize_repo_slug",
    "package_skill",
    "sha256_file",
]
