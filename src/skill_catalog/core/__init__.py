"""Manifest loading, normalization, discovery and scaffolding."""

from skill_catalog.core.coverage import CoverageReport, check_coverage
from skill_catalog.core.descriptor import parse_descriptor, read_descriptor
from skill_catalog.core.discovery import SkillDirectoryRecord, discover_skills
from skill_catalog.core.entries import ResolvedEntry, load_entries, normalize_entries
from skill_catalog.core.manifest import ManifestDocument, load_manifest, save_manifest
from skill_catalog.core.scaffold import add_manifest_entry, scaffold_entry

__all__ = [
    "CoverageReport",
    "ManifestDocument",
    "ResolvedEntry",
    "SkillDirectoryRecord",
    "add_manifest_entry",
    "check_coverage",
    "discover_skills",
    "load_entries",
    "load_manifest",
    "normalize_entries",
    "parse_descriptor",
    "read_descriptor",
    "save_manifest",
    "scaffold_entry",
]
