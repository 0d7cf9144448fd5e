"""Example demonstrating the catalog pipeline as a library.

Validates a repository's manifest, reports skill directories missing from
it, and builds release artifacts into the configured output directory.

Usage:
    python examples/build_usage.py /path/to/repo owner/name v1.0.0
"""

import sys
from pathlib import Path

from skill_catalog.build.catalog import build_catalog, normalize_repo_slug
from skill_catalog.config.loader import load_config
from skill_catalog.config.schema import RepoLayout
from skill_catalog.core.coverage import check_coverage
from skill_catalog.core.discovery import discover_skills
from skill_catalog.core.entries import load_entries
from skill_catalog.errors import CatalogError


def main():
    """Validate, check coverage and build for one repository."""
    root = Path(sys.argv[1]).resolve()
    repo = normalize_repo_slug(sys.argv[2])
    tag = sys.argv[3]

    layout = RepoLayout.from_config(root, load_config(root))

    entries = load_entries(layout)
    print(f"✓ {len(entries)} manifest entries valid")

    report = check_coverage(entries, discover_skills(layout))
    if not report.ok:
        print(f"⚠ {len(report.missing)} skill directories are not in the manifest:")
        for record in report.missing:
            print(f"  - {record.relative_skill_path}")

    result = build_catalog(entries, layout, repo, tag)
    print(f"✓ Built {result.packaged} package(s) into {result.output_dir}")
    for path in result.written:
        print(f"  {path}")


if __name__ == "__main__":
    try:
        main()
    except CatalogError as e:
        print(f"✗ {e}")
        sys.exit(1)
