"""CLI application entry point."""

from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from skill_catalog.build.catalog import build_catalog, normalize_repo_slug
from skill_catalog.config.loader import load_config
from skill_catalog.config.schema import RepoLayout
from skill_catalog.core.coverage import check_coverage
from skill_catalog.core.discovery import discover_skills
from skill_catalog.core.entries import load_entries
from skill_catalog.core.scaffold import add_manifest_entry
from skill_catalog.errors import CatalogError, ConfigError, PathError
from skill_catalog.utils.output import (
    err_console,
    print_error,
    print_info,
    print_success,
)
from skill_catalog.utils.paths import relative_posix, resolve_in_root

app = typer.Typer(
    name="skill-catalog",
    help="Build skill packages and channel catalogs from a skills manifest",
    add_completion=False,
)


def resolve_layout(
    root: Optional[Path],
    config: Optional[Path],
    manifest: Optional[Path],
    output: Optional[Path],
) -> RepoLayout:
    """Build the repository layout from config files and CLI flags.

    Flag paths are resolved relative to the repository root and, like every
    configured path, must stay inside it.
    """
    repo_root = (root or Path.cwd()).resolve()
    if not repo_root.is_dir():
        raise PathError(f"Repository root does not exist: {repo_root}")

    if config is not None:
        config = resolve_in_root(repo_root, config)
    cfg = load_config(repo_root, config)

    path_overrides = {}
    if manifest is not None:
        path_overrides["manifest"] = str(manifest)
    if output is not None:
        path_overrides["output"] = str(output)
    if path_overrides:
        cfg = cfg.model_copy(update={"paths": cfg.paths.model_copy(update=path_overrides)})

    return RepoLayout.from_config(repo_root, cfg)


def run_coverage_check(layout: RepoLayout) -> None:
    """Fail if a skill directory on disk has no manifest entry."""
    entries = load_entries(layout)
    report = check_coverage(entries, discover_skills(layout))
    report.raise_for_missing(relative_posix(layout.root, layout.manifest_path))
    print_success(
        f"Manifest coverage check passed: {report.discovered} discovered, "
        f"{report.entry_count} manifest entries."
    )


@app.command()
def main(
    manifest: Optional[Path] = typer.Option(
        None,
        "--manifest",
        help="Path to skills manifest (default: catalog/skills.manifest.json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        help="Output directory for packages/catalog artifacts (default: dist)",
    ),
    repo: str = typer.Option(
        "",
        "--repo",
        help="GitHub repository slug for package URLs (required unless --validate-only)",
    ),
    tag: str = typer.Option(
        "",
        "--tag",
        help="Release tag used in package URLs (required unless --validate-only)",
    ),
    validate_only: bool = typer.Option(
        False,
        "--validate-only",
        help="Validate manifest and skill folders without packaging",
    ),
    manifest_check: bool = typer.Option(
        False,
        "--manifest-check",
        help="Fail if any skills/<channel>/<slug>/SKILL.md is missing from the manifest",
    ),
    manifest_add: Optional[str] = typer.Option(
        None,
        "--manifest-add",
        help="Add a manifest entry scaffold for a skill directory",
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        help="Repository root (default: current directory)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file inside the root (merged over <root>/skill-catalog.yaml)",
    ),
):
    """Validate the skills manifest and build release packages and catalogs.

    With --repo and --tag, every manifest entry is zipped into the output
    directory and stable/beta catalog documents plus a checksum ledger are
    written.
    """
    try:
        layout = resolve_layout(root, config, manifest, output)

        if manifest_add is not None:
            entry = add_manifest_entry(layout, manifest_add)
            print_success(f"Added manifest entry for {entry['path']} ({entry['id']}).")

        if manifest_check:
            run_coverage_check(layout)

        entries = load_entries(layout)

        if validate_only:
            print_success(f"Manifest valid: {len(entries)} skill(s) ready.")
            return

        if not repo.strip() and not tag.strip() and (manifest_add is not None or manifest_check):
            return

        repo_slug = normalize_repo_slug(repo)
        release_tag = tag.strip()
        if not release_tag:
            raise ConfigError("--tag is required unless --validate-only.")

        result = build_catalog(entries, layout, repo_slug, release_tag)

        print_success(
            f"Built {result.packaged} package(s). Catalog counts -> "
            f"stable: {result.stable}, beta: {result.beta}."
        )
        print_info(f"Artifacts: {relative_posix(layout.root, result.output_dir)}")

    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except ValidationError as e:
        print_error("Configuration validation failed:")
        err_console.print(str(e), markup=False)
        raise typer.Exit(1)
    except (OSError, yaml.YAMLError) as e:
        print_error(f"Error: {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
