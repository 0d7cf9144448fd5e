"""Catalog builder: packages, hashes and channel catalog documents.

A build writes, under the output directory::

    packages/<assetName>          one archive per entry
    catalog/stable.json           {"skills": [...]}
    catalog/beta.json
    catalog/checksums.txt         "<sha256>  packages/<assetName>" per line

Each channel document is also written, with identical content, to the
tracked catalog directory of the repository.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from skill_catalog.build.packager import package_skill, sha256_file
from skill_catalog.config.schema import RepoLayout
from skill_catalog.core.entries import CHANNELS, ResolvedEntry
from skill_catalog.errors import ConfigError, PathError
from skill_catalog.utils.files import write_json, write_lines
from skill_catalog.utils.output import print_info
from skill_catalog.utils.paths import ensure_dir

PACKAGES_DIRNAME = "packages"
CATALOG_DIRNAME = "catalog"
CHECKSUMS_FILENAME = "checksums.txt"


class CatalogEntry(BaseModel):
    """Published projection of a resolved entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    slug: str
    skill_name: str = Field(alias="skillName")
    title: str
    summary: str
    description: str
    icon: str
    version: str
    package_url: str = Field(alias="packageUrl")
    sha256: str = Field(pattern=r"^[0-9a-f]{64}$")

    @classmethod
    def from_entry(cls, entry: ResolvedEntry, package_url: str, sha256: str) -> "CatalogEntry":
        return cls(
            id=entry.id,
            slug=entry.slug,
            skill_name=entry.skill_name,
            title=entry.title,
            summary=entry.summary,
            description=entry.description,
            icon=entry.icon,
            version=entry.version,
            package_url=package_url,
            sha256=sha256,
        )


@dataclass
class BuildResult:
    """Summary of a catalog build.

    Attributes:
        packaged: Number of archives written
        channel_counts: Catalog entries per channel
        output_dir: Build output directory
        written: Every catalog and checksum file written
    """

    packaged: int
    channel_counts: dict[str, int]
    output_dir: Path
    written: list[Path] = field(default_factory=list)

    @property
    def stable(self) -> int:
        return self.channel_counts.get("stable", 0)

    @property
    def beta(self) -> int:
        return self.channel_counts.get("beta", 0)


def normalize_repo_slug(repo: str) -> str:
    """Validate an ``owner/name`` repository slug.

    Raises:
        ConfigError: If the value is not exactly two non-empty segments
    """
    repo = (repo or "").strip()
    parts = repo.split("/")
    if len(parts) != 2 or not all(part.strip() for part in parts):
        raise ConfigError(f'Invalid --repo value "{repo}". Expected "owner/name".')
    return "/".join(part.strip() for part in parts)


def package_url(host: str, repo: str, tag: str, asset_name: str) -> str:
    """Release download URL for an asset."""
    return f"https://{host}/{repo}/releases/download/{tag}/{asset_name}"


def _check_output_dir(layout: RepoLayout, entries: list[ResolvedEntry]) -> None:
    output_dir = layout.output_dir
    if output_dir == layout.root:
        raise PathError("Output directory cannot be the repository root.")

    # Clearing the output must never touch skill sources
    inside = [layout.skills_dir, *(entry.absolute_skill_path for entry in entries)]
    for path in inside:
        if path == output_dir or path in output_dir.parents:
            raise PathError(
                f"Output directory {output_dir} lies inside skill sources at {path}; "
                "choose a dedicated build directory."
            )

    protected = (
        layout.manifest_path,
        layout.catalog_dir,
        layout.skills_dir,
        *(entry.absolute_skill_path for entry in entries),
    )
    for path in protected:
        if path == output_dir or output_dir in path.parents:
            raise PathError(
                f"Output directory {output_dir} would overwrite {path}; "
                "choose a dedicated build directory."
            )


def build_catalog(
    entries: list[ResolvedEntry], layout: RepoLayout, repo: str, tag: str
) -> BuildResult:
    """Package every entry and write the channel catalogs.

    The output directory is removed and recreated first, so a build never
    mixes in artifacts from an earlier run. Entries are packaged in the
    order given; the first packaging failure aborts before any catalog
    document is written.

    Args:
        entries: Resolved entries, already sorted by id
        layout: Repository layout; ``output_dir`` receives the artifacts
        repo: Repository slug in ``owner/name`` form
        tag: Release tag

    Returns:
        Counts and written paths

    Raises:
        PathError: If the output directory overlaps repository sources
        PackagingError: If any archive cannot be created
    """
    _check_output_dir(layout, entries)
    output_dir = layout.output_dir
    packages_dir = output_dir / PACKAGES_DIRNAME
    catalog_dir = output_dir / CATALOG_DIRNAME

    if output_dir.exists():
        shutil.rmtree(output_dir)
    ensure_dir(packages_dir)
    ensure_dir(catalog_dir)

    checksums: list[str] = []
    by_channel: dict[str, list[CatalogEntry]] = {channel: [] for channel in CHANNELS}

    for entry in entries:
        archive = package_skill(entry.absolute_skill_path, packages_dir / entry.asset_name)
        digest = sha256_file(archive)
        print_info(f"Packaged {entry.id} -> {PACKAGES_DIRNAME}/{entry.asset_name}")

        url = package_url(layout.package_host, repo, tag, entry.asset_name)
        by_channel[entry.channel].append(CatalogEntry.from_entry(entry, url, digest))
        checksums.append(f"{digest}  {PACKAGES_DIRNAME}/{entry.asset_name}")

    written: list[Path] = []
    for channel, catalog_entries in by_channel.items():
        catalog_entries.sort(key=lambda item: item.id)
        document = {
            "skills": [item.model_dump(by_alias=True) for item in catalog_entries]
        }
        for target in (catalog_dir, layout.catalog_dir):
            path = target / f"{channel}.json"
            write_json(path, document)
            written.append(path)

    checksum_path = catalog_dir / CHECKSUMS_FILENAME
    write_lines(checksum_path, checksums)
    written.append(checksum_path)

    return BuildResult(
        packaged=len(entries),
        channel_counts={channel: len(items) for channel, items in by_channel.items()},
        output_dir=output_dir,
        written=written,
    )
