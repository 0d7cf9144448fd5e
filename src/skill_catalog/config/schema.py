"""Pydantic models for skill catalog configuration."""

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from skill_catalog.utils.paths import resolve_in_root


class PathsConfig(BaseModel):
    """Repository-relative locations used by a build."""

    manifest: str = Field(
        default="catalog/skills.manifest.json",
        description="Manifest document listing every skill package",
    )
    output: str = Field(
        default="dist", description="Disposable output directory for build artifacts"
    )
    catalog_dir: str = Field(
        default="catalog",
        description="Tracked directory receiving a copy of each channel catalog",
    )
    skills_dir: str = Field(
        default="skills", description="Root of the channel-grouped skill directories"
    )


class CatalogOptions(BaseModel):
    """Options shaping manifest defaults and published catalog entries."""

    descriptor_file: str = Field(
        default="SKILL.md", description="File that marks a directory as a skill"
    )
    default_icon: str = Field(default="🧠", description="Fallback icon glyph")
    experimental_dir: str = Field(
        default=".experimental",
        description="Channel directory whose skills are scaffolded as beta",
    )
    package_host: str = Field(
        default="github.com", description="Host serving release downloads"
    )

    @field_validator("descriptor_file", "experimental_dir")
    @classmethod
    def validate_plain_name(cls, v: str) -> str:
        """Validate the value is a single path component."""
        if not v or "/" in v or "\\" in v:
            raise ValueError("Must be a plain file or directory name")
        return v

    @field_validator("package_host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate the host carries no scheme or path."""
        v = v.strip()
        if not v or "://" in v or "/" in v:
            raise ValueError("Host must be a bare hostname such as 'github.com'")
        return v


class CatalogConfig(BaseModel):
    """Root configuration for skill catalog builds."""

    version: str = Field(description="Config schema version")
    paths: PathsConfig = Field(default_factory=PathsConfig)
    catalog: CatalogOptions = Field(default_factory=CatalogOptions)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version format."""
        if not v.startswith("1."):
            raise ValueError(
                f"Unsupported config version: {v}. Only version 1.x is supported."
            )
        return v


@dataclass(frozen=True)
class RepoLayout:
    """Absolute locations and options for one repository.

    Attributes:
        root: Repository root; no read or write may escape it
        manifest_path: Manifest document
        output_dir: Disposable build output directory
        catalog_dir: Tracked catalog directory
        skills_dir: Root of the channel directories
        descriptor_file: Name of the file marking a skill directory
        default_icon: Fallback icon for entries without one
        experimental_dir: Channel directory name mapped to beta
        package_host: Host used in package download URLs
    """

    root: Path
    manifest_path: Path
    output_dir: Path
    catalog_dir: Path
    skills_dir: Path
    descriptor_file: str = "SKILL.md"
    default_icon: str = "🧠"
    experimental_dir: str = ".experimental"
    package_host: str = "github.com"

    @classmethod
    def from_config(cls, root: Path, config: CatalogConfig) -> "RepoLayout":
        """Resolve a config against a repository root.

        Raises:
            PathError: If any configured path escapes the root
        """
        root = root.resolve()
        return cls(
            root=root,
            manifest_path=resolve_in_root(root, config.paths.manifest),
            output_dir=resolve_in_root(root, config.paths.output),
            catalog_dir=resolve_in_root(root, config.paths.catalog_dir),
            skills_dir=resolve_in_root(root, config.paths.skills_dir),
            descriptor_file=config.catalog.descriptor_file,
            default_icon=config.catalog.default_icon,
            experimental_dir=config.catalog.experimental_dir,
            package_host=config.catalog.package_host,
        )
