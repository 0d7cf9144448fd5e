"""Configuration loading and management."""

from skill_catalog.config.loader import (
    apply_env_overrides,
    find_config_files,
    load_config,
    merge_configs,
)
from skill_catalog.config.schema import (
    CatalogConfig,
    CatalogOptions,
    PathsConfig,
    RepoLayout,
)

__all__ = [
    # Loader functions
    "apply_env_overrides",
    "find_config_files",
    "load_config",
    "merge_configs",
    # Schema classes
    "CatalogConfig",
    "CatalogOptions",
    "PathsConfig",
    "RepoLayout",
]
