"""Configuration loader with merge logic and precedence handling."""

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from skill_catalog.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from skill_catalog.config.schema import CatalogConfig


def find_config_files(root: Path) -> list[Path]:
    """Find the repository configuration file, if any.

    Args:
        root: Repository root directory

    Returns:
        List with ``<root>/skill-catalog.yaml`` when it exists, else empty
    """
    repo_config = root / CONFIG_FILENAME
    if repo_config.exists():
        return [repo_config]
    return []


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Dictionary containing the parsed YAML content

    Raises:
        yaml.YAMLError: If the file contains invalid YAML
        FileNotFoundError: If the file doesn't exist
    """
    with open(file_path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)
        return content if content is not None else {}


def merge_configs(configs: list[dict[str, Any]]) -> dict[str, Any]:
    """Deep merge multiple configuration dictionaries.

    Later configs override earlier ones. Nested dictionaries merge
    recursively; any other value, lists included, is replaced outright.

    Args:
        configs: Configuration dictionaries from lowest to highest precedence

    Returns:
        Merged configuration dictionary
    """
    result: dict[str, Any] = {}
    for config in configs:
        result = _deep_merge(result, config)
    return result


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to configuration.

    Supports the following environment variables:
    - SKILL_CATALOG_MANIFEST: Override paths.manifest
    - SKILL_CATALOG_OUTPUT: Override paths.output
    - SKILL_CATALOG_PACKAGE_HOST: Override catalog.package_host

    Args:
        config: Configuration dictionary to apply overrides to

    Returns:
        Configuration dictionary with environment overrides applied
    """
    result = copy.deepcopy(config)
    paths = result.setdefault("paths", {})
    catalog = result.setdefault("catalog", {})

    if manifest := os.getenv("SKILL_CATALOG_MANIFEST"):
        paths["manifest"] = manifest

    if output := os.getenv("SKILL_CATALOG_OUTPUT"):
        paths["output"] = output

    if host := os.getenv("SKILL_CATALOG_PACKAGE_HOST"):
        catalog["package_host"] = host

    return result


def load_config(root: Path, config_path: Optional[Path] = None) -> CatalogConfig:
    """Load and merge configuration from all sources.

    Configuration precedence (lowest to highest):
    1. Built-in defaults
    2. Repository config (<root>/skill-catalog.yaml)
    3. Explicitly provided config_path (if given)
    4. Environment variables
    5. CLI flags (handled by caller)

    Args:
        root: Repository root used to locate the repository config
        config_path: Optional explicit path to a config file

    Returns:
        Validated CatalogConfig instance

    Raises:
        ValidationError: If the merged configuration is invalid
        yaml.YAMLError: If a config file contains invalid YAML
        FileNotFoundError: If config_path is provided but doesn't exist
    """
    configs_to_merge = [copy.deepcopy(DEFAULT_CONFIG)]

    for config_file in find_config_files(root):
        try:
            configs_to_merge.append(load_yaml_file(config_file))
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error loading {config_file}: {e}") from e

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        configs_to_merge.append(load_yaml_file(config_path))

    merged_config = apply_env_overrides(merge_configs(configs_to_merge))

    try:
        return CatalogConfig(**merged_config)
    except ValidationError as e:
        raise ValidationError.from_exception_data(
            title="Configuration validation failed",
            line_errors=e.errors(),
        ) from e
