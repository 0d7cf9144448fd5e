"""Error taxonomy for manifest validation and catalog builds.

Every error carries a single human-readable message that names the offending
entry or path and the rule it broke. The CLI prints that message and exits
non-zero; nothing else inspects the process state.
"""

from pathlib import Path


class CatalogError(Exception):
    """Base class for all fatal catalog errors."""


class ManifestSchemaError(CatalogError):
    """The manifest document is unreadable or has the wrong shape."""


class EntryValidationError(CatalogError):
    """A single manifest entry broke a validation rule.

    Attributes:
        label: Entry label such as ``skills[3]`` or ``--manifest-add``
        rule: Description of the violated rule
    """

    def __init__(self, label: str, rule: str):
        self.label = label
        self.rule = rule
        super().__init__(f"{label}: {rule}")


class CoverageError(CatalogError):
    """Skill directories exist on disk without a manifest entry."""

    def __init__(self, message: str, missing: list[str]):
        self.missing = missing
        super().__init__(message)


class PathError(CatalogError):
    """A path escaped the repository root or does not exist."""


class PackagingError(CatalogError):
    """Creating an archive for a skill directory failed."""

    def __init__(self, skill_dir: Path, reason: str):
        self.skill_dir = skill_dir
        super().__init__(f"zip failed for {skill_dir}: {reason}")


class ConfigError(CatalogError):
    """Invalid option combination or option value."""
