"""Coverage check: every discovered skill directory must be in the manifest."""

from dataclasses import dataclass, field
from typing import Iterable

from skill_catalog.core.discovery import SkillDirectoryRecord
from skill_catalog.core.entries import ResolvedEntry
from skill_catalog.errors import CoverageError
from skill_catalog.utils.paths import normalize_relative_path

REMEDIATION_COMMAND = "skill-catalog --manifest-add"


@dataclass(frozen=True)
class CoverageReport:
    """Outcome of a coverage check.

    Attributes:
        discovered: Number of skill directories found on disk
        entry_count: Number of resolved manifest entries
        missing: Discovered directories with no manifest entry
    """

    discovered: int
    entry_count: int
    missing: list[SkillDirectoryRecord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing

    def raise_for_missing(self, manifest_label: str = "the manifest") -> None:
        """Raise CoverageError naming every missing directory.

        Args:
            manifest_label: How to refer to the manifest in the message
        """
        if self.ok:
            return

        lines = "\n".join(
            f"  - {record.relative_skill_path} "
            f"(add via: {REMEDIATION_COMMAND} {record.relative_skill_path})"
            for record in self.missing
        )
        raise CoverageError(
            "Manifest coverage check failed.\n"
            f"Missing {len(self.missing)} skill(s) from {manifest_label}:\n{lines}",
            missing=[record.relative_skill_path for record in self.missing],
        )


def _path_key(value: str) -> str:
    return normalize_relative_path(value).lower()


def check_coverage(
    entries: Iterable[ResolvedEntry], discovered: Iterable[SkillDirectoryRecord]
) -> CoverageReport:
    """Compare discovered skill directories against resolved entries.

    Paths are compared normalized and case-insensitively.
    """
    entries = list(entries)
    discovered = list(discovered)
    manifest_paths = {_path_key(entry.relative_skill_path) for entry in entries}
    missing = [
        record
        for record in discovered
        if _path_key(record.relative_skill_path) not in manifest_paths
    ]
    return CoverageReport(
        discovered=len(discovered), entry_count=len(entries), missing=missing
    )
