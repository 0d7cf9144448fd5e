"""Discovery of skill directories on disk, independent of the manifest."""

from dataclasses import dataclass
from pathlib import Path

from skill_catalog.config.schema import RepoLayout


@dataclass(frozen=True)
class SkillDirectoryRecord:
    """A directory under ``<skills>/<channel>/`` holding a descriptor file."""

    absolute_skill_path: Path
    relative_skill_path: str


def _subdirectories(path: Path) -> list[Path]:
    return [child for child in path.iterdir() if child.is_dir()]


def discover_skills(layout: RepoLayout) -> list[SkillDirectoryRecord]:
    """Find every skill directory under the skills root.

    Only the immediate subdirectories of each channel directory are
    considered. A missing skills root yields an empty list.

    Args:
        layout: Repository layout naming the skills root and descriptor file

    Returns:
        Records sorted by relative path
    """
    if not layout.skills_dir.is_dir():
        return []

    discovered = []
    for channel_dir in _subdirectories(layout.skills_dir):
        for skill_dir in _subdirectories(channel_dir):
            if not (skill_dir / layout.descriptor_file).is_file():
                continue
            discovered.append(
                SkillDirectoryRecord(
                    absolute_skill_path=skill_dir.resolve(),
                    relative_skill_path=skill_dir.relative_to(layout.root).as_posix(),
                )
            )

    return sorted(discovered, key=lambda record: record.relative_skill_path)
