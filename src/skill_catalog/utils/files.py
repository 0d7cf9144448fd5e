"""Helpers for writing build artifacts."""

import json
from pathlib import Path
from typing import Any

from skill_catalog.utils.paths import ensure_dir


def dump_json(value: Any) -> str:
    """Serialize ``value`` the way every catalog artifact is written."""
    return json.dumps(value, indent=2, ensure_ascii=False) + "\n"


def write_json(path: Path, value: Any) -> None:
    """Write pretty JSON with a trailing newline, creating parent dirs."""
    ensure_dir(path.parent)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(dump_json(value))


def write_lines(path: Path, lines: list[str]) -> None:
    """Write newline-joined lines with a trailing newline."""
    ensure_dir(path.parent)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")
