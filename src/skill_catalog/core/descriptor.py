"""Reader for the metadata header of a skill descriptor file.

A descriptor (``SKILL.md``) may open with a header block::

    ---
    name: pdf-tools
    description: "Work with PDF files"
    ---

The grammar is deliberately small: the block starts on the first line with
the delimiter, ends at the next delimiter line, and every ``key: value`` line
in between contributes one entry. Anything else inside the block is ignored.
"""

import re
from pathlib import Path

DELIMITER = "---"

_HEADER_LINE = re.compile(r"^([A-Za-z0-9_-]+)\s*:\s*(.+)$")
_QUOTES = "'\""


def _header_lines(text: str) -> list[str]:
    lines = text.splitlines()
    if not lines or lines[0].rstrip() != DELIMITER:
        return []

    for end, line in enumerate(lines[1:], start=1):
        if line.rstrip() == DELIMITER:
            return lines[1:end]

    # Unterminated block
    return []


def _unquote(value: str) -> str:
    if value[:1] in _QUOTES:
        value = value[1:]
    if value[-1:] in _QUOTES:
        value = value[:-1]
    return value


def parse_descriptor(text: str) -> dict[str, str]:
    """Extract header key/value pairs from descriptor text.

    Args:
        text: Raw descriptor content

    Returns:
        Mapping of header keys to unquoted values; empty when the text has
        no header block. Later duplicate keys override earlier ones.
    """
    result: dict[str, str] = {}
    for line in _header_lines(text.lstrip("\ufeff")):
        match = _HEADER_LINE.match(line.strip())
        if not match:
            continue
        result[match.group(1)] = _unquote(match.group(2).strip())
    return result


def read_descriptor(path: Path) -> dict[str, str]:
    """Read a descriptor file and parse its header block."""
    return parse_descriptor(path.read_text(encoding="utf-8", errors="replace"))
