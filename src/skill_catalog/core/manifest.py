"""Manifest document loading and persistence.

The manifest is the source of truth for every published skill::

    {"schemaVersion": 1, "skills": [{"id": "...", "path": "...", ...}]}

Documents are immutable values. Adding an entry yields a new document that
must be saved explicitly; nothing caches a loaded document between runs.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from skill_catalog.errors import ManifestSchemaError
from skill_catalog.utils.files import write_json

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class ManifestDocument:
    """A schema-checked manifest document.

    Attributes:
        skills: Raw, unvalidated skill entries in document order
        extra: Other top-level keys, kept so a save round-trips them
    """

    skills: tuple[Any, ...]
    extra: Mapping[str, Any] = field(default_factory=dict)
    schema_version: int = SCHEMA_VERSION

    def with_entry(self, entry: Mapping[str, Any]) -> "ManifestDocument":
        """Return a copy with ``entry`` appended and entries sorted by id."""
        skills = sorted(
            [*self.skills, dict(entry)],
            key=lambda item: str(item.get("id") or "") if isinstance(item, Mapping) else "",
        )
        return ManifestDocument(
            skills=tuple(skills), extra=self.extra, schema_version=self.schema_version
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the on-disk shape."""
        data: dict[str, Any] = {"schemaVersion": self.schema_version}
        data.update(self.extra)
        data["skills"] = [
            dict(item) if isinstance(item, Mapping) else item for item in self.skills
        ]
        return data


def parse_manifest(data: Any, source: str = "manifest") -> ManifestDocument:
    """Schema-check decoded manifest JSON.

    Args:
        data: Decoded JSON value
        source: Where the data came from, used in error messages

    Raises:
        ManifestSchemaError: On a non-object document, a schemaVersion other
            than 1, or a missing ``skills`` array
    """
    if not isinstance(data, dict):
        raise ManifestSchemaError(f"Manifest must be a JSON object ({source}).")

    version = data.get("schemaVersion")
    # bool is an int subclass; true is not a schema version
    if isinstance(version, bool) or version != SCHEMA_VERSION:
        raise ManifestSchemaError(
            f'Unsupported schemaVersion "{version}". Expected {SCHEMA_VERSION}.'
        )

    skills = data.get("skills")
    if not isinstance(skills, list):
        raise ManifestSchemaError('Manifest must contain a "skills" array.')

    extra = {
        key: value
        for key, value in data.items()
        if key not in ("schemaVersion", "skills")
    }
    return ManifestDocument(skills=tuple(skills), extra=extra)


def load_manifest(path: Path) -> ManifestDocument:
    """Read and schema-check the manifest at ``path``.

    Raises:
        ManifestSchemaError: If the file is unreadable, not JSON, or has the
            wrong shape
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ManifestSchemaError(f"Manifest is not valid UTF-8 ({path}): {e}") from e
    except OSError as e:
        raise ManifestSchemaError(f"Unable to read manifest at {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ManifestSchemaError(f"Manifest is not valid JSON ({path}): {e}") from e

    return parse_manifest(data, str(path))


def save_manifest(document: ManifestDocument, path: Path) -> None:
    """Persist ``document`` as 2-space indented UTF-8 JSON."""
    write_json(path, document.to_dict())
