"""Entry normalization: raw manifest entries to validated, resolved entries.

Each optional field is filled by an ordered chain of default-resolution
rules. The first rule that produces a value wins; every chain starts with
the explicit manifest value, so a manifest can always override a default.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from skill_catalog.config.schema import RepoLayout
from skill_catalog.core.descriptor import read_descriptor
from skill_catalog.core.manifest import ManifestDocument, load_manifest
from skill_catalog.errors import EntryValidationError
from skill_catalog.utils.paths import relative_posix

CHANNELS = ("stable", "beta")
DEFAULT_CHANNEL = "stable"

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")
VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?$")


@dataclass(frozen=True)
class ResolvedEntry:
    """A fully validated manifest entry with every default applied."""

    id: str
    slug: str
    skill_name: str
    title: str
    summary: str
    description: str
    icon: str
    version: str
    channel: str
    asset_name: str
    absolute_skill_path: Path
    relative_skill_path: str


@dataclass
class ResolutionContext:
    """Inputs visible to default-resolution rules.

    Attributes:
        raw: The raw manifest entry
        descriptor: Header fields read from the skill's descriptor file
        default_icon: Configured fallback icon
        resolved: Fields resolved so far, keyed by manifest field name
    """

    raw: Mapping[str, Any]
    descriptor: Mapping[str, str]
    default_icon: str
    resolved: dict[str, str] = field(default_factory=dict)


Rule = Callable[[ResolutionContext], Optional[str]]


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def manifest_value(key: str) -> Rule:
    """Rule: the explicit manifest value for ``key``, even if empty."""

    def rule(ctx: ResolutionContext) -> Optional[str]:
        return _text(ctx.raw.get(key))

    return rule


def descriptor_value(key: str) -> Rule:
    """Rule: the descriptor header value for ``key``."""

    def rule(ctx: ResolutionContext) -> Optional[str]:
        return ctx.descriptor.get(key)

    return rule


def resolved_value(key: str) -> Rule:
    """Rule: a field resolved earlier in the chain order."""

    def rule(ctx: ResolutionContext) -> Optional[str]:
        return ctx.resolved.get(key)

    return rule


def constant(value: str) -> Rule:
    """Rule: a fixed value."""

    def rule(ctx: ResolutionContext) -> Optional[str]:
        return value

    return rule


def title_case(slug: str) -> str:
    """Turn ``pdf-tools_v2`` into ``Pdf Tools V2``."""
    words = [word for word in re.split(r"[-_]", slug) if word]
    return " ".join(word[:1].upper() + word[1:] for word in words)


def title_from_slug(ctx: ResolutionContext) -> Optional[str]:
    return title_case(ctx.resolved["slug"])


def fallback_icon(ctx: ResolutionContext) -> Optional[str]:
    return ctx.default_icon


def asset_name_from_version(ctx: ResolutionContext) -> Optional[str]:
    return f"{ctx.resolved['slug']}-{ctx.resolved['version']}.zip"


# Order matters: later chains may read fields resolved by earlier ones.
FIELD_RULES: tuple[tuple[str, tuple[Rule, ...]], ...] = (
    ("title", (manifest_value("title"), title_from_slug)),
    (
        "skillName",
        (manifest_value("skillName"), descriptor_value("name"), resolved_value("slug")),
    ),
    (
        "description",
        (
            manifest_value("description"),
            descriptor_value("description"),
            resolved_value("title"),
        ),
    ),
    ("summary", (manifest_value("summary"), resolved_value("description"))),
    ("icon", (manifest_value("icon"), fallback_icon)),
    ("channel", (manifest_value("channel"), constant(DEFAULT_CHANNEL))),
    ("assetName", (manifest_value("assetName"), asset_name_from_version)),
)


def resolve_field(ctx: ResolutionContext, rules: tuple[Rule, ...]) -> str:
    """Apply ``rules`` in order and return the first value, stripped."""
    for rule in rules:
        value = rule(ctx)
        if value is not None:
            return value.strip()
    return ""


def resolve_defaults(ctx: ResolutionContext) -> dict[str, str]:
    """Resolve every optional field of an entry.

    ``ctx.resolved`` must already hold ``slug``; ``version`` is needed for
    ``assetName`` unless the manifest names the asset explicitly.

    Returns:
        The context's resolved mapping, now including all optional fields
    """
    for name, rules in FIELD_RULES:
        ctx.resolved[name] = resolve_field(ctx, rules)
    return ctx.resolved


def validate_slug(value: Any, label: str) -> str:
    """Return the stripped slug or raise if it is empty or malformed."""
    slug = (_text(value) or "").strip()
    if not slug:
        raise EntryValidationError(label, "slug is required.")
    if not SLUG_PATTERN.match(slug):
        raise EntryValidationError(
            label, f'slug "{slug}" must match /{SLUG_PATTERN.pattern}/'
        )
    return slug


def validate_version(value: Any, label: str) -> str:
    """Return the stripped version or raise if it is not semver-like."""
    version = (_text(value) or "").strip()
    if not version:
        raise EntryValidationError(label, "version is required.")
    if not VERSION_PATTERN.match(version):
        raise EntryValidationError(
            label,
            f'version "{version}" must follow semver like 1.2.3 or 1.2.3-beta.1.',
        )
    return version


def validate_channel(value: str, label: str) -> str:
    channel = value.strip().lower()
    if channel not in CHANNELS:
        raise EntryValidationError(
            label, f'invalid channel "{channel}". Allowed channels: {", ".join(CHANNELS)}.'
        )
    return channel


def validate_asset_name(asset_name: str, label: str) -> str:
    if not asset_name.endswith(".zip"):
        raise EntryValidationError(label, "assetName must end with .zip.")
    if "/" in asset_name or "\\" in asset_name:
        raise EntryValidationError(label, "assetName cannot contain path separators.")
    return asset_name


def _resolve_skill_path(raw: Mapping[str, Any], label: str, layout: RepoLayout) -> Path:
    path_value = (_text(raw.get("path")) or "").strip()
    if not path_value:
        raise EntryValidationError(label, "path is required.")

    try:
        absolute = (layout.root / path_value).resolve()
    except (OSError, ValueError) as e:
        raise EntryValidationError(label, f"path \"{path_value}\" is not usable: {e}.") from None

    try:
        absolute.relative_to(layout.root)
    except ValueError:
        raise EntryValidationError(
            label, f'path "{path_value}" must stay within repository root.'
        ) from None

    if not absolute.exists():
        raise EntryValidationError(label, f"path does not exist ({path_value}).")
    if not (absolute / layout.descriptor_file).is_file():
        raise EntryValidationError(
            label, f"missing {layout.descriptor_file} in {path_value}."
        )
    return absolute


@dataclass
class SeenKeys:
    """Lower-cased ids, slugs and asset names claimed by earlier entries."""

    ids: set[str] = field(default_factory=set)
    slugs: set[str] = field(default_factory=set)
    asset_names: set[str] = field(default_factory=set)


def normalize_entry(
    raw: Any, index: int, layout: RepoLayout, seen: SeenKeys
) -> ResolvedEntry:
    """Validate one raw entry and apply its defaults.

    Args:
        raw: Raw manifest entry
        index: Position in the manifest, used in error labels
        layout: Repository layout
        seen: Keys claimed by earlier entries; updated in place

    Returns:
        The resolved entry

    Raises:
        EntryValidationError: On the first rule the entry breaks
    """
    label = f"skills[{index}]"
    if not isinstance(raw, Mapping):
        raise EntryValidationError(label, "entry must be an object.")

    absolute = _resolve_skill_path(raw, label, layout)
    descriptor = read_descriptor(absolute / layout.descriptor_file)

    slug_value = raw.get("slug")
    slug = validate_slug(absolute.name if slug_value is None else slug_value, label)

    id_value = raw.get("id")
    entry_id = str(slug if id_value is None else id_value).strip()
    if not entry_id:
        raise EntryValidationError(label, "id is required.")

    if entry_id.lower() in seen.ids:
        raise EntryValidationError(label, f'duplicate id "{entry_id}".')
    seen.ids.add(entry_id.lower())

    if slug.lower() in seen.slugs:
        raise EntryValidationError(label, f'duplicate slug "{slug}".')
    seen.slugs.add(slug.lower())

    version = validate_version(raw.get("version"), label)

    ctx = ResolutionContext(
        raw=raw,
        descriptor=descriptor,
        default_icon=layout.default_icon,
        resolved={"slug": slug, "version": version},
    )
    fields = resolve_defaults(ctx)

    channel = validate_channel(fields["channel"], label)
    for name in ("title", "skillName", "summary", "description"):
        if not fields[name]:
            raise EntryValidationError(label, f"{name} cannot be empty.")
    asset_name = validate_asset_name(fields["assetName"], label)
    if asset_name.lower() in seen.asset_names:
        raise EntryValidationError(label, f'duplicate assetName "{asset_name}".')
    seen.asset_names.add(asset_name.lower())

    return ResolvedEntry(
        id=entry_id,
        slug=slug,
        skill_name=fields["skillName"],
        title=fields["title"],
        summary=fields["summary"],
        description=fields["description"],
        icon=fields["icon"],
        version=version,
        channel=channel,
        asset_name=asset_name,
        absolute_skill_path=absolute,
        relative_skill_path=relative_posix(layout.root, absolute),
    )


def normalize_entries(document: ManifestDocument, layout: RepoLayout) -> list[ResolvedEntry]:
    """Normalize every entry of ``document``, failing on the first violation.

    Returns:
        Resolved entries sorted by id
    """
    seen = SeenKeys()
    entries = [
        normalize_entry(raw, index, layout, seen)
        for index, raw in enumerate(document.skills)
    ]
    return sorted(entries, key=lambda entry: entry.id)


def load_entries(layout: RepoLayout) -> list[ResolvedEntry]:
    """Load the manifest named by ``layout`` and normalize it."""
    return normalize_entries(load_manifest(layout.manifest_path), layout)
