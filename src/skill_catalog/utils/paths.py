"""Path utilities for resolving and containing repository paths."""

from pathlib import Path, PurePosixPath

from skill_catalog.errors import PathError


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path that was ensured
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_in_root(root: Path, value: str | Path) -> Path:
    """Resolve ``value`` against ``root`` and require it to stay inside.

    Args:
        root: Repository root (absolute)
        value: Relative or absolute path

    Returns:
        Absolute, normalized path

    Raises:
        PathError: If the path cannot be resolved or escapes the repository root
    """
    try:
        candidate = (root / Path(value).expanduser()).resolve()
    except (OSError, ValueError) as e:
        raise PathError(f'Path "{value}" is not usable: {e}.') from None
    assert_inside_root(root, candidate)
    return candidate


def assert_inside_root(root: Path, path: Path) -> None:
    """Raise PathError if ``path`` is not ``root`` or below it."""
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        raise PathError(f'Path "{path}" must stay within repository root.') from None


def relative_posix(root: Path, path: Path) -> str:
    """Return ``path`` relative to ``root`` with forward slashes."""
    return path.resolve().relative_to(root.resolve()).as_posix()


def normalize_relative_path(value: object) -> str:
    """Normalize a manifest path for comparison.

    Backslashes become forward slashes, a leading ``./`` and trailing
    slashes are dropped.
    """
    text = str(value if value is not None else "").strip().replace("\\", "/")
    if text.startswith("./"):
        text = text[2:]
    text = text.rstrip("/")
    if not text:
        return ""
    return str(PurePosixPath(text))
