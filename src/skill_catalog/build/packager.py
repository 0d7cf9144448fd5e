"""Deterministic zip packaging of skill directories.

Archives hold every file under the skill directory, named relative to it.
Entries are sorted and carry a fixed timestamp and normalized permissions,
so the same directory contents always produce the same bytes.
"""

import hashlib
import stat
import zipfile
from pathlib import Path

from skill_catalog.errors import PackagingError
from skill_catalog.utils.paths import ensure_dir

# Earliest timestamp the zip format can represent
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
UNIX_SYSTEM = 3
CHUNK_SIZE = 1024 * 1024


def _iter_files(skill_dir: Path) -> list[Path]:
    files = [path for path in skill_dir.rglob("*") if path.is_file()]
    return sorted(files, key=lambda p: p.relative_to(skill_dir).as_posix())


def _zip_info(arcname: str, source: Path) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(arcname, date_time=FIXED_DATE_TIME)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.create_system = UNIX_SYSTEM
    mode = 0o755 if source.stat().st_mode & 0o111 else 0o644
    info.external_attr = (stat.S_IFREG | mode) << 16
    return info


def package_skill(skill_dir: Path, output_zip: Path) -> Path:
    """Zip the full contents of ``skill_dir`` into ``output_zip``.

    Any existing file at ``output_zip`` is replaced.

    Args:
        skill_dir: Skill directory to archive
        output_zip: Destination archive path

    Returns:
        The archive path

    Raises:
        PackagingError: If the directory is missing or archiving fails
    """
    if not skill_dir.is_dir():
        raise PackagingError(skill_dir, "not a directory")

    try:
        ensure_dir(output_zip.parent)
        output_zip.unlink(missing_ok=True)
        with zipfile.ZipFile(output_zip, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for path in _iter_files(skill_dir):
                if path.resolve() == output_zip.resolve():
                    continue
                arcname = path.relative_to(skill_dir).as_posix()
                zf.writestr(_zip_info(arcname, path), path.read_bytes())
    except (OSError, zipfile.LargeZipFile) as e:
        output_zip.unlink(missing_ok=True)
        raise PackagingError(skill_dir, str(e)) from e

    return output_zip


def sha256_file(path: Path) -> str:
    """Return the hex sha256 digest of a file's contents."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()
