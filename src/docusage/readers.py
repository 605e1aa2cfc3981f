"""
File readers for page and component sources.

Page sources are read as UTF-8, falling back to latin-1 (which accepts any
byte sequence). Catalog file paths are resolved against several candidate
roots since builds usually run from a docs directory inside the project.
"""
import logging
from pathlib import Path
from typing import Optional

from docusage.constants import CANDIDATE_ROOT_OFFSETS

logger = logging.getLogger(__name__)

SOURCE_ENCODINGS = ('utf-8', 'latin-1')

# Missing or unreadable files are reported, not raised
_FILE_ACCESS_ERRORS = (FileNotFoundError, PermissionError, IsADirectoryError)


def read_file_safe(filepath: Path | str) -> Optional[str]:
    """
    Read a source file and return its contents.

    Args:
        filepath: Path to file (string or Path object)

    Returns:
        File contents as string, or None if file can't be read
    """
    path = Path(filepath)
    for encoding in SOURCE_ENCODINGS:
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            logger.debug("%s decode failed for %s", encoding, path)
        except _FILE_ACCESS_ERRORS as e:
            logger.warning("%s: %s", type(e).__name__, path)
            return None

    logger.warning("All encodings failed for %s", path)
    return None


def candidate_paths(file_path: str, base_dir: Path | str) -> list[Path]:
    """
    List the locations a catalog filePath may refer to.

    Catalog paths are usually relative to the project root, while builds
    run from a docs directory nested inside it, so the parent of base_dir
    is tried first. The raw path comes last.

    Args:
        file_path: Path as recorded in the catalog
        base_dir: Directory the build runs from

    Returns:
        Unique candidate paths, most likely first
    """
    base = Path(base_dir)
    raw = Path(file_path)

    candidates = [(base / offset / raw).resolve() for offset in CANDIDATE_ROOT_OFFSETS]
    candidates.append(raw)

    unique = []
    for path in candidates:
        if path not in unique:
            unique.append(path)
    return unique


def resolve_source(
    file_path: str,
    base_dir: Path | str,
) -> Optional[tuple[Path, str]]:
    """
    Find and read the source file behind a catalog entry.

    Args:
        file_path: Path as recorded in the catalog
        base_dir: Directory the build runs from

    Returns:
        (resolved path, contents) for the first readable candidate,
        or None if no candidate exists
    """
    if not file_path:
        return None

    for path in candidate_paths(file_path, base_dir):
        if not path.is_file():
            continue
        content = read_file_safe(path)
        if content is not None:
            return path, content

    return None
