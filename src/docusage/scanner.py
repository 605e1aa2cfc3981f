"""
File scanner for locating React source files.

Provides utilities for:
- Recursively scanning directories for files
- Skipping dependency, build and VCS directories
- Filtering out stories, tests, configs and type declaration files
"""
import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterator, Optional

from docusage.constants import (
    DEFAULT_IGNORE_DIRS,
    SOURCE_EXTENSIONS,
    EXCLUDED_FILE_PATTERNS,
)

logger = logging.getLogger(__name__)


def should_ignore(path: Path, ignore_dirs: frozenset[str]) -> bool:
    """
    Check if a path should be ignored based on directory names.

    Args:
        path: Path to check
        ignore_dirs: Set of directory names to ignore

    Returns:
        True if any path component is in ignore_dirs
    """
    return any(part in ignore_dirs for part in path.parts)


def get_all_files(
    directory: Path | str,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> Iterator[Path]:
    """
    Get all files recursively from a directory.

    Args:
        directory: Path to directory (string or Path object)
        ignore_dirs: Set of directory names to ignore (default: DEFAULT_IGNORE_DIRS)

    Yields:
        Path objects pointing to files

    Raises:
        FileNotFoundError: If directory doesn't exist
        NotADirectoryError: If path points to a file, not a directory
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    dir_path = Path(directory)

    if not dir_path.exists():
        raise FileNotFoundError(f"Directory does not exist: {dir_path}")

    if not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")

    for item in sorted(dir_path.rglob('*')):
        try:
            # Only components below the scan root count toward ignoring
            if should_ignore(item.relative_to(dir_path), ignore_dirs):
                continue

            if item.is_file():
                yield item
        except PermissionError:
            logger.warning("Permission denied for %s", item)
            continue


def is_source_file(filepath: Path | str) -> bool:
    """
    Check if a file is a JS/TS source file based on its extension.

    Args:
        filepath: Path to file (string or Path object)

    Returns:
        True if file has a source extension, False otherwise
    """
    return Path(filepath).suffix.lower() in SOURCE_EXTENSIONS


def is_excluded(filepath: Path | str) -> bool:
    """
    Check if a file name matches one of the excluded patterns.

    Args:
        filepath: Path to file (string or Path object)

    Returns:
        True for stories, tests, configs and .d.ts files
    """
    name = Path(filepath).name
    return any(fnmatch(name, pattern) for pattern in EXCLUDED_FILE_PATTERNS)


def find_source_files(
    directory: Path | str,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> list[Path]:
    """
    Collect the source files a catalog should be built from.

    Args:
        directory: Path to directory (string or Path object)
        ignore_dirs: Set of directory names to ignore (default: DEFAULT_IGNORE_DIRS)

    Returns:
        Sorted list of source file paths

    Raises:
        FileNotFoundError: If directory doesn't exist
        NotADirectoryError: If path points to a file, not a directory
    """
    return [
        path for path in get_all_files(directory, ignore_dirs=ignore_dirs)
        if is_source_file(path) and not is_excluded(path)
    ]
