"""
Catalog discovery: find documentable entities in a React source tree.

Every exported name becomes a catalog entry when it looks like a hook
(useThing) or a component (PascalCase). Components that live under a
pages/ directory are classified as pages.
"""
import logging
from pathlib import Path
from typing import Optional

from docusage.constants import PAGES_DIR_NAME
from docusage.extractors import js_extractor
from docusage.extractors.patterns import HOOK_NAME, CAPITALIZED_NAME
from docusage.models import CatalogEntry, EntityType
from docusage.readers import read_file_safe
from docusage.scanner import find_source_files

logger = logging.getLogger(__name__)


def classify_name(name: str, relative_path: Path) -> Optional[EntityType]:
    """
    Decide what kind of entity an exported name is.

    Args:
        name: Exported identifier
        relative_path: Path of the defining file, relative to the project root

    Returns:
        EntityType, or None for names that are neither hooks nor components
    """
    if HOOK_NAME.fullmatch(name):
        return EntityType.HOOK
    if not CAPITALIZED_NAME.fullmatch(name):
        return None
    if PAGES_DIR_NAME in relative_path.parent.parts:
        return EntityType.PAGE
    return EntityType.COMPONENT


def extract_entries(content: str, relative_path: Path) -> list[CatalogEntry]:
    """
    Extract catalog entries from one source file.

    Args:
        content: JS/TS source code
        relative_path: Path of the file, relative to the project root

    Returns:
        One entry per exported hook, component or page
    """
    entries = []
    for name in js_extractor.extract_exports(content):
        entity_type = classify_name(name, relative_path)
        if entity_type is None:
            continue
        entries.append(CatalogEntry(
            display_name=name,
            type=entity_type.value,
            file_path=relative_path.as_posix(),
            description=js_extractor.extract_jsdoc(content, name),
        ))
    return entries


def discover_catalog(
    directory: Path | str,
    project_root: Optional[Path | str] = None,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> list[CatalogEntry]:
    """
    Scan a source tree and build catalog entries for it.

    Args:
        directory: Directory to scan
        project_root: Root that recorded file paths are relative to
            (default: directory)
        ignore_dirs: Directory names to skip (default: DEFAULT_IGNORE_DIRS)

    Returns:
        Catalog entries with unique display names, in file order

    Raises:
        FileNotFoundError: If directory doesn't exist
        NotADirectoryError: If directory is a file
    """
    directory = Path(directory).resolve()
    root = Path(project_root).resolve() if project_root else directory

    catalog: dict[str, CatalogEntry] = {}

    for filepath in find_source_files(directory, ignore_dirs=ignore_dirs):
        content = read_file_safe(filepath)
        if content is None:
            continue

        try:
            relative_path = filepath.relative_to(root)
        except ValueError:
            relative_path = filepath

        for entry in extract_entries(content, relative_path):
            if entry.display_name in catalog:
                logger.debug(
                    "Duplicate export %s in %s (already from %s)",
                    entry.display_name, relative_path,
                    catalog[entry.display_name].file_path
                )
                continue
            catalog[entry.display_name] = entry

    logger.debug("Discovered %d catalog entries in %s", len(catalog), directory)
    return list(catalog.values())
