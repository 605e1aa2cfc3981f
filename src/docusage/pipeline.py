"""
Build pipeline: attach component usage to every page in a catalog.

For each page entry the source file is located, scanned with the usage
extractor against the whole catalog, and the resulting records are stored
on the entry as "usedComponents". Pages whose source cannot be found are
reported and left unchanged; documentation builds are best-effort.
"""
import logging
from pathlib import Path
from typing import Optional

from docusage.catalog import CatalogStore
from docusage.extractors.usage_extractor import UsageExtractor
from docusage.models import BuildSummary, CatalogEntry, EntityType
from docusage.readers import resolve_source

logger = logging.getLogger(__name__)

USED_COMPONENTS_KEY = "usedComponents"


def _analyze_page(
    raw: dict,
    catalog: list[CatalogEntry],
    base_dir: Path,
    extractor: UsageExtractor,
) -> Optional[list[dict]]:
    """Extract usage for one page entry, or None if its source is missing."""
    entry = CatalogEntry.from_dict(raw)
    resolved = resolve_source(entry.file_path, base_dir)
    if resolved is None:
        logger.warning(
            "Could not find source file for %s at %s",
            entry.display_name, entry.file_path
        )
        return None

    path, content = resolved
    records = extractor.extract(content, catalog)
    logger.debug(
        "Found %d used components for %s (%s)",
        len(records), entry.display_name, path
    )
    return [record.to_dict() for record in records]


def build_component_data(
    data: dict,
    base_dir: Path | str,
    extractor: Optional[UsageExtractor] = None,
) -> tuple[dict, BuildSummary]:
    """
    Compute usedComponents for every page entry of a catalog document.

    The input document is not modified.

    Args:
        data: Catalog document (see CatalogStore.load)
        base_dir: Directory the build runs from; page paths are resolved
            against it and its parents
        extractor: Usage extractor to use (default settings if omitted)

    Returns:
        Tuple of (updated document, summary)
    """
    extractor = extractor or UsageExtractor()
    base_dir = Path(base_dir)
    catalog = CatalogStore.entries(data)
    summary = BuildSummary()

    updated_components = []
    for raw in data.get("components", []):
        if not (
            isinstance(raw, dict)
            and raw.get("type") == EntityType.PAGE.value
            and raw.get("filePath")
        ):
            updated_components.append(raw)
            continue

        summary.pages_total += 1
        used = _analyze_page(raw, catalog, base_dir, extractor)
        if used is None:
            summary.pages_missing.append(raw.get("displayName") or raw["filePath"])
            updated_components.append(raw)
            continue

        summary.pages_analyzed += 1
        if used:
            summary.pages_with_usage += 1
        updated = dict(raw)
        updated[USED_COMPONENTS_KEY] = used
        updated_components.append(updated)

    updated_data = dict(data)
    updated_data["components"] = updated_components
    return updated_data, summary


def run_build(
    catalog_path: Path | str,
    base_dir: Optional[Path | str] = None,
    extractor: Optional[UsageExtractor] = None,
) -> BuildSummary:
    """
    Load a catalog, add usage data to its pages and write it back.

    Args:
        catalog_path: Catalog JSON file, updated in place
        base_dir: Directory page paths are resolved from (default: cwd)
        extractor: Usage extractor to use

    Returns:
        Build summary

    Raises:
        FileNotFoundError: If the catalog file does not exist
        CatalogError: If the catalog file is malformed
    """
    data = CatalogStore.load(catalog_path)
    updated, summary = build_component_data(
        data,
        base_dir=Path(base_dir) if base_dir else Path.cwd(),
        extractor=extractor,
    )
    CatalogStore.save(updated, catalog_path)
    return summary


def usage_for_page(
    raw: dict,
    components: list[dict],
    base_dir: Path | str,
    extractor: Optional[UsageExtractor] = None,
) -> list[dict]:
    """
    Usage data for one page at render time.

    Returns the stored usedComponents when the build already computed
    them, otherwise scans the page's source on the fly.

    Args:
        raw: The page's catalog dictionary
        components: All raw catalog dictionaries
        base_dir: Directory page paths are resolved from
        extractor: Usage extractor to use

    Returns:
        List of usage record dictionaries (empty if the source is missing)
    """
    stored = raw.get(USED_COMPONENTS_KEY)
    if stored is not None:
        return stored

    catalog = CatalogStore.entries({"components": components})
    used = _analyze_page(raw, catalog, Path(base_dir), extractor or UsageExtractor())
    return used or []
