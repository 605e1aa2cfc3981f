"""
docusage - Component usage extraction for React documentation sites.

Scans page sources for the components and hooks of a catalog, counts
real usages (JSX tags and hook calls, not imports) and keeps a
representative snippet of each.
"""

__version__ = "0.1.0"

# Models
from docusage.models import (
    EntityType,
    CatalogEntry,
    UsageRecord,
    BuildSummary,
)

# Core functionality
from docusage.extractors.usage_extractor import (
    ExtractorSettings,
    UsageExtractor,
    extract_used_components,
)
from docusage.catalog import CatalogError, CatalogStore, new_catalog
from docusage.discovery import discover_catalog
from docusage.pipeline import build_component_data, run_build, usage_for_page
from docusage.graph import UsageGraph

# File readers
from docusage.readers import read_file_safe, resolve_source

__all__ = [
    # Version
    "__version__",
    # Models
    "EntityType",
    "CatalogEntry",
    "UsageRecord",
    "BuildSummary",
    # Extraction
    "ExtractorSettings",
    "UsageExtractor",
    "extract_used_components",
    # Catalog
    "CatalogError",
    "CatalogStore",
    "new_catalog",
    "discover_catalog",
    # Pipeline
    "build_component_data",
    "run_build",
    "usage_for_page",
    # Graph
    "UsageGraph",
    # Readers
    "read_file_safe",
    "resolve_source",
]
