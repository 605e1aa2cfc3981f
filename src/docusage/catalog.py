"""
Persistence for the component catalog.

The catalog is the JSON document the documentation site reads at render
time (content/search.json): a "components" list of entity dictionaries
plus any extra top-level keys, which are preserved untouched.
"""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable

from docusage.constants import CATALOG_FILE_VERSION
from docusage.models import CatalogEntry


class CatalogError(ValueError):
    """Raised when a catalog file cannot be parsed into a catalog document."""
    pass


class CatalogStore:
    """
    Handles loading and saving catalog documents.

    Documents are plain dictionaries so unknown keys written by other
    tools survive a load/save cycle.
    """

    @staticmethod
    def load(filepath: Path | str) -> dict:
        """
        Load a catalog document from a JSON file.

        Args:
            filepath: Path to the catalog file

        Returns:
            The catalog document

        Raises:
            FileNotFoundError: If the file does not exist
            CatalogError: If the file is not valid JSON or has no components list
        """
        filepath = Path(filepath)
        with filepath.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise CatalogError(f"Invalid JSON in catalog {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise CatalogError(f"Catalog {filepath} must be a JSON object")

        components = data.setdefault("components", [])
        if not isinstance(components, list):
            raise CatalogError(f"Catalog {filepath}: 'components' must be a list")

        return data

    @staticmethod
    def save(data: dict, filepath: Path | str) -> None:
        """
        Save a catalog document as indented JSON.

        Args:
            data: Catalog document
            filepath: Destination path (parent directories are created)
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with filepath.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def entries(data: dict) -> list[CatalogEntry]:
        """Convert a document's raw component dictionaries to CatalogEntry objects."""
        return [
            CatalogEntry.from_dict(raw)
            for raw in data.get("components", [])
            if isinstance(raw, dict)
        ]


def new_catalog(entries: Iterable[CatalogEntry]) -> dict:
    """
    Create a fresh catalog document.

    Args:
        entries: Catalog entries to include, in order

    Returns:
        Catalog document ready for CatalogStore.save
    """
    return {
        "version": CATALOG_FILE_VERSION,
        "generatedAt": datetime.now().isoformat(),
        "components": [entry.to_dict() for entry in entries],
    }
