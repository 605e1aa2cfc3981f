"""
Data models for catalog entries and usage reports.

Catalog entries are immutable (frozen) dataclasses. Usage records are
mutable because the extractor updates them in place while scanning.
JSON keys follow the camelCase shape of the documentation site's catalog.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class EntityType(Enum):
    """Kinds of documented entities."""
    COMPONENT = "component"
    HOOK = "hook"
    PAGE = "page"


@dataclass(frozen=True)
class CatalogEntry:
    """One documented entity in the catalog. Immutable and hashable."""
    display_name: str
    type: str = EntityType.COMPONENT.value
    file_path: str = ""
    description: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.type}:{self.display_name}"

    @property
    def is_page(self) -> bool:
        return self.type == EntityType.PAGE.value

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        data = {
            "displayName": self.display_name,
            "type": self.type,
            "filePath": self.file_path,
        }
        if self.description:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogEntry":
        """
        Reconstruct from a catalog dictionary.

        Missing keys fall back to empty values so partially populated
        catalogs still load. An empty displayName yields an entry the
        extractor ignores.
        """
        return cls(
            display_name=data.get("displayName") or "",
            type=data.get("type") or "",
            file_path=data.get("filePath") or "",
            description=data.get("description"),
        )


@dataclass
class UsageRecord:
    """
    How one catalog entity is used within a single page.

    count only tracks invocations (JSX tags and hook calls), never imports.
    first_usage is a snippet of the page source around the best usage seen.
    """
    name: str
    type: str
    count: int = 0
    first_usage: str = ""

    def __str__(self) -> str:
        return f"{self.name} ({self.type}) x{self.count}"

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "name": self.name,
            "type": self.type,
            "count": self.count,
            "firstUsage": self.first_usage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UsageRecord":
        """Reconstruct from dictionary."""
        return cls(
            name=data["name"],
            type=data.get("type", ""),
            count=data.get("count", 0),
            first_usage=data.get("firstUsage", ""),
        )


@dataclass
class BuildSummary:
    """Outcome of a catalog build over all page entries."""
    pages_total: int = 0
    pages_analyzed: int = 0
    pages_with_usage: int = 0
    pages_missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "pages_total": self.pages_total,
            "pages_analyzed": self.pages_analyzed,
            "pages_with_usage": self.pages_with_usage,
            "pages_missing": list(self.pages_missing),
        }
