"""
Extract which catalog entities a page actually uses.

This is a lexical scan, not a parser. It looks for import statements,
JSX open tags and hook calls with regular expressions, so it can be
fooled by JSX-like text inside comments or strings and by shadowed
identifiers. The output feeds documentation pages, which tolerate that.

Scanning runs as independent passes over the same text:
1. imports seed zero-count records (never reported on their own)
2. JSX open tags count component usages
3. assigned hook calls, then direct hook calls, count hook usages

Records are returned in the order they were created, so a name seeded by
an import keeps the position of its import. Records that end with a zero
count (imported but never used) are dropped.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from docusage.constants import (
    JSX_CONTEXT_BEFORE,
    JSX_CONTEXT_AFTER,
    ASSIGNED_HOOK_CONTEXT_BEFORE,
    ASSIGNED_HOOK_CONTEXT_AFTER,
    DIRECT_HOOK_CONTEXT_BEFORE,
    DIRECT_HOOK_CONTEXT_AFTER,
    DEFAULT_JSX_TYPE,
    DEFAULT_HOOK_TYPE,
)
from docusage.extractors.patterns import (
    IMPORT_STATEMENT,
    CAPITALIZED_NAME,
    HOOK_NAME,
    JSX_OPEN_TAG,
    ASSIGNED_HOOK_CALL,
    DIRECT_HOOK_CALL,
)
from docusage.models import CatalogEntry, UsageRecord

logger = logging.getLogger(__name__)

__all__ = [
    "ExtractorSettings",
    "UsageExtractor",
    "build_lookup",
    "extract_used_components",
]


@dataclass(frozen=True)
class ExtractorSettings:
    """Snippet windows and counting options for a UsageExtractor."""
    jsx_before: int = JSX_CONTEXT_BEFORE
    jsx_after: int = JSX_CONTEXT_AFTER
    assigned_hook_before: int = ASSIGNED_HOOK_CONTEXT_BEFORE
    assigned_hook_after: int = ASSIGNED_HOOK_CONTEXT_AFTER
    direct_hook_before: int = DIRECT_HOOK_CONTEXT_BEFORE
    direct_hook_after: int = DIRECT_HOOK_CONTEXT_AFTER
    # When True, a hook call already counted as an assignment
    # (const [a, b] = useThing()) is not counted again as a direct call.
    dedupe_hook_calls: bool = False


def build_lookup(catalog: Iterable[CatalogEntry]) -> dict[str, CatalogEntry]:
    """
    Map display names to catalog entries.

    Entries without a display name are skipped. The first entry wins
    when a name repeats.
    """
    lookup: dict[str, CatalogEntry] = {}
    for entry in catalog:
        if entry.display_name and entry.display_name not in lookup:
            lookup[entry.display_name] = entry
    return lookup


def _snippet(source: str, index: int, before: int, after: int) -> str:
    """Slice a window of source around index, trimmed of whitespace."""
    start = max(0, index - before)
    end = min(len(source), index + after)
    return source[start:end].strip()


class _UsageTally:
    """Per-call accumulator; keeps extraction free of shared state."""

    def __init__(self, lookup: dict[str, CatalogEntry]):
        self.lookup = lookup
        # Insertion order is creation order across all passes
        self.records: dict[str, UsageRecord] = {}

    def seed(self, name: str, snippet: str) -> None:
        """Register an imported name without counting it."""
        if name in self.records:
            return
        entry = self.lookup[name]
        self.records[name] = UsageRecord(
            name=name,
            type=entry.type or DEFAULT_JSX_TYPE,
            count=0,
            first_usage=snippet,
        )

    def add(
        self,
        name: str,
        snippet: str,
        default_type: str,
        replace_snippet: bool,
        require_close: bool = False,
    ) -> None:
        """
        Count one usage of name.

        A new record takes the snippet as-is. For an existing record the
        snippet only replaces the stored one when replace_snippet is set and
        the new snippet is longer (and, with require_close, contains '>').
        """
        existing = self.records.get(name)
        if existing is None:
            entry = self.lookup[name]
            self.records[name] = UsageRecord(
                name=name,
                type=entry.type or default_type,
                count=1,
                first_usage=snippet,
            )
            return

        existing.count += 1
        if not replace_snippet:
            return
        if require_close and '>' not in snippet:
            return
        if len(snippet) > len(existing.first_usage):
            existing.first_usage = snippet

    def used(self) -> list[UsageRecord]:
        return [record for record in self.records.values() if record.count > 0]


class UsageExtractor:
    """
    Find catalog components and hooks used by a page.

    The extractor holds only immutable settings, so one instance can be
    shared across threads and calls.
    """

    def __init__(self, settings: Optional[ExtractorSettings] = None):
        self.settings = settings or ExtractorSettings()

    def extract(
        self,
        page_source: Optional[str],
        catalog: Iterable[CatalogEntry],
    ) -> list[UsageRecord]:
        """
        Scan a page's source for usages of catalog entities.

        Args:
            page_source: Raw text of one source file (may be empty)
            catalog: Every known entity; the whole catalog is searched

        Returns:
            Usage records with count >= 1, in creation order
        """
        if not page_source:
            return []

        tally = _UsageTally(build_lookup(catalog))
        if not tally.lookup:
            return []

        self._scan_imports(page_source, tally)
        self._scan_jsx(page_source, tally)
        self._scan_hooks(page_source, tally)

        used = tally.used()
        logger.debug(
            "Matched %d of %d seen catalog names",
            len(used), len(tally.records)
        )
        return used

    def _scan_imports(self, source: str, tally: _UsageTally) -> None:
        for match in IMPORT_STATEMENT.finditer(source):
            statement = match.group(0)
            names = CAPITALIZED_NAME.findall(statement) + HOOK_NAME.findall(statement)
            for name in names:
                if name in tally.lookup:
                    tally.seed(name, statement)

    def _scan_jsx(self, source: str, tally: _UsageTally) -> None:
        s = self.settings
        for match in JSX_OPEN_TAG.finditer(source):
            name = match.group(1)
            if name not in tally.lookup:
                continue
            snippet = _snippet(source, match.start(), s.jsx_before, s.jsx_after)
            tally.add(
                name,
                snippet,
                default_type=DEFAULT_JSX_TYPE,
                replace_snippet=True,
                require_close=True,
            )

    def _scan_hooks(self, source: str, tally: _UsageTally) -> None:
        s = self.settings
        assigned_offsets = set()

        for match in ASSIGNED_HOOK_CALL.finditer(source):
            name = match.group(1)
            if name not in tally.lookup:
                continue
            offset = match.start(1)
            assigned_offsets.add(offset)
            snippet = _snippet(source, offset, s.assigned_hook_before, s.assigned_hook_after)
            tally.add(name, snippet, default_type=DEFAULT_HOOK_TYPE, replace_snippet=True)

        for match in DIRECT_HOOK_CALL.finditer(source):
            name = match.group(1)
            if name not in tally.lookup:
                continue
            offset = match.start(1)
            if s.dedupe_hook_calls and offset in assigned_offsets:
                continue
            snippet = _snippet(source, offset, s.direct_hook_before, s.direct_hook_after)
            tally.add(name, snippet, default_type=DEFAULT_HOOK_TYPE, replace_snippet=False)


def extract_used_components(
    page_source: Optional[str],
    catalog: Iterable[CatalogEntry],
) -> list[UsageRecord]:
    """
    Convenience wrapper: extract usages with default settings.

    Args:
        page_source: Raw text of one source file
        catalog: Every known entity

    Returns:
        Usage records with count >= 1
    """
    return UsageExtractor().extract(page_source, catalog)
