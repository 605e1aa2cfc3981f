"""
Graph of component usage across pages.

Uses networkx as the single store for usage relationships. Nodes are
catalog entities; a 'uses' edge runs from a page to every entity it uses
and carries the usage count and snippet.
"""
from typing import Iterable

import networkx as nx

from docusage.models import CatalogEntry, EntityType, UsageRecord

# Node ID delimiter - pipe never appears in identifiers
_ID_DELIM = "|"


def _entity_node_id(name: str) -> str:
    """Generate a unique node ID for a catalog entity."""
    return f"entity{_ID_DELIM}{name}"


class UsageGraph:
    """
    Directed graph of which pages use which components and hooks.

    Node attributes: name, type, file_path, position (catalog order).
    Edge attributes: relation='uses', type, count, first_usage, order.
    """

    def __init__(self):
        self._graph = nx.DiGraph()

    @classmethod
    def from_catalog(cls, data: dict) -> "UsageGraph":
        """Build a graph from a catalog document with usedComponents."""
        graph = cls()
        components = [raw for raw in data.get("components", []) if isinstance(raw, dict)]

        for raw in components:
            graph.add_entity(CatalogEntry.from_dict(raw))

        for raw in components:
            used = raw.get("usedComponents")
            if raw.get("displayName") and used:
                graph.add_usage(
                    raw["displayName"],
                    [UsageRecord.from_dict(item) for item in used],
                )
        return graph

    # --- Node and edge management ---

    def add_entity(self, entry: CatalogEntry) -> str:
        """Add a catalog entity. Returns node ID."""
        node_id = _entity_node_id(entry.display_name)
        if node_id not in self._graph:
            self._graph.add_node(
                node_id,
                name=entry.display_name,
                type=entry.type,
                file_path=entry.file_path,
                position=self._graph.number_of_nodes(),
            )
        return node_id

    def add_usage(self, page: str, records: Iterable[UsageRecord]) -> None:
        """Record that page uses each entity in records."""
        page_id = self.add_entity(CatalogEntry(display_name=page, type=EntityType.PAGE.value))
        for order, record in enumerate(records):
            entity_id = self.add_entity(CatalogEntry(display_name=record.name, type=record.type))
            self._graph.add_edge(
                page_id,
                entity_id,
                relation="uses",
                type=record.type,
                count=record.count,
                first_usage=record.first_usage,
                order=order,
            )

    # --- Queries ---

    @property
    def entity_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def usage_count(self) -> int:
        return self._graph.number_of_edges()

    def _name(self, node_id: str) -> str:
        return self._graph.nodes[node_id]["name"]

    def pages_using(self, name: str) -> list[str]:
        """Names of pages that use the given entity, sorted."""
        node_id = _entity_node_id(name)
        if node_id not in self._graph:
            return []
        return sorted(self._name(p) for p in self._graph.predecessors(node_id))

    def used_by_page(self, page: str) -> list[UsageRecord]:
        """Usage records of a page, in their stored order."""
        page_id = _entity_node_id(page)
        if page_id not in self._graph:
            return []
        edges = sorted(
            self._graph.out_edges(page_id, data=True),
            key=lambda edge: edge[2]["order"],
        )
        return [
            UsageRecord(
                name=self._name(target),
                type=attrs["type"],
                count=attrs["count"],
                first_usage=attrs["first_usage"],
            )
            for _, target, attrs in edges
        ]

    def total_usage(self, name: str) -> int:
        """Sum of usage counts of an entity across all pages."""
        node_id = _entity_node_id(name)
        if node_id not in self._graph:
            return 0
        return sum(
            attrs["count"]
            for _, _, attrs in self._graph.in_edges(node_id, data=True)
        )

    def unused_entities(self) -> list[str]:
        """Components and hooks that no page uses, in catalog order."""
        documented = (EntityType.COMPONENT.value, EntityType.HOOK.value)
        unused = [
            (attrs["position"], attrs["name"])
            for node_id, attrs in self._graph.nodes(data=True)
            if attrs["type"] in documented and self._graph.in_degree(node_id) == 0
        ]
        return [name for _, name in sorted(unused)]

    def most_used(self, limit: int = 10) -> list[tuple[str, int]]:
        """Entities ranked by total usage count (ties broken by name)."""
        totals = [
            (self._name(node_id), self.total_usage(self._name(node_id)))
            for node_id in self._graph.nodes
            if self._graph.in_degree(node_id) > 0
        ]
        totals.sort(key=lambda item: (-item[1], item[0]))
        return totals[:limit]

    def type_breakdown(self, page: str) -> dict[str, int]:
        """
        Summarize what a page uses.

        Returns:
            {'component': n, 'hook': n, 'other': n, 'invocations': total count}
        """
        breakdown = {"component": 0, "hook": 0, "other": 0, "invocations": 0}
        for record in self.used_by_page(page):
            if record.type in (EntityType.COMPONENT.value, EntityType.HOOK.value):
                breakdown[record.type] += 1
            else:
                breakdown["other"] += 1
            breakdown["invocations"] += record.count
        return breakdown
