"""Bulk loading of vertices and name-resolved edges."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from friendgraph.engine.elements import Vertex
from friendgraph.engine.graph import PropertyGraph
from friendgraph.engine.transaction import Transaction
from friendgraph.errors import GraphEngineError, LoadError
from friendgraph.ingest.models import EdgeSpec, VertexRecord

logger = logging.getLogger(__name__)


@dataclass
class ResolutionCache:
    """Outcome of resolving each endpoint name, absence included.

    Owned by a single edge load: created when the load starts and dropped once
    its transaction closes.
    """

    entries: Dict[str, Optional[Vertex]] = field(default_factory=dict)
    lookups: int = 0

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, name: str) -> Optional[Vertex]:
        return self.entries.get(name)

    def store(self, name: str, vertex: Optional[Vertex]) -> None:
        self.entries[name] = vertex
        self.lookups += 1

    @property
    def missing(self) -> List[str]:
        return [name for name, vertex in self.entries.items() if vertex is None]


@dataclass
class EdgeLoadResult:
    created: int
    skipped: List[EdgeSpec]
    cache: ResolutionCache


ResolvedEdge = Tuple[EdgeSpec, Vertex, Vertex]


def lookup_vertex(tx: Transaction, vertex_label: str, identity_property: str, name: str) -> Optional[Vertex]:
    """First vertex of ``vertex_label`` whose identity property equals ``name``."""
    return tx.traversal().V().has_label(vertex_label).has(identity_property, name).try_next()


def resolve_endpoints(
    tx: Transaction,
    specs: Iterable[EdgeSpec],
    cache: ResolutionCache,
    vertex_label: str = "member",
    identity_property: str = "username",
) -> Tuple[List[ResolvedEdge], List[EdgeSpec], ResolutionCache]:
    """Split ``specs`` into resolvable edges and skipped specs.

    Each distinct name is looked up at most once; later references reuse the
    cached vertex or cached absence.
    """
    resolved: List[ResolvedEdge] = []
    skipped: List[EdgeSpec] = []

    def resolve(name: str) -> Optional[Vertex]:
        if name not in cache:
            cache.store(name, lookup_vertex(tx, vertex_label, identity_property, name))
        return cache.get(name)

    for spec in specs:
        out_vertex = resolve(spec.from_name)
        in_vertex = resolve(spec.to_name)
        if out_vertex is None or in_vertex is None:
            skipped.append(spec)
            continue
        resolved.append((spec, out_vertex, in_vertex))

    return resolved, skipped, cache


class BulkLoader:
    """Loads member vertices, then edges between members named by their identity property."""

    def __init__(self, graph: PropertyGraph, vertex_label: str = "member", identity_property: str = "username") -> None:
        self.graph = graph
        self.vertex_label = vertex_label
        self.identity_property = identity_property

    def load_vertices(self, records: Iterable[VertexRecord]) -> int:
        """Create one vertex per record in a single transaction and return how many were created.

        Identity values are not checked for uniqueness.
        """
        count = 0
        try:
            with self.graph.new_transaction() as tx:
                for record in records:
                    tx.add_vertex(record.label or self.vertex_label, record.properties)
                    count += 1
                tx.commit()
        except GraphEngineError as exc:
            raise LoadError(f"Vertex load failed after {count} records: {exc}") from exc

        logger.info("Loaded %d vertices", count)
        return count

    def load_edges(self, specs: Iterable[EdgeSpec]) -> EdgeLoadResult:
        """Create edges whose endpoints both resolve; skip the rest without failing."""
        cache = ResolutionCache()
        try:
            with self.graph.new_transaction() as tx:
                resolved, skipped, cache = resolve_endpoints(
                    tx, specs, cache, self.vertex_label, self.identity_property
                )
                for spec, out_vertex, in_vertex in resolved:
                    tx.add_edge(out_vertex, spec.label, in_vertex)
                tx.commit()
        except GraphEngineError as exc:
            raise LoadError(f"Edge load failed: {exc}") from exc

        for spec in skipped:
            logger.info("Skipped %s edge %s -> %s: endpoint not found", spec.label, spec.from_name, spec.to_name)
        logger.info(
            "Loaded %d edges, skipped %d (%d names looked up)", len(resolved), len(skipped), cache.lookups
        )
        return EdgeLoadResult(created=len(resolved), skipped=skipped, cache=cache)
