"""Schema, vertex and edge phases run in order against one graph."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from friendgraph.config import Settings
from friendgraph.engine.graph import PropertyGraph
from friendgraph.errors import GraphBootstrapError
from friendgraph.graph.loader import BulkLoader, EdgeLoadResult
from friendgraph.graph.schema import SchemaSummary, apply_schema, load_schema_document
from friendgraph.ingest.csv_loader import load_friendships_csv, load_members_csv
from friendgraph.ingest.models import EdgeSpec, VertexRecord
from friendgraph.ingest.sample_data import sample_friendships, sample_members

logger = logging.getLogger(__name__)


@dataclass
class BootstrapReport:
    schema: SchemaSummary
    vertices_loaded: int
    edges: EdgeLoadResult
    total_vertices: int
    total_edges: int
    timings_ms: Dict[str, float] = field(default_factory=dict)


def property_types(graph: PropertyGraph) -> Dict[str, type]:
    """Python type of every property key declared on ``graph``."""
    return {name: key.python_type for name, key in graph.schema.property_keys.items()}


def load_members(
    settings: Settings, types: Optional[Mapping[str, type]] = None
) -> Tuple[List[VertexRecord], List[str]]:
    """Member records from the configured CSV, or the built-in sample."""
    if not settings.members_csv:
        return sample_members(settings.vertex_label), []
    batch = load_members_csv(
        settings.members_csv,
        label=settings.vertex_label,
        identity_property=settings.identity_property,
        property_types=types,
    )
    for issue in batch.issues:
        logger.warning(issue)
    return list(batch.iter_records()), batch.issues


def load_friendships(settings: Settings) -> Tuple[List[EdgeSpec], List[str]]:
    """Edge specs from the configured CSV, or the built-in sample."""
    if not settings.friendships_csv:
        return sample_friendships(), []
    batch = load_friendships_csv(settings.friendships_csv)
    for issue in batch.issues:
        logger.warning(issue)
    return batch.specs, batch.issues


def load_dataset(
    settings: Settings, types: Optional[Mapping[str, type]] = None
) -> Tuple[List[VertexRecord], List[EdgeSpec], List[str]]:
    """Member records and edge specs from the configured CSVs, or the built-in sample."""
    members, member_issues = load_members(settings, types)
    friendships, friendship_issues = load_friendships(settings)
    return members, friendships, member_issues + friendship_issues


def bootstrap(
    graph: PropertyGraph,
    settings: Settings,
    members: Optional[Sequence[VertexRecord]] = None,
    friendships: Optional[Sequence[EdgeSpec]] = None,
) -> BootstrapReport:
    """Apply the schema, then load vertices, then edges.

    Members or friendships not passed in are read from the configured
    sources inside their phase; member CSV cells are converted to the types
    the schema declares. The first failing phase is logged and its error
    re-raised; later phases do not run.
    """
    timings: Dict[str, float] = {}
    loader = BulkLoader(graph, settings.vertex_label, settings.identity_property)

    def run(phase: str, action):
        start = time.perf_counter()
        try:
            result = action()
        except GraphBootstrapError as exc:
            logger.error("%s phase failed: %s", phase, exc)
            raise
        timings[phase] = (time.perf_counter() - start) * 1000
        logger.info("%s phase finished in %.2f ms", phase, timings[phase])
        return result

    def vertices() -> int:
        records = members if members is not None else load_members(settings, property_types(graph))[0]
        return loader.load_vertices(records)

    def edges() -> EdgeLoadResult:
        specs = friendships if friendships is not None else load_friendships(settings)[0]
        return loader.load_edges(specs)

    schema = run("schema", lambda: apply_schema(graph, load_schema_document(settings.schema_path)))
    vertices_loaded = run("vertices", vertices)
    edge_result = run("edges", edges)

    report = BootstrapReport(
        schema=schema,
        vertices_loaded=vertices_loaded,
        edges=edge_result,
        total_vertices=graph.vertex_count(),
        total_edges=graph.edge_count(),
        timings_ms=timings,
    )
    logger.info("Total vertices: %d, total edges: %d", report.total_vertices, report.total_edges)
    return report
