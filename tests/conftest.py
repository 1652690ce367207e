"""Shared fixtures for the friendgraph test suite."""

import pytest

from friendgraph.config import DEFAULT_SCHEMA_PATH, Settings
from friendgraph.engine.graph import PropertyGraph
from friendgraph.graph.loader import BulkLoader
from friendgraph.graph.schema import apply_schema, load_schema_document
from friendgraph.ingest.sample_data import sample_friendships, sample_members


@pytest.fixture
def settings(monkeypatch):
    for name in ("SCHEMA_PATH", "MEMBERS_CSV", "FRIENDSHIPS_CSV", "LOG_LEVEL"):
        monkeypatch.delenv(f"FRIENDGRAPH_{name}", raising=False)
    return Settings(_env_file=None)


@pytest.fixture
def schema_document():
    return load_schema_document(DEFAULT_SCHEMA_PATH)


@pytest.fixture
def graph():
    with PropertyGraph() as g:
        yield g


@pytest.fixture
def schema_graph(graph, schema_document):
    """Graph with the bundled member schema applied and no data."""
    apply_schema(graph, schema_document)
    return graph


@pytest.fixture
def loaded_graph(schema_graph):
    """Graph holding the five sample members and their six edges."""
    loader = BulkLoader(schema_graph)
    loader.load_vertices(sample_members())
    loader.load_edges(sample_friendships())
    return schema_graph
