"""In-memory property graph backed by networkx."""
from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, Iterator, List

import networkx as nx

from friendgraph.engine.elements import Edge, Vertex
from friendgraph.engine.schema import EdgeLabel, PropertyKey, SchemaManagement, SchemaRegistry, VertexLabel
from friendgraph.engine.transaction import Transaction
from friendgraph.engine.traversal import GraphTraversalSource
from friendgraph.errors import DuplicateDeclaration, TransactionError

logger = logging.getLogger(__name__)


class PropertyGraph:
    """Property graph with declared schema and transactional writes.

    Vertices are stored as nodes of a ``networkx.MultiDiGraph`` keyed by their
    internal id; edges are keyed by their own id so parallel edges survive.
    """

    def __init__(self) -> None:
        self.schema = SchemaRegistry()
        self._store = nx.MultiDiGraph()
        self._ids = itertools.count(1)
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise TransactionError("Graph is closed")

    def next_id(self) -> int:
        return next(self._ids)

    # transactions

    def open_management(self) -> SchemaManagement:
        self._check_open()
        return SchemaManagement(self)

    def new_transaction(self) -> Transaction:
        self._check_open()
        return Transaction(self)

    def traversal(self) -> GraphTraversalSource:
        return GraphTraversalSource(self)

    def _publish_schema(
        self,
        vertex_labels: Dict[str, VertexLabel],
        edge_labels: Dict[str, EdgeLabel],
        property_keys: Dict[str, PropertyKey],
    ) -> None:
        self._check_open()
        for kind, staged, committed in (
            ("vertex label", vertex_labels, self.schema.vertex_labels),
            ("edge label", edge_labels, self.schema.edge_labels),
            ("property key", property_keys, self.schema.property_keys),
        ):
            for name in staged:
                if name in committed:
                    raise DuplicateDeclaration(kind, name)
        self.schema.vertex_labels.update(vertex_labels)
        self.schema.edge_labels.update(edge_labels)
        self.schema.property_keys.update(property_keys)

    def _apply(self, vertices: List[Vertex], properties: Dict[int, Dict[str, Any]], edges: List[Edge]) -> None:
        self._check_open()
        new_ids = {vertex.id for vertex in vertices}
        for edge in edges:
            for vertex_id in (edge.out_id, edge.in_id):
                if vertex_id not in self._store and vertex_id not in new_ids:
                    raise TransactionError(f"Edge {edge.id} references unknown vertex {vertex_id}")
        for vertex in vertices:
            self._store.add_node(vertex.id, label=vertex.label, properties={})
        for vertex_id, props in properties.items():
            self._store.nodes[vertex_id]["properties"] = props
        for edge in edges:
            self._store.add_edge(edge.out_id, edge.in_id, key=edge.id, label=edge.label)

    # read view

    def iter_vertices(self) -> Iterator[Vertex]:
        for vertex_id, data in self._store.nodes(data=True):
            yield Vertex(vertex_id, data["label"])

    def iter_edges(self) -> Iterator[Edge]:
        for out_id, in_id, key, data in self._store.edges(keys=True, data=True):
            yield Edge(key, data["label"], out_id, in_id)

    def get_vertex(self, vertex_id: int) -> Vertex | None:
        if vertex_id not in self._store:
            return None
        return Vertex(vertex_id, self._store.nodes[vertex_id]["label"])

    def vertex_properties(self, vertex_id: int) -> Dict[str, Any]:
        if vertex_id not in self._store:
            return {}
        return self._store.nodes[vertex_id]["properties"]

    def out_edges(self, vertex_id: int) -> Iterator[Edge]:
        if vertex_id not in self._store:
            return
        for out_id, in_id, key, data in self._store.out_edges(vertex_id, keys=True, data=True):
            yield Edge(key, data["label"], out_id, in_id)

    def in_edges(self, vertex_id: int) -> Iterator[Edge]:
        if vertex_id not in self._store:
            return
        for out_id, in_id, key, data in self._store.in_edges(vertex_id, keys=True, data=True):
            yield Edge(key, data["label"], out_id, in_id)

    def vertex_count(self) -> int:
        return self._store.number_of_nodes()

    def edge_count(self) -> int:
        return self._store.number_of_edges()

    def close(self) -> None:
        if not self._closed:
            logger.debug("Closing graph with %d vertices and %d edges", self.vertex_count(), self.edge_count())
        self._closed = True

    def __enter__(self) -> "PropertyGraph":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
