"""Buffered data transactions."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional

from friendgraph.engine.elements import Edge, Vertex
from friendgraph.engine.schema import Cardinality, Multiplicity, PropertyKey
from friendgraph.engine.traversal import GraphTraversalSource
from friendgraph.errors import SchemaViolation, TransactionError

if TYPE_CHECKING:  # pragma: no cover
    from friendgraph.engine.graph import PropertyGraph

logger = logging.getLogger(__name__)


class Transaction:
    """Data transaction opened with ``PropertyGraph.new_transaction``.

    Writes are validated against the committed schema as they are made and
    buffered until ``commit``. Reads through ``traversal()`` see committed
    state overlaid with this transaction's pending writes. Leaving a ``with``
    block without committing rolls the transaction back.
    """

    def __init__(self, graph: "PropertyGraph") -> None:
        self._graph = graph
        self._vertices: Dict[int, Vertex] = {}
        self._properties: Dict[int, Dict[str, Any]] = {}
        self._edges: Dict[int, Edge] = {}
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    def _check_open(self) -> None:
        if not self._open:
            raise TransactionError("Transaction is closed")

    # writes

    def add_vertex(self, label: str, properties: Optional[Mapping[str, Any]] = None) -> Vertex:
        self._check_open()
        if label not in self._graph.schema.vertex_labels:
            raise SchemaViolation(f"Vertex label '{label}' is not declared")
        vertex = Vertex(self._graph.next_id(), label)
        self._vertices[vertex.id] = vertex
        self._properties[vertex.id] = {}
        try:
            for key, value in (properties or {}).items():
                self.add_property(vertex, key, value)
        except SchemaViolation:
            del self._vertices[vertex.id]
            del self._properties[vertex.id]
            raise
        return vertex

    def add_property(self, vertex: Vertex, key: str, value: Any) -> None:
        self._check_open()
        if self.get_vertex(vertex.id) is None:
            raise SchemaViolation(f"Vertex {vertex.id} does not exist")
        property_key = self._graph.schema.property_keys.get(key)
        if property_key is None:
            raise SchemaViolation(f"Property key '{key}' is not declared")
        props = self._properties.setdefault(vertex.id, dict(self._graph.vertex_properties(vertex.id)))

        if property_key.cardinality is Cardinality.SINGLE:
            props[key] = self._checked(property_key, value)
            return

        values = value if isinstance(value, (list, tuple, set)) else [value]
        current = list(props.get(key, []))
        for item in values:
            item = self._checked(property_key, item)
            if property_key.cardinality is Cardinality.SET and item in current:
                continue
            current.append(item)
        props[key] = current

    @staticmethod
    def _checked(property_key: PropertyKey, value: Any) -> Any:
        if not property_key.accepts(value):
            raise SchemaViolation(
                f"Property '{property_key.name}' expects {property_key.data_type.value}, "
                f"got {type(value).__name__}"
            )
        return property_key.coerce(value)

    def add_edge(self, out_vertex: Vertex, label: str, in_vertex: Vertex) -> Edge:
        self._check_open()
        edge_label = self._graph.schema.edge_labels.get(label)
        if edge_label is None:
            raise SchemaViolation(f"Edge label '{label}' is not declared")
        for vertex in (out_vertex, in_vertex):
            if self.get_vertex(vertex.id) is None:
                raise SchemaViolation(f"Vertex {vertex.id} does not exist")

        multiplicity = edge_label.multiplicity
        existing_out = [e for e in self.out_edges(out_vertex.id) if e.label == label]
        if multiplicity.single_out and existing_out:
            raise SchemaViolation(f"{multiplicity.value} edge '{label}' already leaves vertex {out_vertex.id}")
        if multiplicity.single_in and any(e.label == label for e in self.in_edges(in_vertex.id)):
            raise SchemaViolation(f"{multiplicity.value} edge '{label}' already enters vertex {in_vertex.id}")
        if multiplicity is Multiplicity.SIMPLE and any(e.in_id == in_vertex.id for e in existing_out):
            raise SchemaViolation(
                f"SIMPLE edge '{label}' already connects {out_vertex.id} to {in_vertex.id}"
            )

        edge = Edge(self._graph.next_id(), label, out_vertex.id, in_vertex.id)
        self._edges[edge.id] = edge
        return edge

    # lifecycle

    def commit(self) -> None:
        self._check_open()
        try:
            self._graph._apply(list(self._vertices.values()), self._properties, list(self._edges.values()))
        except TransactionError:
            self._discard()
            raise
        logger.debug("Committed %d vertices and %d edges", len(self._vertices), len(self._edges))
        self._discard()

    def rollback(self) -> None:
        if not self._open:
            return
        if self._vertices or self._edges:
            logger.debug("Rolling back %d vertices and %d edges", len(self._vertices), len(self._edges))
        self._discard()

    def _discard(self) -> None:
        self._vertices.clear()
        self._properties.clear()
        self._edges.clear()
        self._open = False

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.rollback()

    # read view

    def traversal(self) -> GraphTraversalSource:
        self._check_open()
        return GraphTraversalSource(self)

    def iter_vertices(self) -> Iterator[Vertex]:
        yield from self._graph.iter_vertices()
        yield from list(self._vertices.values())

    def iter_edges(self) -> Iterator[Edge]:
        yield from self._graph.iter_edges()
        yield from list(self._edges.values())

    def get_vertex(self, vertex_id: int) -> Vertex | None:
        vertex = self._vertices.get(vertex_id)
        if vertex is not None:
            return vertex
        return self._graph.get_vertex(vertex_id)

    def vertex_properties(self, vertex_id: int) -> Dict[str, Any]:
        if vertex_id in self._properties:
            return self._properties[vertex_id]
        return self._graph.vertex_properties(vertex_id)

    def out_edges(self, vertex_id: int) -> Iterator[Edge]:
        yield from self._graph.out_edges(vertex_id)
        yield from [e for e in self._edges.values() if e.out_id == vertex_id]

    def in_edges(self, vertex_id: int) -> Iterator[Edge]:
        yield from self._graph.in_edges(vertex_id)
        yield from [e for e in self._edges.values() if e.in_id == vertex_id]
