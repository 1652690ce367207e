"""Element references handed out by the graph engine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Protocol


@dataclass(frozen=True)
class Vertex:
    """Reference to a vertex by internal identity."""

    id: int
    label: str


@dataclass(frozen=True)
class Edge:
    """Reference to a directed edge ``out_id -[label]-> in_id``."""

    id: int
    label: str
    out_id: int
    in_id: int


class GraphView(Protocol):
    """Read interface shared by committed graphs and open transactions."""

    def iter_vertices(self) -> Iterator[Vertex]:
        ...

    def iter_edges(self) -> Iterator[Edge]:
        ...

    def get_vertex(self, vertex_id: int) -> Vertex | None:
        ...

    def vertex_properties(self, vertex_id: int) -> Dict[str, Any]:
        ...

    def out_edges(self, vertex_id: int) -> Iterator[Edge]:
        ...

    def in_edges(self, vertex_id: int) -> Iterator[Edge]:
        ...
