"""Lazy fluent traversals over a graph view.

A traversal is a chain of generator steps. Nothing touches the graph until
the traversal is consumed by a terminal step (``to_list``, ``count``,
``try_next``) or iterated directly::

    g.V().has_label("member").has("username", "Jill").in_("friendship").values("username").to_list()
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, Optional

from friendgraph.engine.elements import Edge, GraphView, Vertex

Step = Callable[[Iterable[Any]], Iterable[Any]]


def same_value(stored: Any, value: Any) -> bool:
    """Equality that never lets a bool match a number."""
    if isinstance(stored, bool) != isinstance(value, bool):
        return False
    return stored == value


class GraphTraversalSource:
    """Entry point for traversals, bound to a graph or transaction view."""

    def __init__(self, view: GraphView) -> None:
        self._view = view

    def V(self, *vertex_ids: int) -> "Traversal":
        view = self._view

        def source() -> Iterator[Vertex]:
            if not vertex_ids:
                yield from view.iter_vertices()
                return
            for vertex_id in vertex_ids:
                vertex = view.get_vertex(vertex_id)
                if vertex is not None:
                    yield vertex

        return Traversal(view, source)

    def E(self) -> "Traversal":
        view = self._view
        return Traversal(view, lambda: view.iter_edges())


class Traversal:
    def __init__(self, view: GraphView, source: Callable[[], Iterable[Any]], steps: Optional[List[Step]] = None) -> None:
        self._view = view
        self._source = source
        self._steps: List[Step] = steps or []

    def _then(self, step: Step) -> "Traversal":
        return Traversal(self._view, self._source, self._steps + [step])

    def __iter__(self) -> Iterator[Any]:
        stream: Iterable[Any] = self._source()
        for step in self._steps:
            stream = step(stream)
        return iter(stream)

    # filters

    def has_label(self, label: str) -> "Traversal":
        return self._then(lambda stream: (element for element in stream if element.label == label))

    def has(self, key: str, value: Any) -> "Traversal":
        view = self._view

        def step(stream: Iterable[Any]) -> Iterator[Any]:
            for element in stream:
                if not isinstance(element, Vertex):
                    continue
                stored = view.vertex_properties(element.id).get(key)
                if stored is None:
                    continue
                if isinstance(stored, list):
                    if any(same_value(item, value) for item in stored):
                        yield element
                elif same_value(stored, value):
                    yield element

        return self._then(step)

    # adjacency

    def out(self, label: Optional[str] = None) -> "Traversal":
        return self._then(self._walk("out", label))

    def in_(self, label: Optional[str] = None) -> "Traversal":
        return self._then(self._walk("in", label))

    def both(self, label: Optional[str] = None) -> "Traversal":
        return self._then(self._walk("both", label))

    def _walk(self, direction: str, label: Optional[str]) -> Step:
        view = self._view

        def step(stream: Iterable[Any]) -> Iterator[Vertex]:
            for element in stream:
                if not isinstance(element, Vertex):
                    continue
                if direction in ("out", "both"):
                    for edge in view.out_edges(element.id):
                        if label is None or edge.label == label:
                            yield view.get_vertex(edge.in_id)
                if direction in ("in", "both"):
                    for edge in view.in_edges(element.id):
                        if label is None or edge.label == label:
                            yield view.get_vertex(edge.out_id)

        return step

    def out_v(self) -> "Traversal":
        view = self._view
        return self._then(lambda stream: (view.get_vertex(e.out_id) for e in stream if isinstance(e, Edge)))

    def in_v(self) -> "Traversal":
        view = self._view
        return self._then(lambda stream: (view.get_vertex(e.in_id) for e in stream if isinstance(e, Edge)))

    # projection

    def values(self, key: str) -> "Traversal":
        view = self._view

        def step(stream: Iterable[Any]) -> Iterator[Any]:
            for element in stream:
                if not isinstance(element, Vertex):
                    continue
                stored = view.vertex_properties(element.id).get(key)
                if stored is None:
                    continue
                if isinstance(stored, list):
                    yield from stored
                else:
                    yield stored

        return self._then(step)

    # terminal steps

    def to_list(self) -> List[Any]:
        return list(self)

    def count(self) -> int:
        return sum(1 for _ in self)

    def try_next(self) -> Optional[Any]:
        return next(iter(self), None)
