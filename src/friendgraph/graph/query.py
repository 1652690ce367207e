"""Relationship queries over a loaded graph."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

from friendgraph.engine.graph import PropertyGraph
from friendgraph.errors import GraphEngineError, QueryError
from friendgraph.graph.labels import FRIENDSHIP, MEMBER, PENDING_FRIENDSHIP, USERNAME

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"


@dataclass
class MemberRelations:
    username: str
    friends: List[Any] = field(default_factory=list)
    pending: List[Any] = field(default_factory=list)

    @property
    def friend_count(self) -> int:
        return len(self.friends)

    @property
    def pending_count(self) -> int:
        return len(self.pending)


class RelationshipQueryService:
    """Read-only adjacency queries against committed graph state."""

    def __init__(self, graph: PropertyGraph, vertex_label: str = MEMBER, identity_property: str = USERNAME) -> None:
        self.graph = graph
        self.vertex_label = vertex_label
        self.identity_property = identity_property

    def find_adjacent(
        self,
        match_property: str,
        match_value: Any,
        edge_label: str,
        direction: Direction,
        project_property: str,
    ) -> List[Any]:
        """Project ``project_property`` of every vertex one ``edge_label`` hop away.

        All vertices matching ``match_property == match_value`` are expanded.
        Unknown vertices or labels give an empty list. Order follows the
        engine and is not guaranteed.
        """
        try:
            direction = Direction(direction)
            matched = self.graph.traversal().V().has_label(self.vertex_label).has(match_property, match_value)
            if direction is Direction.INCOMING:
                adjacent = matched.in_(edge_label)
            else:
                adjacent = matched.out(edge_label)
            results = adjacent.values(project_property).to_list()
        except ValueError as exc:
            raise QueryError(f"Unknown direction {direction!r}") from exc
        except GraphEngineError as exc:
            raise QueryError(f"Query on {match_property}={match_value!r} failed: {exc}") from exc

        logger.debug(
            "%s %s edges of %s=%r -> %d results",
            direction.value,
            edge_label,
            match_property,
            match_value,
            len(results),
        )
        return results

    def member_relations(self, username: str) -> MemberRelations:
        """Members who sent ``username`` a friendship or a pending friendship."""
        return MemberRelations(
            username=username,
            friends=self.find_adjacent(
                self.identity_property, username, FRIENDSHIP, Direction.INCOMING, self.identity_property
            ),
            pending=self.find_adjacent(
                self.identity_property, username, PENDING_FRIENDSHIP, Direction.INCOMING, self.identity_property
            ),
        )
