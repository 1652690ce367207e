"""Graph metadata: data types, constraint modes and schema management."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Type

from friendgraph.errors import DuplicateDeclaration, InvalidConstraint, TransactionError, UnsupportedDataType

if TYPE_CHECKING:  # pragma: no cover
    from friendgraph.engine.graph import PropertyGraph

logger = logging.getLogger(__name__)


class DataType(str, Enum):
    STRING = "String"
    DOUBLE = "Double"
    INTEGER = "Integer"
    BOOLEAN = "Boolean"

    @classmethod
    def from_name(cls, name: str) -> "DataType":
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedDataType(name) from None


# Must cover every DataType member.
DATA_TYPE_CLASSES: Dict[DataType, Type] = {
    DataType.STRING: str,
    DataType.DOUBLE: float,
    DataType.INTEGER: int,
    DataType.BOOLEAN: bool,
}


class Multiplicity(str, Enum):
    """How many edges of a label may connect vertices."""

    MULTI = "MULTI"
    SIMPLE = "SIMPLE"
    MANY2ONE = "MANY2ONE"
    ONE2MANY = "ONE2MANY"
    ONE2ONE = "ONE2ONE"

    @classmethod
    def from_name(cls, name: str) -> "Multiplicity":
        try:
            return cls(name)
        except ValueError:
            raise InvalidConstraint(f"Unknown multiplicity: {name}") from None

    @property
    def single_out(self) -> bool:
        return self in (Multiplicity.MANY2ONE, Multiplicity.ONE2ONE)

    @property
    def single_in(self) -> bool:
        return self in (Multiplicity.ONE2MANY, Multiplicity.ONE2ONE)


class Cardinality(str, Enum):
    """How many values a property key may hold per element."""

    SINGLE = "SINGLE"
    LIST = "LIST"
    SET = "SET"

    @classmethod
    def from_name(cls, name: str) -> "Cardinality":
        try:
            return cls(name)
        except ValueError:
            raise InvalidConstraint(f"Unknown cardinality: {name}") from None


@dataclass(frozen=True)
class VertexLabel:
    name: str


@dataclass(frozen=True)
class EdgeLabel:
    name: str
    multiplicity: Multiplicity = Multiplicity.MULTI


@dataclass(frozen=True)
class PropertyKey:
    name: str
    data_type: DataType
    cardinality: Cardinality = Cardinality.SINGLE

    @property
    def python_type(self) -> Type:
        return DATA_TYPE_CLASSES[self.data_type]

    def accepts(self, value: object) -> bool:
        expected = self.python_type
        # bool is a subclass of int and must not pass as a number.
        if isinstance(value, bool) and expected is not bool:
            return False
        if expected is float and isinstance(value, int):
            return True
        return isinstance(value, expected)

    def coerce(self, value: object) -> object:
        if self.python_type is float and not isinstance(value, float):
            return float(value)  # type: ignore[arg-type]
        return value


@dataclass
class SchemaRegistry:
    """Committed metadata of a graph."""

    vertex_labels: Dict[str, VertexLabel] = field(default_factory=dict)
    edge_labels: Dict[str, EdgeLabel] = field(default_factory=dict)
    property_keys: Dict[str, PropertyKey] = field(default_factory=dict)


class SchemaManagement:
    """Schema-management transaction opened with ``PropertyGraph.open_management``.

    Declarations are staged and only published to the graph on ``commit``.
    Used as a context manager, anything not committed is rolled back on exit.
    """

    def __init__(self, graph: "PropertyGraph") -> None:
        self._graph = graph
        self._vertex_labels: Dict[str, VertexLabel] = {}
        self._edge_labels: Dict[str, EdgeLabel] = {}
        self._property_keys: Dict[str, PropertyKey] = {}
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    def _check_open(self) -> None:
        if not self._open:
            raise TransactionError("Schema management transaction is closed")

    def make_vertex_label(self, name: str) -> VertexLabel:
        self._check_open()
        if name in self._graph.schema.vertex_labels or name in self._vertex_labels:
            raise DuplicateDeclaration("vertex label", name)
        label = VertexLabel(name)
        self._vertex_labels[name] = label
        return label

    def make_edge_label(self, name: str, multiplicity: Multiplicity = Multiplicity.MULTI) -> EdgeLabel:
        self._check_open()
        if name in self._graph.schema.edge_labels or name in self._edge_labels:
            raise DuplicateDeclaration("edge label", name)
        label = EdgeLabel(name, multiplicity)
        self._edge_labels[name] = label
        return label

    def make_property_key(
        self,
        name: str,
        data_type: DataType,
        cardinality: Cardinality = Cardinality.SINGLE,
    ) -> PropertyKey:
        self._check_open()
        if name in self._graph.schema.property_keys or name in self._property_keys:
            raise DuplicateDeclaration("property key", name)
        key = PropertyKey(name, data_type, cardinality)
        self._property_keys[name] = key
        return key

    def vertex_labels(self) -> Dict[str, VertexLabel]:
        return {**self._graph.schema.vertex_labels, **self._vertex_labels}

    def edge_labels(self) -> Dict[str, EdgeLabel]:
        return {**self._graph.schema.edge_labels, **self._edge_labels}

    def property_keys(self) -> Dict[str, PropertyKey]:
        return {**self._graph.schema.property_keys, **self._property_keys}

    def commit(self) -> None:
        self._check_open()
        self._graph._publish_schema(self._vertex_labels, self._edge_labels, self._property_keys)
        logger.debug(
            "Committed %d vertex labels, %d edge labels, %d property keys",
            len(self._vertex_labels),
            len(self._edge_labels),
            len(self._property_keys),
        )
        self._open = False

    def rollback(self) -> None:
        if not self._open:
            return
        self._vertex_labels.clear()
        self._edge_labels.clear()
        self._property_keys.clear()
        self._open = False

    def __enter__(self) -> "SchemaManagement":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.rollback()
