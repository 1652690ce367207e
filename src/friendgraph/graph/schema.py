"""Declarative schema documents and their application to a graph."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from friendgraph.engine.graph import PropertyGraph
from friendgraph.engine.schema import Cardinality, DataType, Multiplicity
from friendgraph.errors import GraphEngineError, SchemaDocumentUnreadable, SchemaError

logger = logging.getLogger(__name__)


class VertexLabelDecl(BaseModel):
    name: str


class EdgeLabelDecl(BaseModel):
    name: str
    multiplicity: str = Multiplicity.MULTI.value


class PropertyKeyDecl(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    data_type: str = Field(alias="dataType")
    cardinality: str = Cardinality.SINGLE.value


class SchemaDocument(BaseModel):
    """Vertex labels, edge labels and property keys to declare, in document order.

    Constraint and data type names are kept as written and resolved when the
    schema is applied, so an unsupported value fails the schema phase rather
    than the document parse.
    """

    model_config = ConfigDict(populate_by_name=True)

    vertex_labels: List[VertexLabelDecl] = Field(default_factory=list, alias="vertexLabels")
    edge_labels: List[EdgeLabelDecl] = Field(default_factory=list, alias="edgeLabels")
    property_keys: List[PropertyKeyDecl] = Field(default_factory=list, alias="propertyKeys")


@dataclass(frozen=True)
class SchemaSummary:
    vertex_labels: int
    edge_labels: int
    property_keys: int


def load_schema_document(path: Path) -> SchemaDocument:
    """Read and validate a JSON schema document."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaDocumentUnreadable(f"Cannot read schema document {path}: {exc}") from exc
    try:
        return SchemaDocument.model_validate_json(raw)
    except ValidationError as exc:
        raise SchemaDocumentUnreadable(f"Invalid schema document {path}: {exc}") from exc


def apply_schema(graph: PropertyGraph, document: SchemaDocument) -> SchemaSummary:
    """Declare every label and property key of ``document`` in one management transaction.

    Nothing is published unless every declaration succeeds. Applying the same
    document twice raises ``DuplicateDeclaration``.
    """
    try:
        with graph.open_management() as mgmt:
            for vertex_label in document.vertex_labels:
                mgmt.make_vertex_label(vertex_label.name)

            for edge_label in document.edge_labels:
                mgmt.make_edge_label(edge_label.name, Multiplicity.from_name(edge_label.multiplicity))

            for property_key in document.property_keys:
                mgmt.make_property_key(
                    property_key.name,
                    DataType.from_name(property_key.data_type),
                    Cardinality.from_name(property_key.cardinality),
                )

            mgmt.commit()
    except GraphEngineError as exc:
        raise SchemaError(f"Schema transaction failed: {exc}") from exc

    summary = SchemaSummary(
        vertex_labels=len(document.vertex_labels),
        edge_labels=len(document.edge_labels),
        property_keys=len(document.property_keys),
    )
    logger.info(
        "Schema applied: %d vertex labels, %d edge labels, %d property keys",
        summary.vertex_labels,
        summary.edge_labels,
        summary.property_keys,
    )
    return summary
