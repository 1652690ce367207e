"""Exception hierarchy for the graph bootstrap pipeline."""
from __future__ import annotations


class GraphBootstrapError(RuntimeError):
    """Base class for every error raised by friendgraph."""


class SchemaError(GraphBootstrapError):
    """Raised when the schema phase cannot complete."""


class UnsupportedDataType(SchemaError):
    """Raised when a property key declares a data type outside the supported set."""

    def __init__(self, data_type: str) -> None:
        super().__init__(f"Unsupported data type: {data_type}")
        self.data_type = data_type


class InvalidConstraint(SchemaError):
    """Raised when a multiplicity or cardinality name is not recognised."""


class DuplicateDeclaration(SchemaError):
    """Raised when a label or property key is declared more than once."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} '{name}' is already declared")
        self.kind = kind
        self.name = name


class SchemaDocumentUnreadable(SchemaError):
    """Raised when the schema document cannot be located or parsed."""


class LoadError(GraphBootstrapError):
    """Raised when a vertex or edge load fails and its transaction is rolled back."""


class QueryError(GraphBootstrapError):
    """Raised when a relationship query fails inside the engine."""


class GraphEngineError(GraphBootstrapError):
    """Base class for errors raised by the in-memory graph engine."""


class SchemaViolation(GraphEngineError):
    """Raised when a write does not conform to the declared schema."""


class TransactionError(GraphEngineError):
    """Raised when a closed transaction is used or a commit cannot be applied."""
