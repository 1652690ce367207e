"""Data models for the ingestion layer."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field


class VertexRecord(BaseModel):
    """A vertex to create: its label and property map."""

    label: str = "member"
    properties: Dict[str, Any] = Field(default_factory=dict)


class EdgeSpec(BaseModel):
    """A directed edge between two vertices named by their identifying property."""

    model_config = ConfigDict(frozen=True)

    from_name: str
    to_name: str
    label: str


class MemberBatch(BaseModel):
    """Member records read from one source along with provenance metadata."""

    source_name: str
    records: List[VertexRecord]
    raw_path: str
    issues: List[str] = Field(default_factory=list)

    def iter_records(self) -> Iterable[VertexRecord]:
        return iter(self.records)


class FriendshipBatch(BaseModel):
    source_name: str
    specs: List[EdgeSpec]
    raw_path: str
    issues: List[str] = Field(default_factory=list)
