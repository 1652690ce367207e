"""CSV ingestion utilities for member records and friendship edges."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from friendgraph.errors import LoadError

from .models import EdgeSpec, FriendshipBatch, MemberBatch, VertexRecord


EDGE_COLUMN_ALIASES: Dict[str, List[str]] = {
    "from_name": ["from_name", "from", "source", "member"],
    "to_name": ["to_name", "to", "target", "friend"],
    "label": ["label", "relationship", "edge_label", "type"],
}

IDENTITY_ALIASES: List[str] = ["username", "user_name", "name"]

BOOLEAN_TEXT: Dict[str, bool] = {"true": True, "false": False}


def _match_column(columns: List[str], candidates: List[str]) -> Optional[str]:
    lower = {c.lower(): c for c in columns}
    for alias in candidates:
        if alias.lower() in lower:
            return lower[alias.lower()]
    return None


def _read_csv(path: Path) -> pd.DataFrame:
    # Cells are read as text and converted per declared property type.
    try:
        return pd.read_csv(path, dtype=str)
    except (OSError, pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise LoadError(f"Cannot read {path}: {exc}") from exc


def _clean(value: object) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _convert(text: str, python_type: Optional[type]) -> Any:
    """Convert cell text to ``python_type``; raises ValueError when it does not parse."""
    if python_type is None or python_type is str:
        return text
    if python_type is bool:
        lowered = text.lower()
        if lowered not in BOOLEAN_TEXT:
            raise ValueError(f"not a boolean: {text!r}")
        return BOOLEAN_TEXT[lowered]
    return python_type(text)


def load_members_csv(
    path: Path,
    source_name: str = "members_csv",
    label: str = "member",
    identity_property: str = "username",
    property_types: Optional[Mapping[str, type]] = None,
) -> MemberBatch:
    """Load member rows into vertex records, one property per non-empty cell.

    ``property_types`` maps declared property keys to their Python type;
    columns without an entry stay text. A row with a cell that does not
    convert is skipped and reported.
    """
    df = _read_csv(path)
    types = property_types or {}
    aliases = [identity_property] + [a for a in IDENTITY_ALIASES if a != identity_property]
    identity_column = _match_column(df.columns.tolist(), aliases)

    records: List[VertexRecord] = []
    issues: List[str] = []

    if identity_column is None:
        issues.append(f"No '{identity_property}' column found; no members loaded")
        return MemberBatch(source_name=source_name, records=records, raw_path=str(path), issues=issues)

    for idx, row in df.iterrows():
        identity = _clean(row.get(identity_column))
        if identity is None:
            issues.append(f"Row {idx} missing {identity_property}; skipped")
            continue

        properties: Dict[str, Any] = {}
        bad_column = None
        for column in df.columns:
            name = identity_property if column == identity_column else column.strip().lower()
            value = _clean(row.get(column))
            if value is None:
                continue
            try:
                properties[name] = _convert(value, types.get(name))
            except ValueError:
                bad_column = name
                break
        if bad_column is not None:
            expected = types[bad_column].__name__
            issues.append(f"Row {idx} has non-{expected} {bad_column}; skipped")
            continue
        records.append(VertexRecord(label=label, properties=properties))

    return MemberBatch(source_name=source_name, records=records, raw_path=str(path), issues=issues)


def load_friendships_csv(path: Path, source_name: str = "friendships_csv") -> FriendshipBatch:
    """Load edge specs from rows of (from, to, label)."""
    df = _read_csv(path)
    column_cache: Dict[str, Optional[str]] = {
        field: _match_column(df.columns.tolist(), aliases)
        for field, aliases in EDGE_COLUMN_ALIASES.items()
    }

    specs: List[EdgeSpec] = []
    issues: List[str] = []

    missing = [field for field, column in column_cache.items() if column is None]
    if missing:
        issues.append(f"Missing columns {', '.join(missing)}; no friendships loaded")
        return FriendshipBatch(source_name=source_name, specs=specs, raw_path=str(path), issues=issues)

    for idx, row in df.iterrows():
        data = {field: _clean(row.get(column)) for field, column in column_cache.items()}
        if not all(data.values()):
            issues.append(f"Row {idx} incomplete; skipped")
            continue
        specs.append(EdgeSpec(**data))

    return FriendshipBatch(source_name=source_name, specs=specs, raw_path=str(path), issues=issues)
