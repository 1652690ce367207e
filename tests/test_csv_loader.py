"""Tests for CSV ingestion of members and friendships."""

import pytest

from friendgraph.errors import LoadError
from friendgraph.ingest.csv_loader import load_friendships_csv, load_members_csv
from friendgraph.ingest.models import EdgeSpec


def test_members_csv_skips_rows_without_username(tmp_path):
    path = tmp_path / "members.csv"
    path.write_text(
        "UserName,FirstName,Tel\n"
        "Bob,Bob,123-456-7890\n"
        ",Ghost,000\n"
        "Jill,Jill,\n",
        encoding="utf-8",
    )
    batch = load_members_csv(path)

    assert [r.properties for r in batch.records] == [
        {"username": "Bob", "firstname": "Bob", "tel": "123-456-7890"},
        {"username": "Jill", "firstname": "Jill"},
    ]
    assert all(r.label == "member" for r in batch.records)
    assert batch.issues == ["Row 1 missing username; skipped"]
    assert batch.raw_path == str(path)


def test_members_csv_converts_cells_to_declared_types(tmp_path):
    path = tmp_path / "members.csv"
    path.write_text(
        "username,age,rating,verified\n"
        "Bob,30,4.5,TRUE\n"
        "Jill,forty,3,false\n"
        "Kate,25,,no\n"
        "Mike,,2,false\n",
        encoding="utf-8",
    )
    types = {"username": str, "age": int, "rating": float, "verified": bool}
    batch = load_members_csv(path, property_types=types)

    assert [r.properties for r in batch.records] == [
        {"username": "Bob", "age": 30, "rating": 4.5, "verified": True},
        {"username": "Mike", "rating": 2.0, "verified": False},
    ]
    assert isinstance(batch.records[0].properties["age"], int)
    assert batch.issues == [
        "Row 1 has non-int age; skipped",
        "Row 2 has non-bool verified; skipped",
    ]


def test_members_csv_without_identity_column(tmp_path):
    path = tmp_path / "members.csv"
    path.write_text("email\nbob@example.com\n", encoding="utf-8")
    batch = load_members_csv(path)
    assert batch.records == []
    assert len(batch.issues) == 1


def test_friendships_csv_matches_column_aliases(tmp_path):
    path = tmp_path / "friendships.csv"
    path.write_text(
        "Source,Target,Type\n"
        "Bob,Jill,friendship\n"
        "Jill,,friendship\n"
        "Jill,Mike,pendingFriendship\n",
        encoding="utf-8",
    )
    batch = load_friendships_csv(path)

    assert batch.specs == [
        EdgeSpec(from_name="Bob", to_name="Jill", label="friendship"),
        EdgeSpec(from_name="Jill", to_name="Mike", label="pendingFriendship"),
    ]
    assert batch.issues == ["Row 1 incomplete; skipped"]


def test_friendships_csv_missing_columns(tmp_path):
    path = tmp_path / "friendships.csv"
    path.write_text("from,to\nBob,Jill\n", encoding="utf-8")
    batch = load_friendships_csv(path)
    assert batch.specs == []
    assert "label" in batch.issues[0]


def test_unreadable_csv_raises_load_error(tmp_path):
    with pytest.raises(LoadError):
        load_members_csv(tmp_path / "absent.csv")
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(LoadError):
        load_friendships_csv(empty)
