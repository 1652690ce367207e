"""Tests for settings loading."""

from pathlib import Path

from friendgraph.config import DEFAULT_SCHEMA_PATH, Settings


def test_defaults(settings):
    assert settings.schema_path == DEFAULT_SCHEMA_PATH
    assert DEFAULT_SCHEMA_PATH.exists()
    assert settings.members_csv is None
    assert settings.friendships_csv is None
    assert settings.vertex_label == "member"
    assert settings.identity_property == "username"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("FRIENDGRAPH_SCHEMA_PATH", str(tmp_path / "schema.json"))
    monkeypatch.setenv("FRIENDGRAPH_MEMBERS_CSV", str(tmp_path / "members.csv"))
    monkeypatch.setenv("FRIENDGRAPH_LOG_LEVEL", "DEBUG")
    settings = Settings(_env_file=None)
    assert settings.schema_path == tmp_path / "schema.json"
    assert settings.members_csv == Path(tmp_path / "members.csv")
    assert settings.log_level == "DEBUG"
