"""Application configuration utilities."""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "data" / "schema.json"


class Settings(BaseSettings):
    """Centralized configuration loaded from environment or .env file."""

    model_config = SettingsConfigDict(
        env_prefix="FRIENDGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    schema_path: Path = Field(default=DEFAULT_SCHEMA_PATH, description="JSON schema document to apply")
    members_csv: Optional[Path] = Field(default=None, description="Member records; sample data when unset")
    friendships_csv: Optional[Path] = Field(default=None, description="Edge specs; sample data when unset")
    vertex_label: str = "member"
    identity_property: str = "username"
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


def configure_logging(verbose: bool = False, level: Optional[str] = None) -> None:
    if verbose:
        resolved = logging.DEBUG
    else:
        resolved = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=resolved, format="%(asctime)s %(levelname)s %(message)s")
