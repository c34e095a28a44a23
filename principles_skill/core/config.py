"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Envelopes addressed to another skill are rejected when this is set
    SKILL_ID: str | None = Field(default=None)
    PRINCIPLES_LOG_LEVEL: str = Field(default="info")
    PRINCIPLES_LOG_DIR: Path | None = Field(default=None)
    PRINCIPLES_LOG_SCHEMA_VERSION: str = Field(default="1.0.0")

    DATA_DIR: Path = Field(default=Path("/data"))
    PERSISTENCE_BACKEND: Literal["tinydb", "memory"] = Field(default="tinydb")
    PERSISTENCE_TABLE_NAME: str = Field(default="principles")
    PERSISTENCE_PARTITION_KEY: str = Field(default="id")

    HEALTHCHECK_API_TOKEN: str | None = Field(default=None)
    ENABLE_HEALTHCHECK_AUTH: bool = Field(default=True)


settings = Settings()


__all__ = ["Settings", "settings"]
