"""
Configuration management for schemabind.

This module provides environment-based configuration using Pydantic BaseSettings
and the per-run ``GenerationOptions`` model that the generation driver consumes.

Environment variables are loaded with the SCHEMABIND_ prefix, e.g.
SCHEMABIND_DIALECT=postgres or SCHEMABIND_CONFLICT_SUFFIX=Val. LOG_LEVEL is
read without a prefix.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

import structlog
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SCHEMABIND_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE

EscapeTarget = Literal["none", "schema", "table", "column", "all"]


def _split_csv(value: object) -> object:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Every generation option has an environment default here so that a CI
    job can pin the dialect or escaping policy without repeating CLI flags.
    List-valued options are kept as comma separated strings and split by
    GenerationOptions.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    dialect: str = Field(default="postgres", description="Target SQL dialect")
    schema_name: str = Field(
        default="", description="Schema used to qualify table and procedure names"
    )
    oracle_type: str = Field(
        default="ora", description="Oracle driver variant (ora or godror)"
    )
    conflict_suffix: str = Field(
        default="Val", description="Suffix appended to conflicting short names"
    )
    escape: str = Field(
        default="none",
        description="Comma separated names to quote (none, schema, table, column, all)",
    )
    custom_package: str = Field(
        default="", description="Package qualifier for custom (non-builtin) types"
    )
    reserved_words: str = Field(
        default="", description="Comma separated additional reserved identifiers"
    )
    initialisms: str = Field(
        default="", description="Comma separated additional initialisms (e.g. API, URI)"
    )

    model_config = SettingsConfigDict(
        env_prefix="SCHEMABIND_",
        env_file=SETTINGS_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class GenerationOptions(BaseModel):
    """Options supplied once per generation run."""

    dialect: str = "postgres"
    schema_name: str = ""
    oracle_type: str = "ora"
    conflict_suffix: str = "Val"
    escape: List[EscapeTarget] = Field(default_factory=lambda: ["none"])
    custom_package: str = ""
    reserved_words: List[str] = Field(default_factory=list)
    initialisms: List[str] = Field(default_factory=list)
    single: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("escape", "reserved_words", "initialisms", mode="before")
    @classmethod
    def _split_lists(cls, value: object) -> object:
        return _split_csv(value)

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, **overrides: object
    ) -> "GenerationOptions":
        """Build options from settings, letting non-None overrides win."""
        settings = settings or get_settings()
        values = {
            "dialect": settings.dialect,
            "schema_name": settings.schema_name,
            "oracle_type": settings.oracle_type,
            "conflict_suffix": settings.conflict_suffix,
            "escape": settings.escape,
            "custom_package": settings.custom_package,
            "reserved_words": settings.reserved_words,
            "initialisms": settings.initialisms,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        logger.debug(
            "configuration.options_resolved",
            dialect=values["dialect"],
            escape=values["escape"],
        )
        return cls(**values)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application.

    Returns:
        Configured Settings instance
    """
    return Settings()
