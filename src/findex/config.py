"""Centralized configuration for findex using Pydantic Settings."""

import codecs
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from findex.indexing.inverted_index import DEFAULT_SHARDS
from findex.indexing.tokenizers import DEFAULT_TOKENIZER, available_tokenizers


class Settings(BaseSettings):
    """Typed configuration loaded from ``FINDEX_*`` environment variables.

    Command-line flags take precedence over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Indexing
    jobs: int = Field(
        default=1,
        description="Worker threads used to index files; zero or negative falls back to the CPU count",
    )
    tokenizer: str = Field(default=DEFAULT_TOKENIZER, description="Tokenizer used to split file content")
    encoding: str = Field(default="utf-8", description="Text encoding used to read indexed files")
    index_shards: int = Field(default=DEFAULT_SHARDS, ge=1, description="Lock stripes in the inverted index")

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="warning", description="Root logging level"
    )
    log_json: bool = Field(default=False, description="Emit structured JSON log lines")

    # Tracing
    tracing_enabled: bool = Field(default=False, description="Print OpenTelemetry spans to stderr")
    service_name: str = Field(default="findex", description="service.name resource attribute for spans")

    @field_validator("tokenizer")
    @classmethod
    def _check_tokenizer(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in available_tokenizers():
            raise ValueError(f"Unknown tokenizer '{value}'. Available: {available_tokenizers()}")
        return normalized

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding '{value}'") from exc
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


def get_settings() -> Settings:
    """Load a fresh settings instance from the environment."""
    return Settings()
