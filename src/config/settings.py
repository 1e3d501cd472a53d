# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings. The scoring and
embedding code never reads the environment directly; callers build a
Settings object and pass the relevant values in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from originality_guard.core.models import OriginalityConfig


class ConfigurationError(Exception):
    """Raised when configuration values are unusable."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Embedding provider ===
    openai_api_key: str = ""
    embedding_base_url: str = "https://api.openai.com/v1"
    embedding_model: str = "text-embedding-3-small"
    embedding_timeout_s: float = 30.0
    embedding_max_retries: int = 3
    embedding_batch_size: int = 100

    # === Embedding cache ===
    embedding_cache_enabled: bool = True
    embedding_cache_ttl_s: float = 24 * 60 * 60

    # === Originality thresholds (not range-checked) ===
    originality_max_cosine_similarity: float = 0.82
    originality_max_jaccard_similarity: float = 0.18
    originality_min_score: float = 75
    originality_block_source_disclosure: bool = True
    originality_enable_semantic_checks: bool = True

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        errors: list[str] = []

        if self.embedding_max_retries < 1:
            errors.append("EMBEDDING_MAX_RETRIES must be >= 1")
        if self.embedding_batch_size < 1:
            errors.append("EMBEDDING_BATCH_SIZE must be >= 1")
        if self.embedding_cache_ttl_s <= 0:
            errors.append("EMBEDDING_CACHE_TTL_S must be > 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def originality_config(self) -> OriginalityConfig:
        """Build the default OriginalityConfig from settings."""
        return OriginalityConfig(
            max_cosine_similarity=self.originality_max_cosine_similarity,
            max_jaccard_similarity=self.originality_max_jaccard_similarity,
            min_originality_score=self.originality_min_score,
            block_source_disclosure=self.originality_block_source_disclosure,
            enable_semantic_checks=self.originality_enable_semantic_checks,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If a value is unusable.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
