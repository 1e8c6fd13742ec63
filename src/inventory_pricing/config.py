"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by a ``.env`` file and
``INVENTORY_PRICING_``-prefixed environment variables, plus a cached
``get_settings()`` accessor.

This module has no imports from the ``inventory_pricing`` package so every
other module can import it without cycles.
"""

from __future__ import annotations

import sys
from functools import lru_cache

import structlog
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_PRICING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- General ---------------------------------------------------------------
    production: bool = False
    log_level: str = "INFO"

    # -- Revenue ranges --------------------------------------------------------
    estimated_variance: float = 0.15
    guaranteed_variance: float = 0.05

    @field_validator("estimated_variance", "guaranteed_variance")
    @classmethod
    def variance_must_be_fraction(cls, v: float) -> float:
        """Ensure a variance is a fraction in ``[0, 1)``."""
        if not 0 <= v < 1:
            raise ValueError("variance must be between 0 (inclusive) and 1 (exclusive)")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Normalize the log level name and reject unknown levels."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    Call ``get_settings.cache_clear()`` in tests to reset.

    Returns:
        The application ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)
