"""Audit engine settings.

Every tunable constant the checks and the ranker rely on lives here so
that an embedding application can override it from the environment
(``TICKERSPINE_*``) or a ``.env`` file instead of patching code.

Fields
──────
log_level                   : structlog log level
log_format                  : ``json`` | ``console`` | None (auto-detect)
stale_review_threshold_days : days without an open before a ticker is stale
risk_limit                  : full per-trade risk; half of it is also accepted
risk_tolerance              : relative tolerance around each accepted risk
watched_categories          : watch indices a broker order's ticker must be in
preferred_exchange_prefix   : exchange value prefix that earns a ranking bonus
composite_operators         : characters that mark a formula ticker

Examples:
    >>> from tickerspine.core.settings import AuditSettings
    >>> AuditSettings(risk_limit=8000).accepted_risks
    (4000.0, 8000.0)

Tags:
    settings, configuration, pydantic, environment, tickerspine
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tickerspine.core.errors import ConfigError

CATEGORY_COUNT = 8
DEFAULT_WATCHLIST_INDEX = 5


class AuditSettings(BaseSettings):
    """Configuration for checks, ranking and logging."""

    model_config = SettingsConfigDict(
        env_prefix="TICKERSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: Literal["json", "console"] | None = None

    # ── Staleness ────────────────────────────────────────────────
    stale_review_threshold_days: int = Field(default=90, gt=0)

    # ── Trade risk ───────────────────────────────────────────────
    risk_limit: float = Field(default=6400.0, gt=0)
    risk_tolerance: float = Field(default=0.01, gt=0, lt=1)

    # ── Watch / ranking ──────────────────────────────────────────
    watched_categories: tuple[int, ...] = (0, 1, 4)
    preferred_exchange_prefix: str = "NSE:"
    composite_operators: str = "/*+"

    @field_validator("watched_categories")
    @classmethod
    def _check_category_indices(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("watched_categories must name at least one category")
        for index in value:
            if not 0 <= index < CATEGORY_COUNT:
                raise ValueError(f"category index {index} outside 0..{CATEGORY_COUNT - 1}")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def accepted_risks(self) -> tuple[float, float]:
        """Risk values a paired order may compute to: half and full limit."""
        return (self.risk_limit / 2, self.risk_limit)


@lru_cache(maxsize=1)
def get_settings() -> AuditSettings:
    """Load settings once per process."""
    try:
        return AuditSettings()
    except ValidationError as exc:
        raise ConfigError("Invalid TICKERSPINE_* configuration", cause=exc) from exc


def reset_settings() -> None:
    """Drop the cached settings (for testing)."""
    get_settings.cache_clear()
