"""Environment-driven settings for period-spine.

``PeriodSpineSettings`` collects the few knobs the library has: how it logs
and which period a grouping uses when the caller does not pick one.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked when loaded, not when used
    - **Environment-driven:** Reads ``PERIOD_SPINE_*`` env vars and ``.env``
    - **Sensible defaults:** Works out of the box with no configuration

Examples:
    >>> PeriodSpineSettings(default_period="Quarter").default_period
    <Period.QUARTER: 'quarter'>

Tags:
    settings, configuration, pydantic, environment, period-spine

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from period_spine.errors import ConfigError, InvalidPeriodError
from period_spine.periods import Period


class PeriodSpineSettings(BaseSettings):
    """Settings shared by every period-spine entry point.

    Fields
    ──────
    log_level       : Structlog log level
    json_logs       : JSON renderer on/off, None to auto-detect from the TTY
    service_name    : ``service.name`` attached to every log line
    default_period  : Period used when GroupedByPeriod is built without one
    """

    model_config = SettingsConfigDict(
        env_prefix="PERIOD_SPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None
    service_name: str = "period-spine"

    # ── Grouping ─────────────────────────────────────────────────
    default_period: Period = Field(
        default=Period.MONTH,
        description="Period used when a grouping is built without one",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {value!r}")
        return level

    @field_validator("default_period", mode="before")
    @classmethod
    def _parse_period(cls, value: object) -> Period:
        try:
            return Period.parse(value)
        except InvalidPeriodError as e:
            raise ValueError(e.message) from e


@lru_cache(maxsize=1)
def get_settings() -> PeriodSpineSettings:
    """Return the process-wide settings, loading them on first use.

    Raises:
        ConfigError: If the environment holds values that fail validation
    """
    try:
        return PeriodSpineSettings()
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise ConfigError("Invalid period-spine settings", cause=e).with_context(fields=fields) from e


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() reloads the environment."""
    get_settings.cache_clear()


__all__ = ["PeriodSpineSettings", "get_settings", "reset_settings"]
