"""
Shared pytest fixtures for period-spine tests.

This module provides:
- Entry, a minimal Dated record
- A structlog/settings reset around every test for isolation
- Date grids used by the calendar property checks
"""

from dataclasses import dataclass
from datetime import date, timedelta

import pytest
import structlog

from period_spine.settings import reset_settings


@dataclass(frozen=True)
class Entry:
    """Minimal record satisfying the Dated protocol."""

    ident: int
    on: date

    def occurred_on(self) -> date:
        return self.on


def days_between(start: date, end: date) -> list[date]:
    """Every date from start to end (inclusive)."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Reset structlog and cached settings so tests don't leak config."""
    for name in ("PERIOD_SPINE_LOG_LEVEL", "PERIOD_SPINE_JSON_LOGS",
                 "PERIOD_SPINE_SERVICE_NAME", "PERIOD_SPINE_DEFAULT_PERIOD"):
        monkeypatch.delenv(name, raising=False)
    structlog.reset_defaults()
    reset_settings()
    yield
    structlog.reset_defaults()
    reset_settings()


@pytest.fixture
def calendar_grid() -> list[date]:
    """A leap year, a non-leap year and both ends of the date range."""
    return (
        days_between(date(2023, 12, 1), date(2025, 1, 31))
        + days_between(date(1, 1, 7), date(1, 3, 1))
        + days_between(date(9999, 10, 1), date(9999, 12, 31))
    )
