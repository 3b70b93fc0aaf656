"""
Clock helpers (stdlib-only).

The grouping walk needs a fallback "final date" when it is given no records.
That date comes from here so tests can swap the provider for a fixed one.

Features:
    - **local_today():** Current date on the local wall clock
    - **to_iso8601() / from_iso8601():** Safe date serialization round-trip

Tags:
    timestamps, clock, date, period-spine, stdlib-only

STDLIB ONLY - NO PYDANTIC.
"""

from collections.abc import Callable
from datetime import date, datetime

TodayProvider = Callable[[], date]


def local_today() -> date:
    """Get the current local date."""
    return datetime.now().date()


def to_iso8601(d: date | None) -> str | None:
    """Convert date to ISO 8601 string."""
    if d is None:
        return None
    return d.isoformat()


def from_iso8601(s: str | None) -> date | None:
    """Parse ISO 8601 string to date."""
    if s is None:
        return None
    return date.fromisoformat(s)
