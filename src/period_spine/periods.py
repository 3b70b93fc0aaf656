"""
Calendar period strategies: week, month, quarter and year.

Period is the core abstraction for calendar bucketing. Each member answers
two questions about any date: where does the period containing it begin,
and where does the following period begin. Grouping code only ever calls
those two operations, so it never special-cases calendar arithmetic.

Manifesto:
    Reporting asks "all records grouped by the month they occurred". Doing
    that with ad-hoc date math leads to bugs: December rolls into the wrong
    year, quarters start in February, weeks start on whatever day the first
    record happened to fall on.

    Period makes the boundaries explicit:
    - **beginning(d):** Idempotent projection onto the period start
    - **advance(k):** Step from a period start to the next period start
    - **Overflow is a value:** Both return None instead of raising when the
      answer is outside ``date.min``..``date.max``

Architecture:
    ::

        ┌───────────────────────────────────────────────────────────┐
        │                    Period (closed enum)                    │
        └───────────────────────────────────────────────────────────┘

        Member    beginning(2023-02-15)    advance(beginning)
        ───────   ─────────────────────    ──────────────────
        WEEK      2023-02-12 (Sunday)      2023-02-19
        MONTH     2023-02-01               2023-03-01
        QUARTER   2023-01-01               2023-04-01
        YEAR      2023-01-01               2024-01-01

        Timeline (QUARTER):
        ──┬──────────┬──────────┬──────────┬──────────┬──
          │ 01-01    │ 04-01    │ 07-01    │ 10-01    │
          └──────────┴──────────┴──────────┴──────────┘
               Period.QUARTER.span(02-13, 08-30) yields 01-01, 04-01, 07-01

    Weeks start on Sunday: ``beginning(2023-01-13)`` is ``2023-01-08``.

Invariants:
    - ``beginning(beginning(d)) == beginning(d)``
    - ``beginning(d) <= d``
    - ``advance(k) > k`` and ``beginning(advance(k)) == advance(k)`` for
      every period start ``k``

Examples:
    >>> from datetime import date
    >>> Period.MONTH.beginning(date(2023, 1, 13))
    datetime.date(2023, 1, 1)
    >>> Period.QUARTER.advance(date(2023, 10, 1))
    datetime.date(2024, 1, 1)
    >>> Period.YEAR.advance(date(9999, 1, 1)) is None
    True
    >>> [str(d) for d in Period.WEEK.span(date(2023, 1, 13), date(2023, 1, 19))]
    ['2023-01-08', '2023-01-15']

Tags:
    temporal, calendar, period, bucketing, week, month, quarter, year,
    period-spine

Doc-Types:
    - API Reference
    - Temporal Patterns Guide
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date, timedelta
from enum import Enum
from functools import wraps
from typing import Any

from period_spine.errors import CalendarOverflowError, InvalidPeriodError

DateFn = Callable[[date], "date | None"]


def _calendar_safe(fn: Callable[[date], date]) -> DateFn:
    """Turn out-of-range date arithmetic into None."""

    @wraps(fn)
    def wrapper(d: date) -> date | None:
        try:
            return fn(d)
        except (OverflowError, ValueError):
            return None

    return wrapper


# =============================================================================
# CALENDAR ARITHMETIC
# =============================================================================


@_calendar_safe
def _beginning_of_week(d: date) -> date:
    days_since_sunday = (d.weekday() + 1) % 7  # Monday = 0, Sunday = 6
    return d - timedelta(days=days_since_sunday)


@_calendar_safe
def _next_week(d: date) -> date:
    return d + timedelta(weeks=1)


@_calendar_safe
def _beginning_of_month(d: date) -> date:
    return d.replace(day=1)


@_calendar_safe
def _next_month(d: date) -> date:
    if d.month == 12:
        return date(d.year + 1, 1, 1)
    return date(d.year, d.month + 1, 1)


@_calendar_safe
def _beginning_of_quarter(d: date) -> date:
    first_month = 3 * ((d.month - 1) // 3) + 1
    return date(d.year, first_month, 1)


@_calendar_safe
def _next_quarter(d: date) -> date:
    months = d.month - 1 + 3
    return date(d.year + months // 12, months % 12 + 1, 1)


@_calendar_safe
def _beginning_of_year(d: date) -> date:
    return date(d.year, 1, 1)


@_calendar_safe
def _next_year(d: date) -> date:
    return date(d.year + 1, 1, 1)


# =============================================================================
# PERIOD
# =============================================================================


class Period(str, Enum):
    """
    Closed set of calendar periods used as grouping selectors.

    Members are stateless; behavior comes from a dispatch table of
    ``(beginning, advance)`` function pairs.

    Attributes:
        WEEK: Sunday through Saturday
        MONTH: Calendar month
        QUARTER: January, April, July or October through the following two months
        YEAR: Calendar year
    """

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @classmethod
    def parse(cls, value: Any) -> Period:
        """
        Resolve a member, its value or its name (case-insensitive).

        Raises:
            InvalidPeriodError: If value names no known period
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidPeriodError(value)

    def beginning(self, d: date) -> date | None:
        """Start of the period containing d, or None if unrepresentable."""
        return _STRATEGIES[self][0](d)

    def advance(self, d: date) -> date | None:
        """Start of the period after the one starting at d, or None on overflow."""
        return _STRATEGIES[self][1](d)

    def bounds(self, d: date) -> tuple[date, date | None]:
        """
        Half-open interval ``[start, end)`` of the period containing d.

        ``end`` is None when d is in the last representable period.

        Raises:
            CalendarOverflowError: If the period start itself is unrepresentable
        """
        start = self.beginning(d)
        if start is None:
            raise self._overflow("beginning", d)
        return start, self.advance(start)

    def span(self, start: date, end: date) -> Iterator[date]:
        """
        Generate every period start from the period of start to that of end (inclusive).

        Raises:
            CalendarOverflowError: If either end of the span is unrepresentable
        """
        current = self.beginning(start)
        if current is None:
            raise self._overflow("beginning", start)
        last = self.beginning(end)
        if last is None:
            raise self._overflow("beginning", end)

        while current <= last:
            yield current
            nxt = self.advance(current)
            if nxt is None:
                # current is the last representable period, so it is also `last`
                return
            current = nxt

    def _overflow(self, operation: str, d: date) -> CalendarOverflowError:
        return CalendarOverflowError(
            f"{self.value} {operation} of {d.isoformat()} is outside the representable date range"
        ).with_context(period=self.value, date=d.isoformat(), operation=operation)

    def __str__(self) -> str:
        return self.value


_STRATEGIES: dict[Period, tuple[DateFn, DateFn]] = {
    Period.WEEK: (_beginning_of_week, _next_week),
    Period.MONTH: (_beginning_of_month, _next_month),
    Period.QUARTER: (_beginning_of_quarter, _next_quarter),
    Period.YEAR: (_beginning_of_year, _next_year),
}


__all__ = ["Period"]
