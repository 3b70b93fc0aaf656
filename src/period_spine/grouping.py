"""
Group dated records into contiguous calendar periods.

GroupedByPeriod partitions an unsorted collection of dated records into an
ordered, gap-free mapping from period start to the records of that period.
It is the aggregation primitive behind "all invoices grouped by the month
they occurred": one walk over the calendar from the earliest record's period
to the latest record's period, one bucket per period, empty periods
included.

Manifesto:
    Reports built on ad-hoc ``defaultdict`` grouping silently skip quiet
    months, so a chart of monthly revenue jumps straight from March to June.
    GroupedByPeriod makes the span explicit:

    - **Gap-free keys:** Every period between the first and last record is
      present, with an empty bucket if nothing happened in it
    - **Exactly-once placement:** Each record lands in the single bucket
      whose ``[start, next_start)`` interval contains its date
    - **Stable buckets:** Records keep their input order inside a bucket
    - **Atomic construction:** Overflow at the ends of the calendar raises
      CalendarOverflowError; no half-built grouping escapes

Architecture:
    ::

        records (unsorted)                     Period.MONTH
        ┌───────┬───────┬───────┬───────┐
        │ 02-19 │ 01-13 │ 04-02 │ 01-13 │
        └───────┴───────┴───────┴───────┘
                    │ stable sort by date
                    ▼
        ┌───────┬───────┬───────┬───────┐
        │ 01-13 │ 01-13 │ 02-19 │ 04-02 │   cursor →
        └───────┴───────┴───────┴───────┘
                    │ walk: current = beginning(earliest)
                    │       while current <= latest:
                    │           take records < advance(current)
                    │           reorder them by input position
                    ▼
        {01-01: [a, b], 02-01: [c], 03-01: [], 04-01: [d]}

    Sorting once and advancing a single cursor keeps construction at
    O(n log n + periods).

Examples:
    >>> from datetime import date
    >>> rows = [("a", date(2023, 1, 13)), ("b", date(2023, 3, 2))]
    >>> grouping = GroupedByMonth(rows, key=lambda row: row[1])
    >>> [(str(start), [r[0] for r in bucket]) for start, bucket in grouping.items()]
    [('2023-01-01', ['a']), ('2023-02-01', []), ('2023-03-01', ['b'])]
    >>> grouping.get(date(2023, 1, 31))
    [('a', datetime.date(2023, 1, 13))]
    >>> grouping.get(date(2024, 1, 1)) is None
    True

Performance:
    - **Construction:** O(n log n) sort + O(periods) walk with bisect
    - **Lookup:** O(1), one ``beginning()`` projection plus a dict lookup
    - **Iteration:** O(periods), ascending without a sort step

Tags:
    grouping, bucketing, aggregation, calendar, period, reporting,
    period-spine

Doc-Types:
    - API Reference
    - Temporal Patterns Guide
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Callable, Iterable, Iterator, Mapping
from datetime import date, datetime
from operator import itemgetter
from typing import Any, ClassVar, Generic, TypeVar

from period_spine.errors import CalendarOverflowError, InvalidPeriodError, RecordDateError
from period_spine.logging import get_logger
from period_spine.periods import Period
from period_spine.settings import get_settings
from period_spine.timestamps import TodayProvider, local_today, to_iso8601

T = TypeVar("T")  # Record type

logger = get_logger(__name__)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _in_input_order(entries: list[tuple[int, T]]) -> list[T]:
    return [record for _, record in sorted(entries, key=itemgetter(0))]


class GroupedByPeriod(Mapping, Generic[T]):
    """
    Ordered, read-only mapping from period start to the records in that period.

    Lookups project the queried date onto its period start first, so any
    date inside a period finds that period's bucket.

    Examples:
        >>> from datetime import date
        >>> g = GroupedByPeriod([date(2023, 1, 13), date(2023, 5, 19)], Period.QUARTER, key=lambda d: d)
        >>> list(g)
        [datetime.date(2023, 1, 1), datetime.date(2023, 4, 1)]
        >>> date(2023, 6, 30) in g
        True

    Attributes:
        fixed_period: Period forced by a subclass (GroupedByWeek etc.), None
            for the general class
    """

    fixed_period: ClassVar[Period | None] = None

    def __init__(
        self,
        records: Iterable[T] = (),
        period: Period | str | None = None,
        *,
        key: Callable[[T], date] | None = None,
        today: TodayProvider = local_today,
    ):
        """
        Build the grouping from a snapshot of records.

        Args:
            records: Records to group; the iterable is read once and never mutated
            period: Period to group by; defaults to the subclass's period, then
                to ``default_period`` from settings
            key: Returns a record's date; defaults to ``record.occurred_on()``
            today: Fallback final date when there are no records

        Raises:
            InvalidPeriodError: If period is unknown or conflicts with the subclass
            RecordDateError: If a record does not report a date
            CalendarOverflowError: If the first period start is unrepresentable
        """
        self._period = self._resolve_period(period)
        self._key = key
        self._buckets: dict[date, list[T]] = {}

        snapshot = list(records)
        dated = sorted(
            ((self._date_of(record, index), index, record) for index, record in enumerate(snapshot)),
            key=lambda entry: entry[0],
        )
        dates = [d for d, _, _ in dated]
        ordered = [(index, record) for _, index, record in dated]

        final_date = dates[-1] if dates else today()

        if dates:
            self._buckets = self._walk(dates, ordered, final_date)

        logger.debug(
            "grouping_built",
            period=self._period.value,
            records=len(snapshot),
            buckets=len(self._buckets),
            first=to_iso8601(next(iter(self._buckets), None)),
            last=to_iso8601(next(reversed(self._buckets), None)),
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _resolve_period(self, period: Period | str | None) -> Period:
        fixed = type(self).fixed_period
        if period is None:
            return fixed or get_settings().default_period

        resolved = Period.parse(period)
        if fixed is not None and resolved is not fixed:
            raise InvalidPeriodError(
                period, f"{type(self).__name__} always groups by {fixed.value}, got {period!r}"
            )
        return resolved

    def _date_of(self, record: T, index: int) -> date:
        if self._key is not None:
            value = self._key(record)
        else:
            occurred_on = getattr(record, "occurred_on", None)
            if not callable(occurred_on):
                raise RecordDateError(
                    f"Record {index} has no occurred_on() and no key= was given",
                    field="occurred_on",
                    value=record,
                ).with_context(record_index=index)
            value = occurred_on()

        if not isinstance(value, date):
            raise RecordDateError(
                f"Record {index} reported {type(value).__name__}, expected a date",
                field="occurred_on",
                value=value,
            ).with_context(record_index=index)
        return _as_date(value)

    def _walk(
        self, dates: list[date], ordered: list[tuple[int, T]], final_date: date
    ) -> dict[date, list[T]]:
        buckets: dict[date, list[T]] = {}
        current = self._period.beginning(dates[0])
        if current is None:
            error = CalendarOverflowError(
                f"{self._period.value} containing {dates[0].isoformat()} starts before {date.min.isoformat()}"
            ).with_context(period=self._period.value, date=dates[0].isoformat())
            logger.warning("grouping_overflow", **error.to_dict())
            raise error

        cursor = 0
        while current <= final_date:
            nxt = self._period.advance(current)
            if nxt is None:
                # Last representable period: everything left belongs to it.
                buckets[current] = _in_input_order(ordered[cursor:])
                break

            stop = bisect_left(dates, nxt, lo=cursor)
            buckets[current] = _in_input_order(ordered[cursor:stop])
            cursor = stop
            current = nxt

        return buckets

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def period(self) -> Period:
        """Period this grouping was built with."""
        return self._period

    @property
    def record_count(self) -> int:
        """Total number of records across all buckets."""
        return sum(len(bucket) for bucket in self._buckets.values())

    def periods(self) -> list[date]:
        """Period starts, ascending."""
        return list(self._buckets)

    def get(self, d: date, default: Any = None) -> list[T] | Any:
        """
        Bucket of the period containing d, or default if there is none.

        A date outside the grouped span, or one whose period start is not
        representable, is a miss rather than an error.
        """
        start = self._project(d)
        if start is None:
            return default
        return self._buckets.get(start, default)

    def drain(self) -> Iterator[tuple[date, list[T]]]:
        """
        Hand every bucket over to the caller, ascending, emptying the grouping.

        Single-use: the grouping holds no buckets as soon as drain() returns,
        and a second drain() yields nothing.
        """
        buckets, self._buckets = self._buckets, {}
        return iter(buckets.items())

    def to_dict(self) -> dict[date, list[T]]:
        """Plain dict copy with fresh bucket lists."""
        return {start: list(bucket) for start, bucket in self._buckets.items()}

    def _project(self, d: Any) -> date | None:
        if not isinstance(d, date):
            return None
        return self._period.beginning(_as_date(d))

    def __getitem__(self, d: date) -> list[T]:
        start = self._project(d)
        if start is None or start not in self._buckets:
            raise KeyError(d)
        return self._buckets[start]

    def __contains__(self, d: object) -> bool:
        start = self._project(d)
        return start is not None and start in self._buckets

    def __iter__(self) -> Iterator[date]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(period={self._period.value!r}, "
            f"buckets={len(self._buckets)}, records={self.record_count})"
        )


class GroupedByWeek(GroupedByPeriod[T]):
    """Records grouped by Sunday-to-Saturday week."""

    fixed_period = Period.WEEK


class GroupedByMonth(GroupedByPeriod[T]):
    """Records grouped by calendar month."""

    fixed_period = Period.MONTH


class GroupedByQuarter(GroupedByPeriod[T]):
    """Records grouped by calendar quarter."""

    fixed_period = Period.QUARTER


class GroupedByYear(GroupedByPeriod[T]):
    """Records grouped by calendar year."""

    fixed_period = Period.YEAR


__all__ = [
    "GroupedByPeriod",
    "GroupedByWeek",
    "GroupedByMonth",
    "GroupedByQuarter",
    "GroupedByYear",
]
