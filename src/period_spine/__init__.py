"""Period Spine -- calendar period bucketing for dated records.

Manifesto:
    Reporting code keeps asking the same question: "give me all records
    grouped by the week/month/quarter/year they occurred". ``period_spine``
    answers it once, with exact calendar arithmetic and a gap-free,
    ordered result.

    - **Closed set of periods:** WEEK, MONTH, QUARTER, YEAR
    - **Protocol-first:** Records only need ``occurred_on()`` (or a ``key=``)
    - **Read-only results:** A grouping is a snapshot, rebuilt rather than mutated

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (PeriodSpineError)
        protocols.py       Dated protocol
        timestamps.py      "today" provider + ISO helpers (stdlib-only)

    Layer 2 -- Calendar
        periods.py         Period enum: beginning / advance / span / bounds

    Layer 3 -- Aggregation
        grouping.py        GroupedByPeriod + GroupedByWeek/Month/Quarter/Year

    Cross-Cutting Concerns
        logging.py         Structured logging (structlog)
        settings.py        PeriodSpineSettings (pydantic-settings)

Example::

    from period_spine import GroupedByMonth

    for month_start, invoices in GroupedByMonth(invoices).items():
        print(month_start, sum(i.amount for i in invoices))
"""

from period_spine.errors import (
    CalendarError,
    CalendarOverflowError,
    ConfigError,
    ErrorCategory,
    InvalidPeriodError,
    PeriodSpineError,
    RecordDateError,
    ValidationError,
)
from period_spine.grouping import (
    GroupedByMonth,
    GroupedByPeriod,
    GroupedByQuarter,
    GroupedByWeek,
    GroupedByYear,
)
from period_spine.periods import Period
from period_spine.protocols import Dated

__version__ = "0.1.0"

__all__ = [
    # Periods
    "Period",
    # Grouping
    "Dated",
    "GroupedByPeriod",
    "GroupedByWeek",
    "GroupedByMonth",
    "GroupedByQuarter",
    "GroupedByYear",
    # Errors
    "ErrorCategory",
    "PeriodSpineError",
    "CalendarError",
    "CalendarOverflowError",
    "ValidationError",
    "RecordDateError",
    "InvalidPeriodError",
    "ConfigError",
]
