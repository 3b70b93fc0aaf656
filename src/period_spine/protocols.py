"""
Structural contracts for records that can be grouped by period.

Manifesto:
    Grouping should not force records into a base class. Any object that can
    say when it occurred is groupable; the contract is the shape, not the
    inheritance tree.

    - **Decoupling:** Domain records depend on nothing from period-spine
    - **Testability:** Any object matching the protocol works
    - **Escape hatch:** Objects that do not match can still be grouped by
      passing ``key=`` to GroupedByPeriod

Examples:
    >>> from dataclasses import dataclass
    >>> from datetime import date
    >>> @dataclass
    ... class Trade:
    ...     traded_on: date
    ...     def occurred_on(self) -> date:
    ...         return self.traded_on
    >>> isinstance(Trade(date(2023, 1, 13)), Dated)
    True

Tags:
    protocol, dated-record, contracts, period-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable


@runtime_checkable
class Dated(Protocol):
    """A record that reports the calendar date it occurred on."""

    def occurred_on(self) -> date:
        """Calendar date of the record. A datetime is truncated to its date."""
        ...


__all__ = ["Dated"]
