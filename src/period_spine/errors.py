"""
Structured error types for period-spine.

Provides a small typed hierarchy of errors with metadata for categorization,
structured logging and root cause analysis through error chaining.

Calendar bucketing is closed-form arithmetic, so the taxonomy is narrow.
Instead of bare ``ValueError``/``OverflowError`` leaking out of ``datetime``,
every failure surfaces as a PeriodSpineError subclass carrying:
- **Category:** What kind of error (calendar, validation, config)
- **Context:** Period, date and record metadata
- **Cause:** Chained underlying exception

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different concerns
    - **Rich Context:** Errors carry metadata for logging
    - **Error Chaining:** Preserve original exceptions while adding context
    - **Expected outcomes are not errors:** Empty input and lookup misses
      return empty results, they never raise

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                    PeriodSpineError                       │
        │            (category, context, cause)                     │
        ├──────────────────────────────────────────────────────────┤
        │                                                           │
        │  CalendarError        ValidationError       ConfigError   │
        │  (CALENDAR)           (VALIDATION)          (CONFIG)      │
        │       │                    │                              │
        │  CalendarOverflow     RecordDateError                     │
        │                       InvalidPeriodError                  │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = CalendarOverflowError("no period after 9999-12-31")
    >>> error.category
    <ErrorCategory.CALENDAR: 'CALENDAR'>

    >>> error.with_context(period="year", date="9999-12-31").to_dict()["context"]
    {'period': 'year', 'date': '9999-12-31'}

Tags:
    error-handling, exception-hierarchy, error-context, period-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification.

    Attributes:
        CALENDAR: Date arithmetic left the representable range
        VALIDATION: Records or selectors that do not satisfy the contract
        CONFIG: Invalid settings values
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    CALENDAR = "CALENDAR"         # Overflow/underflow at date.min/date.max
    VALIDATION = "VALIDATION"     # Bad record dates, unknown period names
    CONFIG = "CONFIG"             # Invalid settings

    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the metadata period-spine errors usually need; anything
    else goes into ``metadata``. ``to_dict()`` serializes all non-None fields
    for logging.

    Examples:
        >>> ctx = ErrorContext(period="month", date="2023-01-13")
        >>> ctx.to_dict()
        {'period': 'month', 'date': '2023-01-13'}

    Attributes:
        period: Period kind being computed (week, month, quarter, year)
        date: ISO date the computation was performed on
        record_index: Position of the offending record in the input
        metadata: Additional key-value pairs
    """

    period: str | None = None
    date: str | None = None
    record_index: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["period", "date", "record_index"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class PeriodSpineError(Exception):
    """
    Base exception for all period-spine errors.

    Subclasses set ``default_category`` to classify themselves.

    Examples:
        >>> error = PeriodSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> try:
        ...     raise OverflowError("date value out of range")
        ... except OverflowError as e:
        ...     error = PeriodSpineError("advance failed", cause=e)
        >>> error.cause
        OverflowError('date value out of range')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PeriodSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise CalendarOverflowError("Failed").with_context(
                period="year",
                date="9999-12-31",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CALENDAR ERRORS
# =============================================================================


class CalendarError(PeriodSpineError):
    """Calendar arithmetic error."""

    default_category = ErrorCategory.CALENDAR


class CalendarOverflowError(CalendarError):
    """
    A period boundary falls outside ``date.min``..``date.max``.

    Raised by grouping construction instead of aborting, so inputs near the
    ends of the representable range fail atomically.
    """


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(PeriodSpineError):
    """
    Input validation error.

    Data must be fixed; retrying the same call fails the same way.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class RecordDateError(ValidationError):
    """A record reported something other than a calendar date."""


class InvalidPeriodError(ValidationError):
    """A period selector could not be resolved to a known period."""

    def __init__(self, value: Any, message: str | None = None):
        super().__init__(
            message or f"Unknown period: {value!r} (expected week, month, quarter or year)",
            field="period",
            value=value,
        )


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(PeriodSpineError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, PeriodSpineError):
        return error.category
    if isinstance(error, OverflowError):
        return ErrorCategory.CALENDAR
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "PeriodSpineError",
    # Calendar
    "CalendarError",
    "CalendarOverflowError",
    # Validation
    "ValidationError",
    "RecordDateError",
    "InvalidPeriodError",
    # Config
    "ConfigError",
    # Utilities
    "categorize_error",
]
