"""
Tests for period_spine.errors.

Tests cover:
- Category defaults per error type
- Context handling and to_dict()
- Error chaining
- categorize_error()
"""

import pytest

from period_spine.errors import (
    CalendarError,
    CalendarOverflowError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InvalidPeriodError,
    PeriodSpineError,
    RecordDateError,
    ValidationError,
    categorize_error,
)


class TestErrorContext:
    def test_to_dict_excludes_none(self):
        ctx = ErrorContext(period="month")
        assert ctx.to_dict() == {"period": "month"}

    def test_metadata_merged(self):
        ctx = ErrorContext(date="2023-01-13", metadata={"operation": "advance"})
        assert ctx.to_dict() == {"date": "2023-01-13", "operation": "advance"}


class TestCategories:
    @pytest.mark.parametrize(
        "error_cls, category",
        [
            (PeriodSpineError, ErrorCategory.INTERNAL),
            (CalendarError, ErrorCategory.CALENDAR),
            (CalendarOverflowError, ErrorCategory.CALENDAR),
            (ValidationError, ErrorCategory.VALIDATION),
            (RecordDateError, ErrorCategory.VALIDATION),
            (ConfigError, ErrorCategory.CONFIG),
        ],
    )
    def test_default_category(self, error_cls, category):
        assert error_cls("boom").category == category

    def test_explicit_category_wins(self):
        error = PeriodSpineError("boom", category=ErrorCategory.CONFIG)
        assert error.category == ErrorCategory.CONFIG

    def test_overflow_is_calendar_error(self):
        assert issubclass(CalendarOverflowError, CalendarError)
        assert issubclass(CalendarError, PeriodSpineError)


class TestPeriodSpineError:
    def test_with_context_sets_known_fields(self):
        error = CalendarOverflowError("boom").with_context(period="year", date="9999-12-31")
        assert error.context.period == "year"
        assert error.context.date == "9999-12-31"

    def test_with_context_unknown_goes_to_metadata(self):
        error = PeriodSpineError("boom").with_context(operation="advance")
        assert error.context.metadata == {"operation": "advance"}

    def test_with_context_returns_self(self):
        error = PeriodSpineError("boom")
        assert error.with_context(period="week") is error

    def test_to_dict(self):
        error = CalendarOverflowError("boom").with_context(period="year")
        assert error.to_dict() == {
            "error_type": "CalendarOverflowError",
            "message": "boom",
            "category": "CALENDAR",
            "context": {"period": "year"},
        }

    def test_cause_is_chained(self):
        cause = OverflowError("date value out of range")
        error = CalendarOverflowError("boom", cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["cause"] == "date value out of range"

    def test_repr(self):
        assert repr(ConfigError("bad")) == "ConfigError('bad', category=CONFIG)"


class TestValidationErrors:
    def test_field_and_value_in_dict(self):
        error = RecordDateError("bad date", field="occurred_on", value="2023-01-13")
        d = error.to_dict()
        assert d["field"] == "occurred_on"
        assert d["value"] == "'2023-01-13'"

    def test_invalid_period_message(self):
        error = InvalidPeriodError("fortnight")
        assert "fortnight" in str(error)
        assert error.field == "period"
        assert error.value == "fortnight"


class TestCategorizeError:
    def test_period_spine_error(self):
        assert categorize_error(RecordDateError("x")) == ErrorCategory.VALIDATION

    def test_builtin_overflow(self):
        assert categorize_error(OverflowError()) == ErrorCategory.CALENDAR

    def test_builtin_value_error(self):
        assert categorize_error(ValueError()) == ErrorCategory.VALIDATION

    def test_unknown(self):
        assert categorize_error(RuntimeError()) == ErrorCategory.UNKNOWN
