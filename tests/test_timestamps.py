"""
Tests for period_spine.timestamps and period_spine.protocols.
"""

from datetime import date

from conftest import Entry
from period_spine.protocols import Dated
from period_spine.timestamps import from_iso8601, local_today, to_iso8601


class TestClock:
    def test_local_today_is_a_date(self):
        today = local_today()
        assert type(today) is date

    def test_iso_roundtrip(self):
        assert from_iso8601(to_iso8601(date(2024, 2, 29))) == date(2024, 2, 29)

    def test_none_passthrough(self):
        assert to_iso8601(None) is None
        assert from_iso8601(None) is None


class TestDatedProtocol:
    def test_entry_is_dated(self):
        assert isinstance(Entry(1, date(2023, 1, 13)), Dated)

    def test_plain_object_is_not_dated(self):
        assert not isinstance(object(), Dated)
