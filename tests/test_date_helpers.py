"""Tests for date parsing and display helpers."""

from datetime import date

from expense_tracker.utils.date_helpers import (
    format_display_date,
    format_table_date,
    is_future,
    now_iso,
    parse_date,
)


class TestDateHelpers:
    """Tests for date_helpers."""

    def test_parse_date(self) -> None:
        assert parse_date("2025-01-31") == date(2025, 1, 31)
        assert parse_date("2025/01/31") == date(2025, 1, 31)
        assert parse_date("31-01-2025") is None
        assert parse_date("") is None

    def test_is_future(self) -> None:
        ref = date(2025, 6, 15)
        assert is_future(date(2025, 6, 16), ref)
        assert not is_future(ref, ref)

    def test_table_date(self) -> None:
        assert format_table_date("2025-12-26") == "26 Dec 2025"
        assert format_table_date("garbage") == "garbage"

    def test_display_formats(self) -> None:
        assert format_display_date("2025-12-26") == "26/12/2025"
        assert format_display_date("2025-12-26", "MM/DD/YYYY") == "12/26/2025"
        assert format_display_date("2025-12-26", "DD.MM.YYYY") == "26.12.2025"

    def test_now_iso_is_utc(self) -> None:
        stamp = now_iso()
        assert stamp.endswith("Z")
        assert len(stamp) == len("2025-01-01T00:00:00.000Z")
