"""Tests for entry validation."""

from datetime import date, timedelta

import pytest

from expense_tracker.services.validation import ValidationError, build_candidate, validate_entry


def valid_raw(**overrides) -> dict:
    raw = {
        "amount": "250.50",
        "type": "expense",
        "category": "Food",
        "date": "2025-06-01",
        "description": "Groceries",
    }
    raw.update(overrides)
    return raw


class TestValidateEntry:
    """Tests for validate_entry."""

    def test_valid_entry_has_no_errors(self, fixed_today: date) -> None:
        assert validate_entry(valid_raw(), today=fixed_today) == []

    def test_zero_amount_and_empty_description_report_both(self, fixed_today: date) -> None:
        errors = validate_entry(valid_raw(amount="0", description=""), today=fixed_today)
        assert errors == ["Description is required", "Amount must be greater than 0"]

    def test_every_rule_is_reported_together(self, fixed_today: date) -> None:
        raw = {"amount": "abc", "type": "gift", "category": "  ", "date": "", "description": "ab"}
        errors = validate_entry(raw, today=fixed_today)
        assert errors == [
            "Description must be at least 3 characters",
            "Amount must be a valid number",
            "Please select a category",
            "Please select a date",
            "Type must be income or expense",
        ]

    def test_description_is_trimmed_before_length_check(self, fixed_today: date) -> None:
        errors = validate_entry(valid_raw(description="  ab  "), today=fixed_today)
        assert errors == ["Description must be at least 3 characters"]

    @pytest.mark.parametrize("amount", ["-5", "0.0", -1])
    def test_non_positive_amount(self, amount, fixed_today: date) -> None:
        assert validate_entry(valid_raw(amount=amount), today=fixed_today) == [
            "Amount must be greater than 0"
        ]

    @pytest.mark.parametrize("amount", ["", None, "12abc", "nan", "inf"])
    def test_unparseable_amount(self, amount, fixed_today: date) -> None:
        assert validate_entry(valid_raw(amount=amount), today=fixed_today) == [
            "Amount must be a valid number"
        ]

    def test_numeric_amount_accepted(self, fixed_today: date) -> None:
        assert validate_entry(valid_raw(amount=12.5), today=fixed_today) == []

    def test_tomorrow_is_rejected(self, fixed_today: date) -> None:
        tomorrow = (fixed_today + timedelta(days=1)).isoformat()
        assert validate_entry(valid_raw(date=tomorrow), today=fixed_today) == [
            "Date cannot be in the future"
        ]

    def test_today_is_accepted(self, fixed_today: date) -> None:
        assert validate_entry(valid_raw(date=fixed_today.isoformat()), today=fixed_today) == []

    def test_invalid_date_string(self, fixed_today: date) -> None:
        assert validate_entry(valid_raw(date="2025-02-30"), today=fixed_today) == [
            "Date must be a valid date"
        ]

    def test_defaults_to_real_today(self) -> None:
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        assert validate_entry(valid_raw(date=tomorrow)) == ["Date cannot be in the future"]
        assert validate_entry(valid_raw(date=date.today().isoformat())) == []


class TestBuildCandidate:
    """Tests for build_candidate."""

    def test_normalizes_fields(self, fixed_today: date) -> None:
        candidate = build_candidate(
            valid_raw(amount=" 99.5 ", category=" Food ", description="  Dinner  "),
            today=fixed_today,
            now="2025-06-01T10:00:00.000Z",
        )
        assert candidate.amount == 99.5
        assert candidate.category == "Food"
        assert candidate.description == "Dinner"
        assert candidate.date == "2025-06-01"
        assert candidate.created_at == "2025-06-01T10:00:00.000Z"

    def test_raises_with_all_messages(self, fixed_today: date) -> None:
        with pytest.raises(ValidationError) as exc_info:
            build_candidate(valid_raw(amount="0", description=""), today=fixed_today)
        assert len(exc_info.value.messages) == 2
        assert isinstance(exc_info.value, ValueError)

    def test_record_uses_store_field_names(self, fixed_today: date) -> None:
        record = build_candidate(valid_raw(), today=fixed_today, now="ts").to_record()
        assert record == {
            "amount": 250.5,
            "category": "Food",
            "type": "expense",
            "date": "2025-06-01",
            "description": "Groceries",
            "createdAt": "ts",
        }
