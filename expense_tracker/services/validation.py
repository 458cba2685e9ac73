"""Checks for a new entry before it is sent to the store."""
import math
from collections.abc import Mapping
from datetime import date

from expense_tracker.models.transaction import NewTransaction
from expense_tracker.utils.constants import MIN_DESCRIPTION_LENGTH, TRANSACTION_TYPES
from expense_tracker.utils.date_helpers import format_date, is_future, now_iso, parse_date


class ValidationError(ValueError):
    """Raised with every violated rule, never just the first one."""

    def __init__(self, messages: list[str]):
        super().__init__("\n".join(messages))
        self.messages = list(messages)


def _text(raw: Mapping, key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value).strip()


def _parse_amount(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(str(value).strip())
    except ValueError:
        return None
    return amount if math.isfinite(amount) else None


def validate_entry(raw: Mapping, today: date | None = None) -> list[str]:
    """Return the violation messages for raw form values; [] means valid."""
    errors: list[str] = []

    description = _text(raw, "description")
    if not description:
        errors.append("Description is required")
    elif len(description) < MIN_DESCRIPTION_LENGTH:
        errors.append(f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters")

    amount = _parse_amount(raw.get("amount"))
    if amount is None:
        errors.append("Amount must be a valid number")
    elif amount <= 0:
        errors.append("Amount must be greater than 0")

    if not _text(raw, "category"):
        errors.append("Please select a category")

    date_str = _text(raw, "date")
    if not date_str:
        errors.append("Please select a date")
    else:
        d = parse_date(date_str)
        if d is None:
            errors.append("Date must be a valid date")
        elif is_future(d, today):
            errors.append("Date cannot be in the future")

    if _text(raw, "type") not in TRANSACTION_TYPES:
        errors.append("Type must be income or expense")

    return errors


def build_candidate(
    raw: Mapping, today: date | None = None, now: str | None = None
) -> NewTransaction:
    """Validate and normalize raw form values into a NewTransaction."""
    errors = validate_entry(raw, today)
    if errors:
        raise ValidationError(errors)
    return NewTransaction(
        amount=_parse_amount(raw["amount"]),
        type=_text(raw, "type"),
        category=_text(raw, "category"),
        date=format_date(parse_date(_text(raw, "date"))),
        description=_text(raw, "description"),
        created_at=now or now_iso(),
    )
