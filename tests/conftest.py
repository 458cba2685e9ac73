"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from expense_tracker.services.transaction_repository import TransactionRepository

from tests.helpers import FakeStore, make_record


@pytest.fixture
def fixed_today() -> date:
    return date(2025, 6, 15)


@pytest.fixture
def sample_records() -> list[dict]:
    return [
        make_record(500, "expense", "Food", "2025-01-01", "Groceries"),
        make_record(1000, "income", "Salary", "2025-01-02", "January pay"),
        make_record(120, "expense", "Transport", "2025-01-03", "Metro card"),
        make_record(80, "expense", "Food", "2025-01-03", "Lunch out"),
    ]


@pytest.fixture
def store(sample_records: list[dict]) -> FakeStore:
    return FakeStore(sample_records)


@pytest.fixture
def repo(store: FakeStore) -> TransactionRepository:
    return TransactionRepository(store)
