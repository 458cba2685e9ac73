"""Pure computations over a list of transactions.

Nothing here touches the store or the UI; every function returns new
objects and leaves its input untouched.
"""
from collections.abc import Iterable
from dataclasses import dataclass, field

from expense_tracker.models.transaction import Transaction
from expense_tracker.utils.constants import CHART_COLORS, TYPE_EXPENSE, TYPE_INCOME


@dataclass(frozen=True)
class Summary:
    total_income: float = 0.0
    total_expense: float = 0.0

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expense

    def __add__(self, other: "Summary") -> "Summary":
        return Summary(
            total_income=self.total_income + other.total_income,
            total_expense=self.total_expense + other.total_expense,
        )


@dataclass(frozen=True)
class CategoryBreakdown:
    """Expense totals per category, in order of first appearance."""
    totals: dict[str, float] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.totals

    @property
    def labels(self) -> list[str]:
        return list(self.totals)

    @property
    def values(self) -> list[float]:
        return list(self.totals.values())

    def items(self) -> list[tuple[str, float]]:
        return list(self.totals.items())


@dataclass(frozen=True)
class LedgerView:
    """Everything the presentation layer needs for one render."""
    filtered: list[Transaction]
    summary: Summary
    breakdown: CategoryBreakdown
    category: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.filtered


def filter_by_category(
    transactions: Iterable[Transaction], category: str | None
) -> list[Transaction]:
    """Exact category match; no category returns everything in the same order."""
    if not category:
        return list(transactions)
    return [tx for tx in transactions if tx.category == category]


def summarize(transactions: Iterable[Transaction]) -> Summary:
    income = 0.0
    expense = 0.0
    for tx in transactions:
        if tx.type == TYPE_INCOME:
            income += tx.amount
        elif tx.type == TYPE_EXPENSE:
            expense += tx.amount
    return Summary(total_income=income, total_expense=expense)


def aggregate_by_category(transactions: Iterable[Transaction]) -> CategoryBreakdown:
    totals: dict[str, float] = {}
    for tx in transactions:
        if tx.type != TYPE_EXPENSE:
            continue
        totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
    return CategoryBreakdown(totals=totals)


def derive_view(
    transactions: Iterable[Transaction], category: str | None = None
) -> LedgerView:
    filtered = filter_by_category(transactions, category)
    return LedgerView(
        filtered=filtered,
        summary=summarize(filtered),
        breakdown=aggregate_by_category(filtered),
        category=category or None,
    )


def assign_colors(labels: list[str]) -> list[str]:
    """Palette colors by position; the palette repeats past 8 slices."""
    return [CHART_COLORS[i % len(CHART_COLORS)] for i in range(len(labels))]
