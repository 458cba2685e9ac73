"""Pushes a LedgerView onto whatever surface shows it.

The surface (table, summary labels, indicators) and the chart instances are
UI concerns; this module only decides what to show and in which order.
"""
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from expense_tracker.models.transaction import Transaction
from expense_tracker.services.derivation import CategoryBreakdown, LedgerView, Summary
from expense_tracker.services.transaction_repository import TransactionRepository
from expense_tracker.utils.constants import EXPENSE_COLOR, INCOME_COLOR
from expense_tracker.utils.currency import format_currency, format_direction
from expense_tracker.utils.date_helpers import format_table_date


@dataclass(frozen=True)
class TransactionRow:
    id: str
    date: str
    description: str
    category: str
    type_label: str
    amount: str
    color: str


@dataclass(frozen=True)
class SummaryText:
    income: str
    expense: str
    balance: str
    balance_color: str


def format_row(tx: Transaction, symbol: str = "₹") -> TransactionRow:
    return TransactionRow(
        id=tx.id,
        date=format_table_date(tx.date),
        description=tx.description,
        category=tx.category,
        type_label="Income" if tx.is_income else "Expense",
        amount=format_direction(tx.amount, tx.is_income, symbol),
        color=INCOME_COLOR if tx.is_income else EXPENSE_COLOR,
    )


def format_summary(summary: Summary, symbol: str = "₹") -> SummaryText:
    balance = summary.balance
    return SummaryText(
        income=format_currency(summary.total_income, symbol),
        expense=format_currency(summary.total_expense, symbol),
        balance=format_currency(balance, symbol),
        balance_color=INCOME_COLOR if balance >= 0 else EXPENSE_COLOR,
    )


class LedgerSurface(ABC):
    """What the presentation layer must be able to do on screen."""

    @abstractmethod
    def show_rows(self, rows: list[TransactionRow]):
        ...

    @abstractmethod
    def set_list_empty(self, empty: bool):
        ...

    @abstractmethod
    def set_summary(self, summary: SummaryText):
        ...

    @abstractmethod
    def set_chart_empty(self, empty: bool):
        ...


class ChartSlot:
    """Owns the single live chart instance.

    factory(breakdown) builds a chart object exposing destroy(). The previous
    instance is always destroyed before a new one is created.
    """

    def __init__(self, factory: Callable[[CategoryBreakdown], object]):
        self._factory = factory
        self._chart = None

    @property
    def live(self):
        return self._chart

    def replace(self, breakdown: CategoryBreakdown):
        self.clear()
        self._chart = self._factory(breakdown)

    def clear(self):
        if self._chart is not None:
            self._chart.destroy()
            self._chart = None


class PresentationSync:
    def __init__(
        self,
        repository: TransactionRepository,
        surface: LedgerSurface,
        chart: ChartSlot,
        currency_symbol: str = "₹",
    ):
        self._surface = surface
        self._chart = chart
        self._symbol = currency_symbol
        repository.add_listener(self.render)

    def render(self, view: LedgerView):
        self._surface.show_rows([format_row(tx, self._symbol) for tx in view.filtered])
        self._surface.set_list_empty(view.is_empty)
        self._surface.set_summary(format_summary(view.summary, self._symbol))
        if view.breakdown.is_empty:
            self._chart.clear()
            self._surface.set_chart_empty(True)
        else:
            self._chart.replace(view.breakdown)
            self._surface.set_chart_empty(False)

    def close(self):
        self._chart.clear()
