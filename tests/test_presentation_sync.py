"""Tests for view formatting and the single-chart rendering sequence."""

from expense_tracker.services.derivation import Summary
from expense_tracker.services.presentation_sync import (
    ChartSlot,
    LedgerSurface,
    PresentationSync,
    format_row,
    format_summary,
)
from expense_tracker.services.transaction_repository import TransactionRepository
from expense_tracker.utils.constants import EXPENSE_COLOR, INCOME_COLOR

from tests.helpers import FakeStore, make_record, make_tx


class RecordingSurface(LedgerSurface):
    def __init__(self):
        self.calls: list[tuple] = []

    def show_rows(self, rows):
        self.calls.append(("rows", rows))

    def set_list_empty(self, empty):
        self.calls.append(("list_empty", empty))

    def set_summary(self, summary):
        self.calls.append(("summary", summary))

    def set_chart_empty(self, empty):
        self.calls.append(("chart_empty", empty))

    def last(self, kind: str):
        return [value for name, value in self.calls if name == kind][-1]


class FakeChart:
    live = 0

    def __init__(self, breakdown):
        self.breakdown = breakdown
        self.destroyed = False
        FakeChart.live += 1

    def destroy(self):
        assert not self.destroyed
        self.destroyed = True
        FakeChart.live -= 1


def build(records: list[dict]):
    FakeChart.live = 0
    repo = TransactionRepository(FakeStore(records))
    surface = RecordingSurface()
    slot = ChartSlot(FakeChart)
    sync = PresentationSync(repo, surface, slot, currency_symbol="$")
    return repo, surface, slot, sync


class TestFormatting:
    """Tests for row and summary formatting."""

    def test_income_row(self) -> None:
        row = format_row(make_tx("a", 1000, "income", "Salary", "2025-12-26", "Pay"))
        assert row.date == "26 Dec 2025"
        assert row.type_label == "Income"
        assert row.amount == "+₹1,000.00"
        assert row.color == INCOME_COLOR

    def test_expense_row(self) -> None:
        row = format_row(make_tx("b", 45.5, "expense", "Food"), "$")
        assert row.type_label == "Expense"
        assert row.amount == "-$45.50"
        assert row.color == EXPENSE_COLOR

    def test_positive_balance(self) -> None:
        text = format_summary(Summary(1000, 500))
        assert text.income == "₹1,000.00"
        assert text.expense == "₹500.00"
        assert text.balance == "₹500.00"
        assert text.balance_color == INCOME_COLOR

    def test_negative_balance(self) -> None:
        text = format_summary(Summary(0, 300))
        assert text.balance == "-₹300.00"
        assert text.balance_color == EXPENSE_COLOR


class TestPresentationSync:
    """Tests for rendering on every view change."""

    def test_render_order(self) -> None:
        repo, surface, _, _ = build([make_record(500, "expense", "Food", "2025-01-01")])
        repo.reload()
        assert [name for name, _ in surface.calls] == [
            "rows", "list_empty", "summary", "chart_empty",
        ]

    def test_populated_view(self) -> None:
        repo, surface, slot, _ = build([
            make_record(500, "expense", "Food", "2025-01-01"),
            make_record(1000, "income", "Salary", "2025-01-02"),
        ])
        repo.reload()
        assert len(surface.last("rows")) == 2
        assert surface.last("list_empty") is False
        assert surface.last("summary").balance == "$500.00"
        assert surface.last("chart_empty") is False
        assert slot.live.breakdown.totals == {"Food": 500}

    def test_at_most_one_chart_across_renders(self) -> None:
        repo, _, slot, _ = build([make_record(500, "expense", "Food", "2025-01-01")])
        for _ in range(3):
            repo.reload()
            assert FakeChart.live == 1
        first = slot.live
        repo.set_filter("Food")
        assert first.destroyed
        assert FakeChart.live == 1

    def test_empty_breakdown_clears_chart(self) -> None:
        repo, surface, slot, _ = build([
            make_record(500, "expense", "Food", "2025-01-01"),
            make_record(1000, "income", "Salary", "2025-01-02"),
        ])
        repo.reload()
        repo.set_filter("Salary")
        assert slot.live is None
        assert FakeChart.live == 0
        assert surface.last("chart_empty") is True
        assert surface.last("list_empty") is False

    def test_empty_collection(self) -> None:
        repo, surface, slot, _ = build([])
        repo.reload()
        assert surface.last("rows") == []
        assert surface.last("list_empty") is True
        assert surface.last("summary").balance == "$0.00"
        assert slot.live is None

    def test_close_destroys_chart(self) -> None:
        repo, _, slot, sync = build([make_record(5, "expense", "Food", "2025-01-01")])
        repo.reload()
        sync.close()
        assert slot.live is None
        assert FakeChart.live == 0
