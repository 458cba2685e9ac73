"""Tests for CSV export."""

from pathlib import Path

import pytest

from expense_tracker.services.export_service import ExportService

from tests.helpers import make_tx


def transactions() -> list:
    return [
        make_tx("b", 1000, "income", "Salary", "2025-01-02", "January pay"),
        make_tx("a", 500, "expense", "Food", "2025-01-01", "Groceries"),
    ]


class TestExportService:
    """Tests for ExportService."""

    def test_csv_content(self) -> None:
        assert ExportService().to_csv(transactions()) == (
            "Date,Description,Category,Type,Amount\n"
            "02/01/2025,January pay,Salary,income,1000.00\n"
            "01/01/2025,Groceries,Food,expense,500.00\n"
        )

    def test_one_row_per_transaction(self) -> None:
        rows = ExportService().build_rows(transactions())
        assert len(rows) == 3
        assert rows[0] == ["Date", "Description", "Category", "Type", "Amount"]

    def test_amount_has_two_decimals(self) -> None:
        rows = ExportService().build_rows([make_tx("a", 12.5, "expense", "Food")])
        assert rows[1][-1] == "12.50"

    def test_other_date_format(self) -> None:
        rows = ExportService(date_format="YYYY-MM-DD").build_rows(transactions())
        assert rows[1][0] == "2025-01-02"

    def test_commas_are_not_escaped(self) -> None:
        tx = make_tx("a", 5, "expense", "Food", "2025-01-01", "Tea, biscuits")
        line = ExportService().to_csv([tx]).splitlines()[1]
        assert line == "01/01/2025,Tea, biscuits,Food,expense,5.00"

    def test_empty_set_is_rejected(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        with pytest.raises(ValueError, match="No transactions to export"):
            ExportService().export_csv([], target)
        assert not target.exists()

    def test_writes_file(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        result = ExportService().export_csv(transactions(), target)
        assert result == target
        assert target.read_text(encoding="utf-8").startswith("Date,Description")

    def test_default_file_name(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        result = ExportService().export_csv(transactions())
        assert result == Path("expense-tracker.csv")
        assert (tmp_path / "expense-tracker.csv").exists()
