"""CSV export of the full transaction set.

Fields are joined with plain commas. A description or category containing
a comma or a quote will shift columns in the output; no quoting is applied.
"""
from pathlib import Path

from expense_tracker.models.transaction import Transaction
from expense_tracker.utils.constants import CSV_HEADER, EXPORT_FILENAME
from expense_tracker.utils.date_helpers import format_display_date
from expense_tracker.utils.logging_setup import get_logger

logger = get_logger(__name__)


class ExportService:
    def __init__(self, date_format: str = "DD/MM/YYYY"):
        self._date_format = date_format

    def build_rows(self, transactions: list[Transaction]) -> list[list[str]]:
        """Return rows (header first) suitable for CSV export."""
        if not transactions:
            raise ValueError("No transactions to export")
        rows = [list(CSV_HEADER)]
        for tx in transactions:
            rows.append([
                format_display_date(tx.date, self._date_format),
                tx.description,
                tx.category,
                tx.type,
                f"{tx.amount:.2f}",
            ])
        return rows

    def to_csv(self, transactions: list[Transaction]) -> str:
        return "".join(",".join(row) + "\n" for row in self.build_rows(transactions))

    def export_csv(self, transactions: list[Transaction], path: str | Path | None = None) -> Path:
        """Write the CSV and return where it went (defaults to ./expense-tracker.csv)."""
        target = Path(path) if path else Path(EXPORT_FILENAME)
        content = self.to_csv(transactions)
        target.write_text(content, encoding="utf-8")
        logger.info("Exported %d transactions to %s", len(transactions), target)
        return target
