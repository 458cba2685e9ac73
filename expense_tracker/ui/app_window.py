from tkinter import filedialog

import customtkinter as ctk

from expense_tracker.services.export_service import ExportService
from expense_tracker.services.presentation_sync import ChartSlot, PresentationSync, TransactionRow
from expense_tracker.services.transaction_repository import TransactionRepository
from expense_tracker.services.validation import ValidationError, build_candidate
from expense_tracker.ui.background import run_in_background
from expense_tracker.ui.components.alert_banner import AlertBanner
from expense_tracker.ui.components.confirm_dialog import ask_delete
from expense_tracker.ui.components.transaction_form import TransactionForm
from expense_tracker.ui.tabs.ledger_tab import LedgerTab
from expense_tracker.utils.constants import APP_HEIGHT, APP_NAME, APP_WIDTH, EXPORT_FILENAME
from expense_tracker.utils.logging_setup import get_logger

logger = get_logger(__name__)


class AppWindow(ctk.CTk):
    """Main window. All repository state changes happen on the Tk thread;
    store calls run on worker threads and report back through after()."""

    def __init__(
        self,
        repository: TransactionRepository,
        export_service: ExportService,
        currency_symbol: str = "₹",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._repo = repository
        self._export_svc = export_service

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_banner_area()

        self._form = TransactionForm(self, on_submit=self._add_transaction)
        self._form.grid(row=1, column=0, sticky="n", padx=(8, 0), pady=8)

        self._ledger = LedgerTab(
            self,
            on_filter=self._set_filter,
            on_delete=self._delete_transaction,
            on_export=self._export_csv,
            currency_symbol=currency_symbol,
        )
        self._ledger.grid(row=1, column=1, sticky="nsew")

        self._sync = PresentationSync(
            repository, self._ledger, ChartSlot(self._ledger.create_chart), currency_symbol,
        )
        repository.add_listener(lambda _view: self._ledger.set_categories(repository.categories()))

        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self._reload(reset_filter=True)
        repository.start_sync(lambda: self.after(0, self._on_remote_change))

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=0, column=0, columnspan=2, sticky="ew", padx=8)

    def _notify(self, message: str, severity: str = "info"):
        # at most two notices: the previous one and the new one
        for w in self._banner_frame.winfo_children()[:-1]:
            w.destroy()
        AlertBanner(
            self._banner_frame, message=message, severity=severity,
            auto_dismiss_ms=None if severity == "error" else 4000,
        ).pack(fill="x", pady=2)

    # ── Background store calls ────────────────────────────────────────────────

    def _run_remote(self, work, on_done, error_message: str, on_finally=None):
        """Run work() on a worker thread; hand its result to on_done on the Tk thread."""
        run_in_background(
            lambda callback: self.after(0, callback),
            work,
            lambda result: self._on_remote_done(on_done, result, on_finally),
            lambda error: self._on_remote_error(error_message, error, on_finally),
        )

    def _on_remote_done(self, on_done, result, on_finally):
        if not self.winfo_exists():
            return
        if on_finally:
            on_finally()
        on_done(result)

    def _on_remote_error(self, message: str, error: Exception, on_finally):
        if not self.winfo_exists():
            return
        if on_finally:
            on_finally()
        self._notify(f"{message}: {error}", "error")

    def _reload(self, reset_filter: bool = False):
        def apply(snapshot):
            self._repo.apply_snapshot(snapshot, reset_filter=reset_filter)
            if reset_filter:
                self._ledger.set_filter_selection(None)

        self._run_remote(self._repo.fetch_snapshot, apply, "Error loading transactions")

    def _on_remote_change(self):
        logger.info("Remote change detected, syncing")
        self._reload()

    # ── User actions ──────────────────────────────────────────────────────────

    def _add_transaction(self, raw: dict):
        try:
            candidate = build_candidate(raw)
        except ValidationError as e:
            self._form.show_errors(e.messages)
            return

        def done(_tx_id):
            self._form.reset()
            self._notify("Transaction added successfully!", "success")
            self._reload()

        self._form.set_busy(True)
        self._run_remote(
            lambda: self._repo.insert(candidate), done, "Error adding transaction",
            on_finally=lambda: self._form.set_busy(False),
        )

    def _delete_transaction(self, row: TransactionRow):
        if not ask_delete(self, row):
            return

        def done(_result):
            self._notify("Transaction deleted successfully!", "success")
            self._reload()

        self._run_remote(lambda: self._repo.remove(row.id), done, "Error deleting transaction")

    def _set_filter(self, category: str | None):
        self._repo.set_filter(category)

    def _export_csv(self):
        transactions = self._repo.transactions
        if not transactions:
            self._notify("No transactions to export!", "info")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
            initialfile=EXPORT_FILENAME,
        )
        if not path:
            return
        try:
            self._export_svc.export_csv(transactions, path)
        except OSError as e:
            logger.exception("CSV export failed")
            self._notify(f"Export failed: {e}", "error")
            return
        self._notify(f"CSV exported to {path}", "success")

    def _on_close(self):
        self._repo.close()
        self._sync.close()
        self.destroy()
