import customtkinter as ctk

from expense_tracker.services.derivation import CategoryBreakdown
from expense_tracker.services.presentation_sync import LedgerSurface, SummaryText, TransactionRow
from expense_tracker.ui.components.category_chart import CategoryPieChart
from expense_tracker.utils.constants import DEFAULT_CATEGORIES, EXPENSE_COLOR, INCOME_COLOR

ALL_CATEGORIES = "All Categories"

_MAX_RENDERED_ROWS = 200


class LedgerTab(ctk.CTkFrame, LedgerSurface):
    """Filter bar, summary cards, transaction table and expense chart."""

    def __init__(
        self,
        master,
        on_filter,        # callable(str | None)
        on_delete,        # callable(TransactionRow)
        on_export,        # callable()
        currency_symbol: str = "₹",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._on_filter = on_filter
        self._on_delete = on_delete
        self._on_export = on_export
        self._symbol = currency_symbol
        self._filter_var = ctk.StringVar(value=ALL_CATEGORIES)

        self.grid_columnconfigure(0, weight=3)
        self.grid_columnconfigure(1, weight=2)
        self.grid_rowconfigure(3, weight=1)

        self._build_filter_bar()
        self._build_summary_cards()
        self._build_header()
        self._build_table()
        self._build_chart_panel()

    # ── Layout builders ───────────────────────────────────────────────────────

    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, columnspan=2, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkLabel(bar, text="Category:").pack(side="left", padx=(12, 4), pady=8)
        self._filter_combo = ctk.CTkComboBox(
            bar, values=[ALL_CATEGORIES] + DEFAULT_CATEGORIES,
            variable=self._filter_var, width=180, state="readonly",
            command=self._filter_changed,
        )
        self._filter_combo.pack(side="left", padx=(0, 12))

        ctk.CTkButton(bar, text="Export CSV", command=self._on_export).pack(side="right", padx=8)

    def _build_summary_cards(self):
        cards = ctk.CTkFrame(self, fg_color="transparent")
        cards.grid(row=1, column=0, columnspan=2, sticky="ew", padx=8, pady=10)
        cards.grid_columnconfigure((0, 1, 2), weight=1)
        self._income_label = self._make_card(cards, 0, "Total Income", INCOME_COLOR)
        self._expense_label = self._make_card(cards, 1, "Total Expense", EXPENSE_COLOR)
        self._balance_label = self._make_card(cards, 2, "Balance", INCOME_COLOR)

    def _make_card(self, parent, col, label, color) -> ctk.CTkLabel:
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12), text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        value = ctk.CTkLabel(
            card, text=f"{self._symbol}0.00",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        )
        value.grid(row=1, column=0, pady=(4, 12), padx=16)
        return value

    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=2, column=0, sticky="ew", padx=8, pady=(4, 0))
        cols = [("Date", 95), ("Description", 170), ("Category", 110),
                ("Type", 80), ("Amount", 100), ("", 60)]
        for i, (label, width) in enumerate(cols):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    def _build_table(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=3, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)
        self._empty_label = ctk.CTkLabel(
            self, text="No transactions yet. Add one to get started.",
            text_color="gray60",
        )

    def _build_chart_panel(self):
        outer = ctk.CTkFrame(self, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=2, column=1, rowspan=2, sticky="nsew", padx=(0, 8), pady=(4, 8))
        ctk.CTkLabel(
            outer, text="Expenses by Category",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._chart_host = ctk.CTkFrame(outer, fg_color="transparent")
        self._chart_host.pack(fill="both", expand=True)
        self._no_chart_label = ctk.CTkLabel(
            outer, text="No expense data to chart.", text_color="gray60",
        )

    def create_chart(self, breakdown: CategoryBreakdown) -> CategoryPieChart:
        """Chart factory for ChartSlot."""
        return CategoryPieChart(self._chart_host, breakdown, self._symbol)

    # ── Callbacks ─────────────────────────────────────────────────────────────

    def _filter_changed(self, value: str):
        self._on_filter(None if value == ALL_CATEGORIES else value)

    def set_categories(self, categories: list[str]):
        extra = [c for c in categories if c not in DEFAULT_CATEGORIES]
        self._filter_combo.configure(values=[ALL_CATEGORIES] + DEFAULT_CATEGORIES + extra)

    def set_filter_selection(self, category: str | None):
        self._filter_var.set(category or ALL_CATEGORIES)

    # ── LedgerSurface ─────────────────────────────────────────────────────────

    def show_rows(self, rows: list[TransactionRow]):
        for w in self._scroll.winfo_children():
            w.destroy()
        for idx, row in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, row)
        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)} transactions. Filter by category to narrow results.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, row: TransactionRow):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        frame = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        frame.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        ctk.CTkLabel(frame, text=row.date, width=95, anchor="w").grid(row=0, column=0, padx=4, pady=4)
        ctk.CTkLabel(frame, text=row.description, width=170, anchor="w").grid(row=0, column=1, padx=4)
        ctk.CTkLabel(frame, text=row.category, width=110, anchor="w").grid(row=0, column=2, padx=4)
        ctk.CTkLabel(frame, text=row.type_label, width=80, anchor="w").grid(row=0, column=3, padx=4)
        ctk.CTkLabel(
            frame, text=row.amount, width=100, anchor="e", text_color=row.color,
        ).grid(row=0, column=4, padx=4)
        ctk.CTkButton(
            frame, text="Del", width=44, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda r=row: self._on_delete(r),
        ).grid(row=0, column=5, padx=(4, 6))

    def set_list_empty(self, empty: bool):
        if empty:
            self._empty_label.grid(row=4, column=0, pady=12)
        else:
            self._empty_label.grid_forget()

    def set_summary(self, summary: SummaryText):
        self._income_label.configure(text=summary.income)
        self._expense_label.configure(text=summary.expense)
        self._balance_label.configure(text=summary.balance, text_color=summary.balance_color)

    def set_chart_empty(self, empty: bool):
        if empty:
            self._no_chart_label.pack(pady=20)
        else:
            self._no_chart_label.pack_forget()
