import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from expense_tracker.services.derivation import CategoryBreakdown, assign_colors
from expense_tracker.utils.currency import format_currency


class CategoryPieChart:
    """One pie chart of expenses per category, embedded in `master`.

    Created fresh for every dataset and destroyed before the next one.
    """

    def __init__(self, master, breakdown: CategoryBreakdown, currency_symbol: str = "₹"):
        self._fig = Figure(figsize=(3.6, 3.6), dpi=80, tight_layout=True)
        ax = self._fig.add_subplot(111)
        self._style(ax)

        labels = breakdown.labels
        ax.pie(
            breakdown.values,
            colors=assign_colors(labels),
            startangle=90,
            wedgeprops={"edgecolor": "#ffffff", "linewidth": 2},
        )
        ax.set_aspect("equal")
        ax.legend(
            [f"{label}: {format_currency(total, currency_symbol)}" for label, total in breakdown.items()],
            loc="upper center", bbox_to_anchor=(0.5, -0.02),
            ncol=2, fontsize=8, frameon=False,
        )

        self._canvas = FigureCanvasTkAgg(self._fig, master=master)
        self._canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))
        self._canvas.draw_idle()

    def _style(self, ax):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        self._fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)

    def destroy(self):
        self._canvas.get_tk_widget().destroy()
        self._fig.clear()
