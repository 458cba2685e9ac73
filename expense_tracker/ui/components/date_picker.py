import tkinter as tk
from tkinter import ttk

import customtkinter as ctk
from tkcalendar import Calendar

from expense_tracker.utils.date_helpers import format_date, is_future, parse_date, today, today_str

_NORMAL_BORDER = ("gray65", "gray35")
_ERROR_BORDER = "#F44336"


def _calendar_palette() -> dict:
    """tkcalendar colors matching the current CTk appearance mode."""
    dark = ctk.get_appearance_mode() == "Dark"
    bg, fg = ("#2b2b2b", "#ffffff") if dark else ("#ffffff", "#000000")
    return dict(
        background=bg, foreground=fg,
        headersbackground=bg, headersforeground=fg,
        weekendbackground=bg, weekendforeground=fg,
        selectbackground="#1f6aa5",
        othermonthforeground="gray60",
        bordercolor=bg,
    )


class DatePickerWidget(ctk.CTkFrame):
    """Transaction date field: a YYYY-MM-DD entry plus a calendar popup.

    get() hands back whatever is typed; validation happens in the form's
    owner. The entry border turns red while the text is not a date or is
    after today, and the popup never offers days after today.
    """

    def __init__(self, master, initial_date: str | None = None, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self._popup: ctk.CTkToplevel | None = None

        self._var = tk.StringVar(value=initial_date or today_str())
        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=110)
        self._entry.grid(row=0, column=0, sticky="ew")
        for seq in ("<FocusOut>", "<Return>"):
            self._entry.bind(seq, self._normalize)

        ctk.CTkButton(self, text="📅", width=32, command=self._toggle_popup).grid(
            row=0, column=1, padx=(4, 0)
        )

    def get(self) -> str:
        return self._var.get().strip()

    def set(self, date_str: str):
        self._var.set(date_str)
        self._mark(valid=True)

    def reset_to_today(self):
        self.set(today_str())

    def _mark(self, valid: bool):
        self._entry.configure(border_color=_NORMAL_BORDER if valid else _ERROR_BORDER)

    def _normalize(self, _event=None):
        raw = self.get()
        if not raw:
            self._mark(valid=True)
            return
        d = parse_date(raw)
        if d is None:
            self._mark(valid=False)
            return
        self._var.set(format_date(d))
        self._mark(valid=not is_future(d))

    # ── Popup ─────────────────────────────────────────────────────────────────

    def _close_popup(self):
        if self._popup is not None and self._popup.winfo_exists():
            self._popup.destroy()
        self._popup = None

    def _toggle_popup(self):
        if self._popup is not None and self._popup.winfo_exists():
            self._close_popup()
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        palette = _calendar_palette()
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure(
            "Calendar.Treeview",
            background=palette["background"],
            foreground=palette["foreground"],
            fieldbackground=palette["background"],
        )

        shown = parse_date(self.get()) or today()
        if is_future(shown):
            shown = today()
        cal = Calendar(
            popup,
            selectmode="day",
            year=shown.year, month=shown.month, day=shown.day,
            maxdate=today(),
            date_pattern="yyyy-mm-dd",
            **palette,
        )
        cal.pack(padx=4, pady=(4, 0))
        cal.bind("<<CalendarSelected>>", lambda _e: self._pick(cal.get_date()))

        ctk.CTkButton(
            popup, text="Today", height=24, command=lambda: self._pick(today_str())
        ).pack(fill="x", padx=4, pady=4)

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")
        popup.bind("<FocusOut>", lambda _e: self._close_if_unfocused(popup))

    def _pick(self, date_str: str):
        self.set(date_str)
        self._close_popup()

    def _close_if_unfocused(self, popup):
        focused = popup.focus_get()
        if focused is None or not str(focused).startswith(str(popup)):
            self._close_popup()
