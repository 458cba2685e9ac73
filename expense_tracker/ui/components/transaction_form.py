import customtkinter as ctk

from expense_tracker.ui.components.date_picker import DatePickerWidget
from expense_tracker.utils.constants import DEFAULT_CATEGORIES, TYPE_EXPENSE, TYPE_INCOME


class TransactionForm(ctk.CTkFrame):
    """Add-transaction panel.

    Collects raw field values and hands them to on_submit(raw); the owner
    validates, reports problems through show_errors() and calls reset()
    once the entry has been stored.
    """

    def __init__(self, master, on_submit, **kwargs):
        super().__init__(master, fg_color=("gray90", "gray20"), corner_radius=8, **kwargs)
        self._on_submit = on_submit
        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            self, text="Add Transaction",
            font=ctk.CTkFont(size=15, weight="bold"),
        ).grid(row=0, column=0, columnspan=2, padx=16, pady=(12, 8), sticky="w")

        r = 1
        self._label("Amount:", r)
        self._amount_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._amount_var, width=200).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._label("Type:", r)
        self._type_var = ctk.StringVar(value=TYPE_EXPENSE)
        type_frame = ctk.CTkFrame(self, fg_color="transparent")
        type_frame.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        for t in (TYPE_INCOME, TYPE_EXPENSE):
            ctk.CTkRadioButton(
                type_frame, text=t.title(), variable=self._type_var, value=t,
            ).pack(side="left", padx=4)
        r += 1

        self._label("Category:", r)
        self._cat_var = ctk.StringVar(value="")
        ctk.CTkComboBox(
            self, values=DEFAULT_CATEGORIES, variable=self._cat_var, width=200,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Date:", r)
        self._date_picker = DatePickerWidget(self)
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        self._label("Description:", r)
        self._desc_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._desc_var, width=200).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=280, anchor="w", justify="left",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        self._save_btn = ctk.CTkButton(self, text="Add Transaction", command=self._on_save)
        self._save_btn.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def values(self) -> dict:
        return {
            "amount": self._amount_var.get(),
            "type": self._type_var.get(),
            "category": self._cat_var.get(),
            "date": self._date_picker.get(),
            "description": self._desc_var.get(),
        }

    def show_errors(self, messages: list[str]):
        self._error_var.set("\n".join(messages))

    def set_busy(self, busy: bool):
        self._save_btn.configure(state="disabled" if busy else "normal")

    def reset(self):
        self._amount_var.set("")
        self._type_var.set(TYPE_EXPENSE)
        self._cat_var.set("")
        self._desc_var.set("")
        self._date_picker.reset_to_today()
        self._error_var.set("")

    def _on_save(self):
        self._error_var.set("")
        self._on_submit(self.values())
