import customtkinter as ctk

from expense_tracker.services.presentation_sync import TransactionRow


class ConfirmDeleteDialog(ctk.CTkToplevel):
    """Modal 'delete this transaction?' prompt. Blocks until closed; read .confirmed."""

    def __init__(self, master, row: TransactionRow, **kwargs):
        super().__init__(master, **kwargs)
        self.title("Delete Transaction")
        self.confirmed = False
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            self, text="Are you sure you want to delete this transaction?",
            font=ctk.CTkFont(weight="bold"), anchor="w",
        ).grid(row=0, column=0, columnspan=2, padx=20, pady=(16, 8), sticky="ew")

        details = [
            ("Date", row.date),
            ("Description", row.description),
            ("Category", row.category),
            ("Amount", row.amount),
        ]
        for r, (label, value) in enumerate(details, start=1):
            ctk.CTkLabel(self, text=f"{label}:", text_color="gray60").grid(
                row=r, column=0, padx=(20, 8), pady=1, sticky="w"
            )
            ctk.CTkLabel(
                self, text=value, wraplength=260, anchor="w", justify="left",
                text_color=row.color if label == "Amount" else None,
            ).grid(row=r, column=1, padx=(0, 20), pady=1, sticky="w")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=len(details) + 1, column=0, columnspan=2, padx=20, pady=16, sticky="e")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))
        ctk.CTkButton(
            btn_frame, text="Delete", width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=self._confirm,
        ).pack(side="left")

        self.bind("<Escape>", lambda _e: self.destroy())
        self.transient(master)
        self.grab_set()
        self._place_over(master)
        self.wait_window()

    def _place_over(self, master):
        self.update_idletasks()
        x = master.winfo_rootx() + (master.winfo_width() - self.winfo_width()) // 2
        y = master.winfo_rooty() + (master.winfo_height() - self.winfo_height()) // 3
        self.geometry(f"+{max(x, 0)}+{max(y, 0)}")

    def _confirm(self):
        self.confirmed = True
        self.destroy()


def ask_delete(master, row: TransactionRow) -> bool:
    return ConfirmDeleteDialog(master, row).confirmed
