import customtkinter as ctk

from models.transaction import Transaction, TRANSACTION_TYPE_LABELS
from utils.constants import EXPENSE_COLOR, INCOME_COLOR
from utils.currency import format_currency, format_signed
from utils.date_helpers import format_display_date


def amount_text(tx: Transaction) -> tuple[str, str | tuple]:
    """Signed amount and its color: income +green, expenses -red, transfers neutral."""
    if tx.type == "income":
        return format_signed(tx.amount), INCOME_COLOR
    if tx.is_expense:
        return format_signed(-tx.amount), EXPENSE_COLOR
    return format_currency(tx.amount), ("gray30", "gray70")


def transaction_row(parent, tx: Transaction, row: int, date_format: str, on_click=None):
    frame = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=8)
    frame.grid(row=row, column=0, sticky="ew", padx=4, pady=2)
    frame.grid_columnconfigure(1, weight=1)

    ctk.CTkLabel(
        frame, text=format_display_date(tx.date, date_format),
        width=90, anchor="w", text_color="gray60",
    ).grid(row=0, column=0, padx=(10, 4), pady=6, rowspan=2)
    ctk.CTkLabel(
        frame, text=tx.description, anchor="w",
        font=ctk.CTkFont(size=13, weight="bold"),
    ).grid(row=0, column=1, sticky="w", padx=4, pady=(6, 0))
    subtitle = TRANSACTION_TYPE_LABELS.get(tx.type, tx.type)
    if tx.category:
        subtitle += f" · {tx.category}"
    ctk.CTkLabel(
        frame, text=subtitle, anchor="w", text_color="gray60",
        font=ctk.CTkFont(size=11),
    ).grid(row=1, column=1, sticky="w", padx=4, pady=(0, 6))

    text, color = amount_text(tx)
    ctk.CTkLabel(
        frame, text=text, text_color=color, anchor="e",
        font=ctk.CTkFont(size=13, weight="bold"),
    ).grid(row=0, column=2, rowspan=2, padx=(4, 8))

    if on_click:
        ctk.CTkButton(
            frame, text="Edit", width=50, height=24,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda t=tx: on_click(t),
        ).grid(row=0, column=3, rowspan=2, padx=(0, 10))
    return frame
