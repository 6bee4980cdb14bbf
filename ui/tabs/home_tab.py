import sqlite3

import customtkinter as ctk

from services.context import AppContext
from services.transaction_service import TransactionFilter, summarize
from ui.components.error_dialog import show_store_error
from ui.components.stat_card import stat_card
from ui.components.transaction_form import TransactionForm
from ui.components.transaction_row import transaction_row
from utils.constants import ACCENT_COLOR, EXPENSE_COLOR, INCOME_COLOR, RECENT_TRANSACTIONS_LIMIT
from utils.currency import masked_currency
from utils.date_helpers import current_month_str, friendly_month, month_range


class HomeTab(ctk.CTkFrame):
    """This month's totals for the active account/card plus the latest entries."""

    def __init__(
        self,
        master,
        ctx: AppContext,
        get_selection,      # callable → (account_id | None, card_id | None)
        notify_refresh,
        date_format: str = "DD/MM/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._get_selection = get_selection
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._values_visible = True
        self._totals = summarize([])

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_header()
        self._build_cards()
        self._build_actions()
        self._build_recent()
        self._load()

    def refresh(self):
        self._load()

    def _build_header(self):
        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))
        header.grid_columnconfigure(0, weight=1)
        self._greeting = ctk.CTkLabel(
            header, text="", anchor="w", font=ctk.CTkFont(size=18, weight="bold"),
        )
        self._greeting.grid(row=0, column=0, sticky="ew")
        self._visibility_btn = ctk.CTkButton(
            header, text="Hide values", width=100,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=self._toggle_values,
        )
        self._visibility_btn.grid(row=0, column=1, sticky="e")

    def _build_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=1, column=0, sticky="ew", padx=10, pady=8)
        self._card_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _build_actions(self):
        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.grid(row=2, column=0, sticky="ew", padx=16)
        for label, type_, color in (
            ("+ Income", "income", INCOME_COLOR),
            ("+ Expense", "expense", EXPENSE_COLOR),
            ("+ Card Expense", "card_expense", ACCENT_COLOR),
            ("+ Transfer", "transfer", None),
        ):
            colors = {"fg_color": color} if color else {}
            ctk.CTkButton(
                bar, text=label, width=120,
                command=lambda t=type_: self._open_new(t), **colors,
            ).pack(side="left", padx=(0, 8))

    def _build_recent(self):
        self._recent = ctk.CTkScrollableFrame(self, label_text="Recent Transactions")
        self._recent.grid(row=3, column=0, sticky="nsew", padx=16, pady=(8, 12))
        self._recent.grid_columnconfigure(0, weight=1)

    def _load(self):
        user_id = self._ctx.user_id
        account_id, card_id = self._get_selection()
        month = current_month_str()
        start, end = month_range(month)
        try:
            profile = self._ctx.profiles.get(user_id)
            transactions = self._ctx.transactions.get_filtered(
                user_id, TransactionFilter(account_id=account_id, card_id=card_id),
            )
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "loading the home screen", e)
            return

        name = profile.name if profile and profile.name else ""
        self._greeting.configure(
            text=f"Hello{', ' + name if name else ''}! {friendly_month(month)}"
        )

        self._totals = summarize([t for t in transactions if start <= t.date <= end])
        self._draw_cards()

        for w in self._recent.winfo_children():
            w.destroy()
        recent = transactions[:RECENT_TRANSACTIONS_LIMIT]
        if not recent:
            ctk.CTkLabel(
                self._recent, text="No transactions yet.", text_color="gray60",
            ).grid(row=0, column=0, pady=30)
            return
        for i, tx in enumerate(recent):
            transaction_row(self._recent, tx, i, self._date_format, on_click=self._open_edit)

    def _draw_cards(self):
        for w in self._card_frame.winfo_children():
            w.destroy()
        totals, visible = self._totals, self._values_visible
        stat_card(
            self._card_frame, "Income", masked_currency(totals["income"], visible),
            INCOME_COLOR, 0,
        )
        stat_card(
            self._card_frame, "Expenses", masked_currency(totals["expense"], visible),
            EXPENSE_COLOR, 1,
        )
        balance = totals["balance"]
        stat_card(
            self._card_frame, "Balance", masked_currency(balance, visible),
            INCOME_COLOR if balance >= 0 else EXPENSE_COLOR, 2,
        )

    def _toggle_values(self):
        self._values_visible = not self._values_visible
        self._visibility_btn.configure(
            text="Hide values" if self._values_visible else "Show values"
        )
        self._draw_cards()

    def _open_new(self, type_: str):
        account_id, card_id = self._get_selection()
        form = TransactionForm(
            self.winfo_toplevel(), self._ctx, initial_type=type_,
            account_id=account_id, card_id=card_id, date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("transaction")

    def _open_edit(self, tx):
        form = TransactionForm(
            self.winfo_toplevel(), self._ctx, transaction=tx, date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("transaction")
