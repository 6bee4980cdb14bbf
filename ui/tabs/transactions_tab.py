import sqlite3

import customtkinter as ctk

from services.context import AppContext
from services.transaction_service import TransactionFilter, filter_transactions, summarize
from ui.components.date_picker import DatePickerWidget
from ui.components.error_dialog import show_store_error
from ui.components.transaction_form import TransactionForm
from ui.components.transaction_row import transaction_row
from utils.constants import ACCENT_COLOR
from utils.currency import format_currency

_ALL_CATEGORIES = "All categories"
_TYPE_LABELS = {"All": "all", "Income": "income", "Expenses": "expense"}


class TransactionsTab(ctk.CTkFrame):
    """Searchable, filterable list of every transaction, newest first."""

    def __init__(
        self,
        master,
        ctx: AppContext,
        get_selection,
        notify_refresh,
        date_format: str = "DD/MM/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._get_selection = get_selection
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._transactions = []

        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._apply_filters())
        self._type_var = ctk.StringVar(value="All")
        self._cat_var = ctk.StringVar(value=_ALL_CATEGORIES)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_toolbar()
        self._build_filters()
        self._build_summary()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    # ── Layout ───────────────────────────────────────────────────────────────

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkEntry(
            bar, textvariable=self._search_var, placeholder_text="Search description...",
            width=260,
        ).pack(side="left", padx=(12, 8), pady=8)
        ctk.CTkSegmentedButton(
            bar, values=list(_TYPE_LABELS), variable=self._type_var,
            command=lambda _: self._apply_filters(),
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            bar, text="+ New Transaction", fg_color=ACCENT_COLOR, command=self._open_new,
        ).pack(side="right", padx=8)

    def _build_filters(self):
        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.grid(row=1, column=0, sticky="ew", padx=8, pady=(6, 0))

        ctk.CTkLabel(bar, text="Category:").pack(side="left", padx=(4, 4))
        self._cat_combo = ctk.CTkComboBox(
            bar, values=[_ALL_CATEGORIES], variable=self._cat_var, width=160,
            state="readonly", command=lambda _: self._apply_filters(),
        )
        self._cat_combo.pack(side="left", padx=(0, 12))

        ctk.CTkLabel(bar, text="From:").pack(side="left", padx=(0, 4))
        self._start = DatePickerWidget(bar, date_format=self._date_format, allow_empty=True)
        self._start.pack(side="left", padx=(0, 8))
        ctk.CTkLabel(bar, text="To:").pack(side="left", padx=(0, 4))
        self._end = DatePickerWidget(bar, date_format=self._date_format, allow_empty=True)
        self._end.pack(side="left", padx=(0, 8))

        ctk.CTkButton(bar, text="Apply", width=70, command=self._apply_filters).pack(
            side="left", padx=4
        )
        ctk.CTkButton(
            bar, text="Clear", width=70,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=self._clear_filters,
        ).pack(side="left", padx=4)

    def _build_summary(self):
        self._summary_label = ctk.CTkLabel(self, text="", anchor="w", text_color="gray60")
        self._summary_label.grid(row=2, column=0, sticky="ew", padx=16, pady=(6, 0))

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=3, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    # ── Data ─────────────────────────────────────────────────────────────────

    def _load(self):
        user_id = self._ctx.user_id
        try:
            self._transactions = self._ctx.transactions.get_all(user_id)
            categories = self._ctx.categories.get_all(user_id)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "loading transactions", e)
            return
        names = sorted({c.name for c in categories} | {
            t.category for t in self._transactions if t.category
        })
        self._cat_combo.configure(values=[_ALL_CATEGORIES] + names)
        if self._cat_var.get() not in names:
            self._cat_var.set(_ALL_CATEGORIES)
        self._apply_filters()

    def _current_filter(self) -> TransactionFilter:
        account_id, card_id = self._get_selection()
        category = self._cat_var.get()
        return TransactionFilter(
            search=self._search_var.get(),
            type=_TYPE_LABELS.get(self._type_var.get(), "all"),
            account_id=account_id,
            card_id=card_id,
            category=None if category == _ALL_CATEGORIES else category,
            start_date=self._start.get() if self._start.is_valid() else "",
            end_date=self._end.get() if self._end.is_valid() else "",
        )

    def _apply_filters(self):
        criteria = self._current_filter()
        rows = filter_transactions(self._transactions, criteria)

        totals = summarize(rows)
        badge = f"  ·  {criteria.active_count} filter(s)" if criteria.active_count else ""
        self._summary_label.configure(
            text=f"{totals['count']} transactions  ·  "
                 f"in {format_currency(totals['income'])}  ·  "
                 f"out {format_currency(totals['expense'])}{badge}"
        )

        for w in self._scroll.winfo_children():
            w.destroy()
        if not rows:
            ctk.CTkLabel(
                self._scroll, text="No transactions match the filters.", text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return
        for i, tx in enumerate(rows):
            transaction_row(self._scroll, tx, i, self._date_format, on_click=self._open_edit)

    def _clear_filters(self):
        self._search_var.set("")
        self._type_var.set("All")
        self._cat_var.set(_ALL_CATEGORIES)
        self._start.set("")
        self._end.set("")
        self._apply_filters()

    # ── Forms ────────────────────────────────────────────────────────────────

    def _open_new(self):
        account_id, card_id = self._get_selection()
        form = TransactionForm(
            self.winfo_toplevel(), self._ctx,
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
