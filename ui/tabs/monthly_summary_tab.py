from datetime import date

import customtkinter as ctk

from services.context import AppContext
from services.report_service import available_months, summary_for_month
from ui.components.stat_card import stat_card
from ui.tabs.background import BackgroundLoadMixin
from utils.constants import ACCENT_COLOR, EXPENSE_COLOR, INCOME_COLOR
from utils.currency import format_currency
from utils.date_helpers import current_month_str, friendly_month


def month_options(summaries, ref: date | None = None) -> list[tuple[str, str]]:
    """(month, label) pairs for the picker, most recent first."""
    return [(m, friendly_month(m)) for m in available_months(summaries, ref)]


class MonthlySummaryTab(BackgroundLoadMixin, ctk.CTkFrame):
    def __init__(self, master, ctx: AppContext, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._summaries = []
        self._months: list[str] = []
        self._month_var = ctk.StringVar(value=friendly_month(current_month_str()))

        self.grid_columnconfigure(0, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(bar, text="Month:").pack(side="left", padx=(12, 4), pady=8)
        self._month_combo = ctk.CTkComboBox(
            bar, values=[self._month_var.get()], variable=self._month_var,
            width=180, state="readonly", command=lambda _: self._show_selected(),
        )
        self._month_combo.pack(side="left")

        self._cards = ctk.CTkFrame(self, fg_color="transparent")
        self._cards.grid(row=1, column=0, sticky="ew", padx=10, pady=10)
        self._cards.grid_columnconfigure((0, 1, 2), weight=1)

        self._top_label = ctk.CTkLabel(self, text="", anchor="w", font=ctk.CTkFont(size=13))
        self._top_label.grid(row=2, column=0, sticky="ew", padx=20, pady=(0, 8))
        self._load()

    def refresh(self):
        self._load()

    def _load(self):
        user_id = self._ctx.user_id
        self._load_async(
            lambda: self._ctx.reports.get_monthly_summaries(user_id),
            self._apply,
            action="loading the monthly summary",
        )

    def _apply(self, summaries):
        self._summaries = summaries
        options = month_options(summaries)
        self._months = [m for m, _ in options]
        labels = [label for _, label in options]
        self._month_combo.configure(values=labels)
        if self._month_var.get() not in labels:
            self._month_var.set(labels[0])
        self._show_selected()

    def _show_selected(self):
        label = self._month_var.get()
        month = next(
            (m for m in self._months if friendly_month(m) == label), current_month_str()
        )
        summary = summary_for_month(self._summaries, month)

        for w in self._cards.winfo_children():
            w.destroy()
        cards = [
            ("Income", format_currency(summary.income), INCOME_COLOR),
            ("Expenses", format_currency(summary.expenses), EXPENSE_COLOR),
            ("Balance", format_currency(summary.balance),
             INCOME_COLOR if summary.balance >= 0 else EXPENSE_COLOR),
        ]
        for i, (title, value, color) in enumerate(cards):
            stat_card(self._cards, title, value, color, column=i)
        stat_card(self._cards, "Transactions", str(summary.transaction_count), ACCENT_COLOR,
                  column=0, row=1)

        if summary.top_category:
            name, amount = summary.top_category
            self._top_label.configure(text=f"Top category: {name} ({format_currency(amount)})")
        else:
            self._top_label.configure(text="No expenses recorded this month.")
