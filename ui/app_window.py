import sqlite3

import customtkinter as ctk

from services.auth_service import USER_UPDATED
from services.context import AppContext
from ui.components.alert_banner import AlertBanner
from ui.components.error_dialog import show_store_error
from ui.tabs.accounts_tab import AccountsTab
from ui.tabs.alerts_tab import AlertsTab
from ui.tabs.cards_tab import CardsTab
from ui.tabs.categories_tab import CategoriesTab
from ui.tabs.goals_tab import GoalsTab
from ui.tabs.home_tab import HomeTab
from ui.tabs.insights_tab import InsightsTab
from ui.tabs.monthly_summary_tab import MonthlySummaryTab
from ui.tabs.reports_tab import ReportsTab
from ui.tabs.settings_tab import SettingsTab
from ui.tabs.transactions_tab import TransactionsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT
from utils.currency import format_currency


_ALL = "All"

_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"home", "transactions", "reports", "monthly", "insights", "alerts"},
    "selection":   {"home", "transactions", "reports"},
    "account":     {"home", "transactions", "accounts", "reports"},
    "card":        {"transactions", "cards", "reports"},
    "category":    {"transactions", "categories"},
    "goal":        {"goals"},
    "alert":       {"alerts"},
    "profile":     {"home", "settings"},
    "theme":       {"reports"},
    "full":        {"home", "transactions", "accounts", "cards", "categories", "reports",
                    "monthly", "insights", "goals", "alerts", "settings"},
}


class AppWindow(ctk.CTk):
    """Main window for a signed-in user. self.signed_out tells main() to show login again."""

    def __init__(self, ctx: AppContext, date_format: str = "DD/MM/YYYY", **kwargs):
        super().__init__(**kwargs)
        self._ctx = ctx
        self._date_format = date_format
        self.signed_out = False
        self._accounts = []
        self._cards = []

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_selection_bar()
        self._build_banner_area()
        self._build_tabs()
        self._refresh_banner()

        self._unsubscribe = ctx.auth.on_auth_state_change(self._on_auth_event)
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # ── Account / card selection ─────────────────────────────────────────────
    def _build_selection_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(bar, text="Account:", anchor="e").pack(side="left", padx=(12, 4), pady=8)
        self._acct_var = ctk.StringVar(value=_ALL)
        self._acct_combo = ctk.CTkComboBox(
            bar, values=[_ALL], variable=self._acct_var, width=200, state="readonly",
            command=lambda _: self._on_selection_changed(),
        )
        self._acct_combo.pack(side="left", padx=4)

        ctk.CTkLabel(bar, text="Card:", anchor="e").pack(side="left", padx=(12, 4))
        self._card_var = ctk.StringVar(value=_ALL)
        self._card_combo = ctk.CTkComboBox(
            bar, values=[_ALL], variable=self._card_var, width=200, state="readonly",
            command=lambda _: self._on_selection_changed(),
        )
        self._card_combo.pack(side="left", padx=4)

        self._balance_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._balance_label.pack(side="left", padx=(12, 8))

        ctk.CTkButton(
            bar, text="Sign Out", width=90,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=self.sign_out,
        ).pack(side="right", padx=12)

        self._refresh_selection_bar()

    def _refresh_selection_bar(self):
        """Reload accounts and cards, restoring the stored selection when it still exists."""
        user_id = self._ctx.user_id
        settings = self._ctx.settings
        try:
            self._accounts = self._ctx.accounts.get_all(user_id)
            self._cards = self._ctx.cards.get_all(user_id)
            account_id = settings.get_active_account(user_id)
            card_id = settings.get_active_card(user_id)
        except sqlite3.Error as e:
            show_store_error(self, "loading accounts and cards", e)
            return

        account = next((a for a in self._accounts if a.id == account_id), None)
        card = next((c for c in self._cards if c.id == card_id), None)
        self._acct_combo.configure(values=[_ALL] + [a.name for a in self._accounts])
        self._card_combo.configure(values=[_ALL] + [c.display_name for c in self._cards])
        self._acct_var.set(account.name if account else _ALL)
        self._card_var.set(card.display_name if card else _ALL)
        self._update_balance_label(account)

    def _update_balance_label(self, account):
        if account:
            self._balance_label.configure(
                text=f"[{account.type_label}] {format_currency(account.balance)}"
            )
        else:
            self._balance_label.configure(text="")

    def get_selection(self) -> tuple[int | None, int | None]:
        account = next((a for a in self._accounts if a.name == self._acct_var.get()), None)
        card = next((c for c in self._cards if c.display_name == self._card_var.get()), None)
        return (account.id if account else None, card.id if card else None)

    def _on_selection_changed(self):
        account_id, card_id = self.get_selection()
        user_id = self._ctx.user_id
        try:
            self._ctx.settings.set_active_account(user_id, account_id)
            self._ctx.settings.set_active_card(user_id, card_id)
        except sqlite3.Error as e:
            show_store_error(self, "saving the selection", e)
        self._update_balance_label(
            next((a for a in self._accounts if a.id == account_id), None)
        )
        self.notify_tabs_refresh("selection")

    # ── Banner ───────────────────────────────────────────────────────────────
    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8)

    def _refresh_banner(self):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        try:
            status = self._ctx.alerts.get_status(self._ctx.user_id)
        except sqlite3.Error as e:
            show_store_error(self, "checking the spending alert", e)
            return
        if not status.is_over_limit:
            return
        over = status.spending - status.limit
        AlertBanner(
            self._banner_frame,
            message=f"Monthly spending limit exceeded by {format_currency(over)}.",
            kind="warning",
            action_text="View",
            action_cmd=lambda: self._tabview.set("Alerts"),
        ).pack(fill="x", pady=2)

    # ── Tabs ─────────────────────────────────────────────────────────────────
    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))

        tab_names = [
            "Home", "Transactions", "Accounts", "Cards", "Categories",
            "Reports", "Monthly", "Insights", "Goals", "Alerts", "Settings",
        ]
        for tab_name in tab_names:
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        ctx, notify = self._ctx, self.notify_tabs_refresh
        selection = dict(
            ctx=ctx, get_selection=self.get_selection,
            notify_refresh=notify, date_format=self._date_format,
        )
        self._tabs = {
            "home": HomeTab(self._tabview.tab("Home"), **selection),
            "transactions": TransactionsTab(self._tabview.tab("Transactions"), **selection),
            "accounts": AccountsTab(self._tabview.tab("Accounts"), ctx, notify),
            "cards": CardsTab(self._tabview.tab("Cards"), ctx, notify),
            "categories": CategoriesTab(self._tabview.tab("Categories"), ctx, notify),
            "reports": ReportsTab(self._tabview.tab("Reports"), **selection),
            "monthly": MonthlySummaryTab(self._tabview.tab("Monthly"), ctx),
            "insights": InsightsTab(self._tabview.tab("Insights"), ctx),
            "goals": GoalsTab(
                self._tabview.tab("Goals"), ctx, notify, date_format=self._date_format,
            ),
            "alerts": AlertsTab(self._tabview.tab("Alerts"), ctx, notify),
            "settings": SettingsTab(
                self._tabview.tab("Settings"), ctx, notify, on_sign_out=self.sign_out,
            ),
        }
        for tab in self._tabs.values():
            tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        if scope in ("account", "card", "full"):
            self._refresh_selection_bar()
        if scope in ("transaction", "alert", "full"):
            self._refresh_banner()
        for name in _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"]):
            self._tabs[name].refresh()

    def _on_auth_event(self, event, session):
        if event == USER_UPDATED:
            self.notify_tabs_refresh("profile")

    # ── Session ──────────────────────────────────────────────────────────────
    def sign_out(self):
        self._unsubscribe()
        self._ctx.auth.sign_out()
        self.signed_out = True
        self.destroy()

    def _on_close(self):
        self._unsubscribe()
        self.destroy()
