import sqlite3

import customtkinter as ctk

from services.context import AppContext
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.error_dialog import show_store_error
from ui.tabs.background import BackgroundLoadMixin
from utils.constants import ACCENT_COLOR, EXPENSE_COLOR, INCOME_COLOR
from utils.currency import format_currency, parse_amount
from utils.date_helpers import friendly_month


class AlertsTab(BackgroundLoadMixin, ctk.CTkFrame):
    """Monthly spending limit and how much of it this month has used."""

    def __init__(self, master, ctx: AppContext, notify_refresh, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._notify_refresh = notify_refresh
        self._limit_var = ctk.StringVar()
        self._enabled_var = ctk.BooleanVar(value=True)
        self._error_var = ctk.StringVar()

        self.grid_columnconfigure(0, weight=1)
        self._build_form()
        self._build_status()
        self._load()

    def refresh(self):
        self._load()

    def _build_form(self):
        section = ctk.CTkFrame(self, corner_radius=8)
        section.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        section.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            section, text="Spending Alert", anchor="w",
            font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=12, pady=(10, 4))

        ctk.CTkLabel(section, text="Monthly limit:").grid(row=1, column=0, padx=(12, 4), pady=6)
        ctk.CTkEntry(section, textvariable=self._limit_var, width=140).grid(
            row=1, column=1, padx=4, pady=6, sticky="w"
        )
        ctk.CTkSwitch(
            section, text="Alert enabled", variable=self._enabled_var,
            command=self._on_toggle,
        ).grid(row=1, column=2, padx=12)

        btns = ctk.CTkFrame(section, fg_color="transparent")
        btns.grid(row=2, column=0, columnspan=3, sticky="w", padx=8, pady=(4, 4))
        ctk.CTkButton(
            btns, text="Save Limit", fg_color=ACCENT_COLOR, width=110, command=self._on_save,
        ).pack(side="left", padx=4)
        self._remove_btn = ctk.CTkButton(
            btns, text="Remove", width=90,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=self._on_remove,
        )
        self._remove_btn.pack(side="left", padx=4)

        ctk.CTkLabel(
            section, textvariable=self._error_var, text_color=EXPENSE_COLOR, anchor="w",
        ).grid(row=3, column=0, columnspan=3, sticky="w", padx=12, pady=(0, 8))

    def _build_status(self):
        self._status = ctk.CTkFrame(self, corner_radius=8)
        self._status.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        self._status.grid_columnconfigure(0, weight=1)

        self._month_label = ctk.CTkLabel(
            self._status, text="", anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
        )
        self._month_label.grid(row=0, column=0, sticky="w", padx=12, pady=(10, 2))
        self._spent_label = ctk.CTkLabel(self._status, text="", anchor="w")
        self._spent_label.grid(row=1, column=0, sticky="w", padx=12)
        self._bar = ctk.CTkProgressBar(self._status)
        self._bar.grid(row=2, column=0, sticky="ew", padx=12, pady=8)
        self._state_label = ctk.CTkLabel(self._status, text="", anchor="w")
        self._state_label.grid(row=3, column=0, sticky="w", padx=12, pady=(0, 10))

    def _load(self):
        user_id = self._ctx.user_id
        self._load_async(
            lambda: self._ctx.alerts.get_status(user_id),
            self._apply,
            action="loading the spending alert",
        )

    def _apply(self, status):
        self._error_var.set("")
        alert = status.alert
        if alert:
            self._limit_var.set(f"{alert.monthly_limit:.2f}")
            self._enabled_var.set(alert.enabled)
        else:
            self._limit_var.set("")
            self._enabled_var.set(True)

        self._month_label.configure(text=friendly_month(status.month))
        if alert is None:
            self._spent_label.configure(
                text=f"Spent this month: {format_currency(status.spending)}"
            )
            self._bar.set(0)
            self._state_label.configure(text="No monthly limit set.", text_color="gray60")
            return

        self._spent_label.configure(
            text=f"{format_currency(status.spending)} of {format_currency(status.limit)}"
                 f"  ·  {status.percentage:.0f}%"
        )
        self._bar.set(status.percentage / 100)
        if not alert.enabled:
            self._bar.configure(progress_color="gray50")
            self._state_label.configure(text="Alert disabled.", text_color="gray60")
        elif status.is_over_limit:
            self._bar.configure(progress_color=EXPENSE_COLOR)
            self._state_label.configure(
                text=f"Limit exceeded by {format_currency(status.spending - status.limit)}.",
                text_color=EXPENSE_COLOR,
            )
        else:
            self._bar.configure(progress_color=INCOME_COLOR)
            self._state_label.configure(
                text=f"{format_currency(status.remaining)} left this month.",
                text_color=INCOME_COLOR,
            )

    def _on_save(self):
        limit = parse_amount(self._limit_var.get())
        if limit is None:
            self._error_var.set("Invalid amount.")
            return
        self._write(
            lambda: self._ctx.alerts.upsert(self._ctx.user_id, limit, self._enabled_var.get()),
            "saving the spending alert",
        )

    def _on_toggle(self):
        if self._ctx.alerts.get(self._ctx.user_id) is None:
            # Nothing stored yet; the switch applies on the next save.
            return
        self._write(
            lambda: self._ctx.alerts.set_enabled(self._ctx.user_id, self._enabled_var.get()),
            "updating the spending alert",
        )

    def _on_remove(self):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Remove Alert",
            message="Remove the monthly spending limit?",
            confirm_text="Remove",
        )
        if not dlg.result:
            return
        self._write(lambda: self._ctx.alerts.delete(self._ctx.user_id), "removing the alert")

    def _write(self, action, label):
        try:
            action()
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), label, e)
            return
        self._notify_refresh("alert")
