import sqlite3

import customtkinter as ctk

from services.context import AppContext
from ui.components.account_form import AccountForm
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.error_dialog import show_store_error
from utils.constants import ACCENT_COLOR, EXPENSE_COLOR, INCOME_COLOR
from utils.currency import format_currency


class AccountsTab(ctk.CTkFrame):
    def __init__(self, master, ctx: AppContext, notify_refresh, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(
            bar, text="Accounts", font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(side="left", padx=(12, 16), pady=8)
        self._total_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._total_label.pack(side="left")
        ctk.CTkButton(
            bar, text="+ Add Account", fg_color=ACCENT_COLOR, command=self._open_add,
        ).pack(side="right", padx=8, pady=6)

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()
        try:
            accounts = self._ctx.accounts.get_all(self._ctx.user_id)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "loading accounts", e)
            return

        self._total_label.configure(
            text=f"Total balance: {format_currency(sum(a.balance for a in accounts))}"
        )
        if not accounts:
            ctk.CTkLabel(
                self._scroll, text="No accounts yet. Add your first one.", text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        for i, account in enumerate(accounts):
            row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
            row.grid(row=i, column=0, sticky="ew", padx=4, pady=3)
            row.grid_columnconfigure(0, weight=1)

            ctk.CTkLabel(
                row, text=account.name, anchor="w",
                font=ctk.CTkFont(size=13, weight="bold"),
            ).grid(row=0, column=0, sticky="w", padx=12, pady=(8, 0))
            detail = account.type_label
            if account.institution:
                detail += f" · {account.institution}"
            ctk.CTkLabel(
                row, text=detail, anchor="w", text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=1, column=0, sticky="w", padx=12, pady=(0, 8))
            ctk.CTkLabel(
                row, text=format_currency(account.balance),
                text_color=INCOME_COLOR if account.balance >= 0 else EXPENSE_COLOR,
                font=ctk.CTkFont(size=14, weight="bold"),
            ).grid(row=0, column=1, rowspan=2, padx=8)

            btns = ctk.CTkFrame(row, fg_color="transparent")
            btns.grid(row=0, column=2, rowspan=2, padx=(4, 10))
            ctk.CTkButton(
                btns, text="Edit", width=60, height=26,
                fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
                command=lambda a=account: self._open_edit(a),
            ).pack(side="left", padx=(0, 4))
            ctk.CTkButton(
                btns, text="Delete", width=65, height=26,
                fg_color=EXPENSE_COLOR, hover_color="#D32F2F",
                command=lambda a=account: self._on_delete(a),
            ).pack(side="left")

    def _open_add(self):
        form = AccountForm(self.winfo_toplevel(), self._ctx.accounts, self._ctx.user_id)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("account")

    def _open_edit(self, account):
        form = AccountForm(
            self.winfo_toplevel(), self._ctx.accounts, self._ctx.user_id, account=account,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("account")

    def _on_delete(self, account):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Account",
            message=f"Delete '{account.name}'? Its transactions are kept.",
        )
        if not dlg.result:
            return
        try:
            self._ctx.accounts.delete(account.id)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "deleting an account", e)
            return
        self._notify_refresh("account")
