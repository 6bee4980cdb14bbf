import sqlite3

import customtkinter as ctk

from models.account import Account, ACCOUNT_TYPE_LABELS
from services.account_service import AccountService
from ui.components.error_dialog import show_store_error
from ui.components.modal import ModalForm
from utils.currency import parse_amount


class AccountForm(ModalForm):
    """Add or edit an account. Sets self.saved = True on success."""

    _LABEL_TO_KEY = {v: k for k, v in ACCOUNT_TYPE_LABELS.items()}

    def __init__(
        self,
        master,
        account_service: AccountService,
        user_id: int,
        account: Account | None = None,
        **kwargs,
    ):
        super().__init__(master, "Edit Account" if account else "New Account", **kwargs)
        self._svc = account_service
        self._user_id = user_id
        self._account = account

        self._name_var = self._entry("Name:", account.name if account else "")
        self._inst_var = self._entry(
            "Institution:", (account.institution or "") if account else ""
        )
        self._type_var = ctk.StringVar(
            value=ACCOUNT_TYPE_LABELS[account.type if account else "checking"]
        )
        self._widget("Type:", ctk.CTkComboBox(
            self, values=list(ACCOUNT_TYPE_LABELS.values()),
            variable=self._type_var, width=240, state="readonly",
        ))
        self._balance_var = self._entry(
            "Balance:", f"{account.balance:.2f}" if account else ""
        )
        if not account:
            ctk.CTkLabel(
                self, text="A positive opening balance is recorded as income.",
                text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=self._row, column=1, padx=(0, 16), pady=(0, 4), sticky="w")
            self._row += 1

        self._build_footer(self._on_save)
        self._show()

    def _on_save(self):
        raw_balance = self._balance_var.get().strip()
        balance = parse_amount(raw_balance) if raw_balance else 0.0
        if balance is None:
            self._error_var.set("Balance must be a number.")
            return
        account_type = self._LABEL_TO_KEY.get(self._type_var.get(), "checking")
        try:
            if self._account:
                self._svc.update(
                    self._account.id, self._name_var.get(), self._inst_var.get(),
                    account_type, balance,
                )
            else:
                self._svc.create(
                    self._user_id, self._name_var.get(), self._inst_var.get(),
                    account_type, balance,
                )
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self, "saving an account", e)
            return
        self._done()
