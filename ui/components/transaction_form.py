import sqlite3

import customtkinter as ctk

from models.transaction import Transaction, TRANSACTION_TYPE_LABELS
from services.context import AppContext
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.date_picker import DatePickerWidget
from ui.components.error_dialog import show_store_error
from ui.components.modal import ModalForm
from utils.currency import parse_amount
from utils.date_helpers import today_str

_NONE = "(none)"


class TransactionForm(ModalForm):
    """Add or edit a transaction of any type.

    The card selector is only shown for card expenses; the account and card
    default to the active selection of the main window.
    """

    _last_date: str = today_str()  # reset to today on each app launch
    _LABEL_TO_TYPE = {v: k for k, v in TRANSACTION_TYPE_LABELS.items()}

    def __init__(
        self,
        master,
        ctx: AppContext,
        transaction: Transaction | None = None,
        initial_type: str = "expense",
        account_id: int | None = None,
        card_id: int | None = None,
        date_format: str = "DD/MM/YYYY",
        **kwargs,
    ):
        super().__init__(
            master, "Edit Transaction" if transaction else "New Transaction", **kwargs
        )
        self._ctx = ctx
        self._user_id = ctx.user_id
        self._tx = transaction
        tx = transaction

        self._accounts = ctx.accounts.get_all(self._user_id)
        self._cards = ctx.cards.get_all(self._user_id)

        self._type_var = ctk.StringVar(
            value=TRANSACTION_TYPE_LABELS[tx.type if tx else initial_type]
        )
        self._widget("Type:", ctk.CTkSegmentedButton(
            self, values=list(TRANSACTION_TYPE_LABELS.values()),
            variable=self._type_var, command=self._on_type_change,
        ), sticky="w")

        self._desc_var = self._entry("Description:", tx.description if tx else "")
        self._amount_var = self._entry("Amount:", f"{tx.amount:.2f}" if tx else "")

        self._date_picker = self._widget("Date:", DatePickerWidget(
            self, initial_date=tx.date if tx else TransactionForm._last_date,
            date_format=date_format,
        ), sticky="w")

        self._cat_var = ctk.StringVar(value=(tx.category if tx and tx.category else _NONE))
        self._cat_combo = self._widget("Category:", ctk.CTkComboBox(
            self, values=[_NONE], variable=self._cat_var, width=240,
        ))

        acct_id = tx.account_id if tx else account_id
        self._acct_var = ctk.StringVar(value=self._name_for(self._accounts, acct_id))
        self._widget("Account:", ctk.CTkComboBox(
            self, values=[_NONE] + [a.name for a in self._accounts],
            variable=self._acct_var, width=240, state="readonly",
        ))

        selected_card = tx.card_id if tx else card_id
        if selected_card is None and self._cards:
            selected_card = self._cards[0].id
        self._card_var = ctk.StringVar(value=self._name_for(self._cards, selected_card))
        self._card_label = ctk.CTkLabel(self, text="Card:")
        self._card_label.grid(row=self._row, column=0, padx=(16, 8), pady=4, sticky="e")
        self._card_combo = ctk.CTkComboBox(
            self, values=[_NONE] + [c.name for c in self._cards],
            variable=self._card_var, width=240, state="readonly",
        )
        self._card_combo.grid(row=self._row, column=1, padx=(0, 16), pady=4, sticky="ew")
        self._row += 1

        self._build_footer(self._on_save, self._on_delete if tx else None)
        self._on_type_change()
        self._show()

    @staticmethod
    def _name_for(items, item_id) -> str:
        return next((i.name for i in items if i.id == item_id), _NONE)

    @staticmethod
    def _id_for(items, name) -> int | None:
        return next((i.id for i in items if i.name == name), None)

    def _current_type(self) -> str:
        return self._LABEL_TO_TYPE.get(self._type_var.get(), "expense")

    def _on_type_change(self, _value=None):
        type_ = self._current_type()
        if type_ == "card_expense":
            self._card_label.grid()
            self._card_combo.grid()
        else:
            self._card_label.grid_remove()
            self._card_combo.grid_remove()

        cat_type = "income" if type_ == "income" else "expense"
        names = [c.name for c in self._ctx.categories.get_by_type(self._user_id, cat_type)]
        self._cat_combo.configure(values=[_NONE] + names)

    def _on_save(self):
        amount = parse_amount(self._amount_var.get())
        if amount is None:
            self._error_var.set("Invalid amount.")
            return
        if not self._date_picker.is_valid():
            self._error_var.set("Invalid date.")
            return
        category = self._cat_var.get().strip()
        fields = dict(
            description=self._desc_var.get(),
            amount=amount,
            type_=self._current_type(),
            date=self._date_picker.get(),
            category=None if category in ("", _NONE) else category,
            account_id=self._id_for(self._accounts, self._acct_var.get()),
            card_id=self._id_for(self._cards, self._card_var.get()),
        )
        try:
            if self._tx:
                self._ctx.transactions.update(self._tx.id, **fields)
            else:
                self._ctx.transactions.create(self._user_id, **fields)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self, "saving a transaction", e)
            return
        TransactionForm._last_date = fields["date"]
        self._done()

    def _on_delete(self):
        dlg = ConfirmDialog(
            self,
            title="Delete Transaction",
            message=f"Delete '{self._tx.description}'? This cannot be undone.",
        )
        if not dlg.result:
            self.grab_set()
            return
        try:
            self._ctx.transactions.delete(self._tx.id)
        except sqlite3.Error as e:
            show_store_error(self, "deleting a transaction", e)
            return
        self._done()
