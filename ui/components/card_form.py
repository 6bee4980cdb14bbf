import sqlite3

from models.credit_card import CreditCard
from services.card_service import CardService
from ui.components.error_dialog import show_store_error
from ui.components.modal import ModalForm
from utils.currency import parse_amount


class CardForm(ModalForm):
    """Add or edit a credit card."""

    def __init__(
        self,
        master,
        card_service: CardService,
        user_id: int,
        card: CreditCard | None = None,
        **kwargs,
    ):
        super().__init__(master, "Edit Card" if card else "New Card", **kwargs)
        self._svc = card_service
        self._user_id = user_id
        self._card = card

        def text(value):
            return "" if value is None else str(value)

        self._name_var = self._entry("Name:", card.name if card else "")
        self._brand_var = self._entry("Brand:", text(card.brand) if card else "")
        self._last4_var = self._entry("Last 4 digits:", text(card.last4) if card else "", width=80)
        self._limit_var = self._entry(
            "Credit limit:",
            f"{card.credit_limit:.2f}" if card and card.credit_limit is not None else "",
        )
        self._due_var = self._entry("Due day:", text(card.due_day) if card else "", width=80)
        self._closing_var = self._entry(
            "Closing day:", text(card.closing_day) if card else "", width=80
        )

        self._build_footer(self._on_save)
        self._show()

    @staticmethod
    def _optional_day(raw: str) -> int | None:
        raw = raw.strip()
        if not raw:
            return None
        if not raw.isdigit():
            raise ValueError("Days must be whole numbers between 1 and 31.")
        return int(raw)

    def _on_save(self):
        try:
            raw_limit = self._limit_var.get().strip()
            credit_limit = parse_amount(raw_limit) if raw_limit else None
            if raw_limit and credit_limit is None:
                raise ValueError("Credit limit must be a number.")
            fields = dict(
                name=self._name_var.get(),
                brand=self._brand_var.get(),
                last4=self._last4_var.get(),
                credit_limit=credit_limit,
                due_day=self._optional_day(self._due_var.get()),
                closing_day=self._optional_day(self._closing_var.get()),
            )
            if self._card:
                self._svc.update(self._card.id, **fields)
            else:
                self._svc.create(self._user_id, **fields)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self, "saving a card", e)
            return
        self._done()
