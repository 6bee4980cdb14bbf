from models.credit_card import CreditCard
from database.card_dao import CardDAO


class CardService:
    def __init__(self, card_dao: CardDAO):
        self._dao = card_dao

    def get_all(self, user_id: int) -> list[CreditCard]:
        return self._dao.get_all(user_id)

    def get_by_id(self, card_id: int) -> CreditCard | None:
        return self._dao.get_by_id(card_id)

    def create(
        self,
        user_id: int,
        name: str,
        brand: str = "",
        last4: str = "",
        credit_limit: float | None = None,
        due_day: int | None = None,
        closing_day: int | None = None,
    ) -> CreditCard:
        name, brand, last4 = self._validate(name, brand, last4, credit_limit, due_day, closing_day)
        return self._dao.create(
            user_id, name, brand, last4, credit_limit, due_day, closing_day
        )

    def update(
        self,
        card_id: int,
        name: str,
        brand: str = "",
        last4: str = "",
        credit_limit: float | None = None,
        due_day: int | None = None,
        closing_day: int | None = None,
    ) -> CreditCard:
        name, brand, last4 = self._validate(name, brand, last4, credit_limit, due_day, closing_day)
        return self._dao.update(
            card_id, name, brand, last4, credit_limit, due_day, closing_day
        )

    def delete(self, card_id: int):
        self._dao.delete(card_id)

    @staticmethod
    def _validate(name, brand, last4, credit_limit, due_day, closing_day):
        """Returns cleaned (name, brand, last4); empty optionals become None."""
        name = name.strip()
        if not name:
            raise ValueError("Card name cannot be empty.")
        last4 = (last4 or "").strip()
        if last4 and not (len(last4) == 4 and last4.isdigit()):
            raise ValueError("Last digits must be exactly 4 numbers.")
        if credit_limit is not None and credit_limit < 0:
            raise ValueError("Credit limit must be 0 or greater.")
        for label, day in (("Due day", due_day), ("Closing day", closing_day)):
            if day is not None and not 1 <= day <= 31:
                raise ValueError(f"{label} must be between 1 and 31.")
        return name, (brand or "").strip() or None, last4 or None
