from dataclasses import dataclass

from models.transaction import Transaction, TRANSACTION_TYPES, EXPENSE_TYPES
from database.transaction_dao import TransactionDAO
from utils.date_helpers import parse_date, today_str

TYPE_FILTERS = ("all", "income", "expense")


@dataclass
class TransactionFilter:
    search: str = ""
    type: str = "all"                  # 'all' | 'income' | 'expense' (includes card_expense)
    account_id: int | None = None
    card_id: int | None = None
    category: str | None = None
    start_date: str = ""               # 'YYYY-MM-DD', inclusive
    end_date: str = ""

    @property
    def active_count(self) -> int:
        """Number of non-search filters set, for the filter badge."""
        return sum((
            self.type != "all",
            self.account_id is not None,
            self.card_id is not None,
            self.category is not None,
            bool(self.start_date),
            bool(self.end_date),
        ))


def filter_transactions(
    transactions: list[Transaction], criteria: TransactionFilter
) -> list[Transaction]:
    """Apply every criterion; order of the input list is kept."""
    needle = criteria.search.strip().lower()
    result = []
    for tx in transactions:
        if needle and needle not in tx.description.lower():
            continue
        if criteria.type == "income" and tx.type != "income":
            continue
        if criteria.type == "expense" and tx.type not in EXPENSE_TYPES:
            continue
        if criteria.account_id is not None and tx.account_id != criteria.account_id:
            continue
        if criteria.card_id is not None and tx.card_id != criteria.card_id:
            continue
        if criteria.category is not None and tx.category != criteria.category:
            continue
        if criteria.start_date and tx.date < criteria.start_date:
            continue
        if criteria.end_date and tx.date > criteria.end_date:
            continue
        result.append(tx)
    return result


def summarize(transactions: list[Transaction]) -> dict:
    """Return {income, expense, balance, count}; transfers only count."""
    income = sum(t.amount for t in transactions if t.type == "income")
    expense = sum(t.amount for t in transactions if t.type in EXPENSE_TYPES)
    return {
        "income": income,
        "expense": expense,
        "balance": income - expense,
        "count": len(transactions),
    }


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO):
        self._dao = tx_dao

    def get_all(self, user_id: int) -> list[Transaction]:
        return self._dao.get_all(user_id)

    def get_by_id(self, tx_id: int) -> Transaction | None:
        return self._dao.get_by_id(tx_id)

    def get_by_type(self, user_id: int, type_: str) -> list[Transaction]:
        return self._dao.get_by_type(user_id, type_)

    def get_by_date_range(
        self, user_id: int, start_date: str, end_date: str
    ) -> list[Transaction]:
        return self._dao.get_by_date_range(user_id, start_date, end_date)

    def get_filtered(self, user_id: int, criteria: TransactionFilter) -> list[Transaction]:
        return filter_transactions(self._dao.get_all(user_id), criteria)

    def create(
        self,
        user_id: int,
        description: str,
        amount: float,
        type_: str,
        date: str = "",
        category: str | None = None,
        account_id: int | None = None,
        card_id: int | None = None,
    ) -> Transaction:
        fields = self._validate(description, amount, type_, date, category, card_id)
        return self._dao.create(user_id, account_id=account_id, **fields)

    def update(
        self,
        tx_id: int,
        description: str,
        amount: float,
        type_: str,
        date: str = "",
        category: str | None = None,
        account_id: int | None = None,
        card_id: int | None = None,
    ) -> Transaction:
        fields = self._validate(description, amount, type_, date, category, card_id)
        return self._dao.update(tx_id, account_id=account_id, **fields)

    def delete(self, tx_id: int):
        self._dao.delete(tx_id)

    @staticmethod
    def _validate(description, amount, type_, date, category, card_id) -> dict:
        description = (description or "").strip()
        if not description:
            raise ValueError("Description cannot be empty.")
        if amount is None or amount <= 0:
            raise ValueError("Amount must be positive.")
        if type_ not in TRANSACTION_TYPES:
            raise ValueError(f"Invalid type: {type_}")
        date = date or today_str()
        if not parse_date(date):
            raise ValueError("Invalid date format. Use YYYY-MM-DD.")
        if type_ == "card_expense":
            if card_id is None:
                raise ValueError("Select a card for a card expense.")
        else:
            card_id = None
        return {
            "description": description,
            "amount": amount,
            "type_": type_,
            "date": parse_date(date).isoformat(),
            "category": (category or "").strip() or None,
            "card_id": card_id,
        }
