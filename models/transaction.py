from dataclasses import dataclass
from typing import Optional

TRANSACTION_TYPES = ("income", "expense", "card_expense", "transfer")
EXPENSE_TYPES = ("expense", "card_expense")

TRANSACTION_TYPE_LABELS = {
    "income": "Income",
    "expense": "Expense",
    "card_expense": "Card Expense",
    "transfer": "Transfer",
}


@dataclass
class Transaction:
    id: int
    user_id: int
    description: str
    amount: float
    type: str                       # see TRANSACTION_TYPES
    date: str                       # 'YYYY-MM-DD'
    category: Optional[str] = None  # category name, not an id
    account_id: Optional[int] = None
    card_id: Optional[int] = None
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_expense(self) -> bool:
        return self.type in EXPENSE_TYPES

    @property
    def is_income(self) -> bool:
        return self.type == "income"
