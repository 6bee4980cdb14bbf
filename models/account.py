from dataclasses import dataclass
from typing import Optional

ACCOUNT_TYPES = ("checking", "savings")

ACCOUNT_TYPE_LABELS = {
    "checking": "Checking",
    "savings": "Savings",
}


@dataclass
class Account:
    id: int
    user_id: int
    name: str
    institution: Optional[str] = None
    type: str = "checking"
    balance: float = 0.0
    created_at: str = ""
    updated_at: str = ""

    @property
    def type_label(self) -> str:
        return ACCOUNT_TYPE_LABELS.get(self.type, self.type.title())
