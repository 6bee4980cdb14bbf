from dataclasses import dataclass
from typing import Optional


@dataclass
class CreditCard:
    id: int
    user_id: int
    name: str
    brand: Optional[str] = None
    last4: Optional[str] = None
    credit_limit: Optional[float] = None
    due_day: Optional[int] = None       # 1-31
    closing_day: Optional[int] = None   # 1-31
    created_at: str = ""
    updated_at: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.name} •••• {self.last4}" if self.last4 else self.name
