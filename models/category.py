from dataclasses import dataclass

CATEGORY_TYPES = ("expense", "income")


@dataclass
class Category:
    id: int
    user_id: int
    name: str
    type: str           # 'income' | 'expense'
    icon: str = "logo-usd"
    color: str = "#A259FF"
    created_at: str = ""
