from dataclasses import dataclass


@dataclass
class SpendingAlert:
    id: int
    user_id: int
    monthly_limit: float
    enabled: bool = True
    created_at: str = ""
    updated_at: str = ""
