from dataclasses import dataclass
from typing import Optional

GOAL_STATUSES = ("active", "completed", "cancelled")


@dataclass
class SavingsGoal:
    id: int
    user_id: int
    name: str
    target_amount: float
    current_amount: float = 0.0
    icon: str = "trophy"
    color: str = "#A259FF"
    deadline: Optional[str] = None  # 'YYYY-MM-DD'
    status: str = "active"
    created_at: str = ""
    updated_at: str = ""

    @property
    def progress(self) -> float:
        """Percentage saved, capped at 100."""
        if self.target_amount <= 0:
            return 0.0
        return min(self.current_amount * 100 / self.target_amount, 100.0)

    @property
    def remaining(self) -> float:
        return max(0.0, self.target_amount - self.current_amount)


@dataclass
class Achievement:
    id: int
    user_id: int
    goal_id: Optional[int]
    title: str
    description: str
    icon: str = "trophy"
    unlocked_at: str = ""
