import logging

from models.savings_goal import SavingsGoal, Achievement
from database.savings_goal_dao import SavingsGoalDAO
from database.achievement_dao import AchievementDAO
from utils.date_helpers import parse_date

logger = logging.getLogger(__name__)


class SavingsGoalService:
    def __init__(self, goal_dao: SavingsGoalDAO, achievement_dao: AchievementDAO):
        self._dao = goal_dao
        self._achievements = achievement_dao

    def get_all(self, user_id: int) -> list[SavingsGoal]:
        return self._dao.get_all(user_id)

    def get_by_status(self, user_id: int, status: str) -> list[SavingsGoal]:
        return self._dao.get_by_status(user_id, status)

    def get_by_id(self, goal_id: int) -> SavingsGoal | None:
        return self._dao.get_by_id(goal_id)

    def create(
        self,
        user_id: int,
        name: str,
        target_amount: float,
        icon: str = "trophy",
        color: str = "#A259FF",
        deadline: str | None = None,
    ) -> SavingsGoal:
        name = name.strip()
        deadline = self._validate(name, target_amount, deadline)
        return self._dao.create(user_id, name, target_amount, icon, color, deadline)

    def update(
        self,
        goal_id: int,
        name: str,
        target_amount: float,
        icon: str = "trophy",
        color: str = "#A259FF",
        deadline: str | None = None,
    ) -> SavingsGoal:
        goal = self._require(goal_id)
        name = name.strip()
        deadline = self._validate(name, target_amount, deadline)
        status = goal.status
        if status != "cancelled":
            status = "completed" if goal.current_amount >= target_amount else "active"
        return self._dao.update(goal_id, name, target_amount, icon, color, deadline, status)

    def deposit(self, goal_id: int, amount: float) -> SavingsGoal:
        """Add `amount` to the goal; unlocks an achievement the first time it completes."""
        if amount is None or amount <= 0:
            raise ValueError("Deposit amount must be positive.")
        goal = self._require(goal_id)
        new_amount = goal.current_amount + amount
        status = "completed" if new_amount >= goal.target_amount else "active"
        updated = self._dao.set_amount(goal_id, new_amount, status)
        if status == "completed" and self._achievements.get_by_goal(goal_id) is None:
            self._achievements.create(
                user_id=goal.user_id,
                goal_id=goal_id,
                title=f"Goal reached: {goal.name}",
                description=f"You saved the full target for {goal.name}.",
                icon=goal.icon,
            )
            logger.info("Achievement unlocked for goal %s", goal_id)
        return updated

    def cancel(self, goal_id: int) -> SavingsGoal:
        self._require(goal_id)
        return self._dao.set_status(goal_id, "cancelled")

    def delete(self, goal_id: int):
        self._dao.delete(goal_id)

    def get_stats(self, user_id: int) -> dict:
        return {
            "active": self._dao.count_by_status(user_id, "active"),
            "completed": self._dao.count_by_status(user_id, "completed"),
            "achievements": self._achievements.count(user_id),
        }

    def get_achievements(self, user_id: int) -> list[Achievement]:
        return self._achievements.get_all(user_id)

    @staticmethod
    def progress(goal: SavingsGoal) -> float:
        return goal.progress

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _require(self, goal_id: int) -> SavingsGoal:
        goal = self._dao.get_by_id(goal_id)
        if goal is None:
            raise ValueError("Goal not found.")
        return goal

    @staticmethod
    def _validate(name: str, target_amount: float, deadline: str | None) -> str | None:
        if not name:
            raise ValueError("Goal name cannot be empty.")
        if target_amount is None or target_amount <= 0:
            raise ValueError("Target amount must be positive.")
        if not deadline:
            return None
        parsed = parse_date(deadline)
        if parsed is None:
            raise ValueError("Invalid deadline. Use YYYY-MM-DD.")
        return parsed.isoformat()
