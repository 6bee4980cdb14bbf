from typing import Optional
from database.db_manager import DatabaseManager
from models.savings_goal import SavingsGoal
from utils.date_helpers import now_iso


class SavingsGoalDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> SavingsGoal:
        return SavingsGoal(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            target_amount=row["target_amount"],
            current_amount=row["current_amount"],
            icon=row["icon"],
            color=row["color"],
            deadline=row["deadline"],
            status=row["status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_all(self, user_id: int) -> list[SavingsGoal]:
        """Newest first."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM savings_goals WHERE user_id = ? ORDER BY created_at DESC, id DESC",
            (user_id,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_status(self, user_id: int, status: str) -> list[SavingsGoal]:
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT * FROM savings_goals
               WHERE user_id = ? AND status = ?
               ORDER BY created_at DESC, id DESC""",
            (user_id, status),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, goal_id: int) -> Optional[SavingsGoal]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM savings_goals WHERE id = ?", (goal_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def count_by_status(self, user_id: int, status: str) -> int:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT COUNT(*) AS cnt FROM savings_goals WHERE user_id = ? AND status = ?",
            (user_id, status),
        ).fetchone()
        return row["cnt"]

    def create(
        self,
        user_id: int,
        name: str,
        target_amount: float,
        icon: str,
        color: str,
        deadline: str | None = None,
        current_amount: float = 0.0,
        status: str = "active",
    ) -> SavingsGoal:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO savings_goals
               (user_id, name, target_amount, current_amount, icon, color, deadline, status)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (user_id, name, target_amount, current_amount, icon, color, deadline, status),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        goal_id: int,
        name: str,
        target_amount: float,
        icon: str,
        color: str,
        deadline: str | None,
        status: str,
    ) -> Optional[SavingsGoal]:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE savings_goals
               SET name=?, target_amount=?, icon=?, color=?, deadline=?, status=?,
                   updated_at=?
               WHERE id=?""",
            (name, target_amount, icon, color, deadline, status, now_iso(), goal_id),
        )
        conn.commit()
        return self.get_by_id(goal_id)

    def set_amount(self, goal_id: int, current_amount: float, status: str) -> Optional[SavingsGoal]:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE savings_goals
               SET current_amount=?, status=?, updated_at=?
               WHERE id=?""",
            (current_amount, status, now_iso(), goal_id),
        )
        conn.commit()
        return self.get_by_id(goal_id)

    def set_status(self, goal_id: int, status: str) -> Optional[SavingsGoal]:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE savings_goals SET status=?, updated_at=? WHERE id=?",
            (status, now_iso(), goal_id),
        )
        conn.commit()
        return self.get_by_id(goal_id)

    def delete(self, goal_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM savings_goals WHERE id = ?", (goal_id,))
        conn.commit()
