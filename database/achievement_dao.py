from typing import Optional
from database.db_manager import DatabaseManager
from models.savings_goal import Achievement


class AchievementDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Achievement:
        return Achievement(
            id=row["id"],
            user_id=row["user_id"],
            goal_id=row["goal_id"],
            title=row["title"],
            description=row["description"],
            icon=row["icon"],
            unlocked_at=row["unlocked_at"],
        )

    def get_all(self, user_id: int) -> list[Achievement]:
        """Most recently unlocked first."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM achievements WHERE user_id = ? ORDER BY unlocked_at DESC, id DESC",
            (user_id,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, achievement_id: int) -> Optional[Achievement]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM achievements WHERE id = ?", (achievement_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_goal(self, goal_id: int) -> Optional[Achievement]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM achievements WHERE goal_id = ?", (goal_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def count(self, user_id: int) -> int:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT COUNT(*) AS cnt FROM achievements WHERE user_id = ?", (user_id,)
        ).fetchone()
        return row["cnt"]

    def create(
        self,
        user_id: int,
        goal_id: int | None,
        title: str,
        description: str,
        icon: str = "trophy",
    ) -> Achievement:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO achievements(user_id, goal_id, title, description, icon)
               VALUES (?, ?, ?, ?, ?)""",
            (user_id, goal_id, title, description, icon),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)
