from typing import Optional
from database.db_manager import DatabaseManager
from models.profile import Profile
from utils.date_helpers import now_iso


class ProfileDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Profile:
        return Profile(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get(self, user_id: int) -> Optional[Profile]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM profiles WHERE id = ?", (user_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, user_id: int, name: str, email: str) -> Profile:
        conn = self._db.get_connection()
        conn.execute(
            "INSERT INTO profiles(id, name, email) VALUES (?, ?, ?)",
            (user_id, name, email),
        )
        conn.commit()
        return self.get(user_id)

    def update(self, user_id: int, name: str, email: str) -> Optional[Profile]:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE profiles SET name = ?, email = ?, updated_at = ? WHERE id = ?",
            (name, email, now_iso(), user_id),
        )
        conn.commit()
        return self.get(user_id)
