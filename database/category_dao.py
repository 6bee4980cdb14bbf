from typing import Optional
from database.db_manager import DatabaseManager
from models.category import Category


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            type=row["type"],
            icon=row["icon"],
            color=row["color"],
            created_at=row["created_at"],
        )

    def get_all(self, user_id: int) -> list[Category]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories WHERE user_id = ? ORDER BY name",
            (user_id,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, category_id: int) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_type(self, user_id: int, type_filter: str) -> list[Category]:
        """type_filter: 'income' or 'expense'."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories WHERE user_id = ? AND type = ? ORDER BY name",
            (user_id, type_filter),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def create(
        self, user_id: int, name: str, type_: str, icon: str, color: str
    ) -> Category:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "INSERT INTO categories(user_id, name, type, icon, color) VALUES (?, ?, ?, ?, ?)",
            (user_id, name, type_, icon, color),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self, category_id: int, name: str, type_: str, icon: str, color: str
    ) -> Optional[Category]:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE categories SET name=?, type=?, icon=?, color=? WHERE id=?",
            (name, type_, icon, color, category_id),
        )
        conn.commit()
        return self.get_by_id(category_id)

    def delete(self, category_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        conn.commit()
