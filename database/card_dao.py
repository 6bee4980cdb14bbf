from typing import Optional
from database.db_manager import DatabaseManager
from models.credit_card import CreditCard
from utils.date_helpers import now_iso


class CardDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> CreditCard:
        return CreditCard(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            brand=row["brand"],
            last4=row["last4"],
            credit_limit=row["credit_limit"],
            due_day=row["due_day"],
            closing_day=row["closing_day"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_all(self, user_id: int) -> list[CreditCard]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM credit_cards WHERE user_id = ? ORDER BY created_at ASC, id ASC",
            (user_id,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, card_id: int) -> Optional[CreditCard]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM credit_cards WHERE id = ?", (card_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        user_id: int,
        name: str,
        brand: str | None = None,
        last4: str | None = None,
        credit_limit: float | None = None,
        due_day: int | None = None,
        closing_day: int | None = None,
    ) -> CreditCard:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO credit_cards
               (user_id, name, brand, last4, credit_limit, due_day, closing_day)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (user_id, name, brand, last4, credit_limit, due_day, closing_day),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        card_id: int,
        name: str,
        brand: str | None,
        last4: str | None,
        credit_limit: float | None,
        due_day: int | None,
        closing_day: int | None,
    ) -> Optional[CreditCard]:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE credit_cards
               SET name=?, brand=?, last4=?, credit_limit=?, due_day=?,
                   closing_day=?, updated_at=?
               WHERE id=?""",
            (name, brand, last4, credit_limit, due_day, closing_day,
             now_iso(), card_id),
        )
        conn.commit()
        return self.get_by_id(card_id)

    def delete(self, card_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM credit_cards WHERE id = ?", (card_id,))
        conn.commit()
