from typing import Optional
from database.db_manager import DatabaseManager
from models.transaction import Transaction
from utils.date_helpers import now_iso


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            user_id=row["user_id"],
            description=row["description"],
            amount=row["amount"],
            type=row["type"],
            date=row["date"],
            category=row["category"],
            account_id=row["account_id"],
            card_id=row["card_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _fetch(self, where: str, params: list) -> list[Transaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            f"SELECT * FROM transactions WHERE {where} ORDER BY date DESC, id DESC",
            params,
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_all(self, user_id: int) -> list[Transaction]:
        """All of a user's transactions, newest first."""
        return self._fetch("user_id = ?", [user_id])

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM transactions WHERE id = ?", (tx_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_type(self, user_id: int, type_: str) -> list[Transaction]:
        return self._fetch("user_id = ? AND type = ?", [user_id, type_])

    def get_by_date_range(
        self, user_id: int, start_date: str, end_date: str
    ) -> list[Transaction]:
        """Inclusive YYYY-MM-DD range."""
        return self._fetch(
            "user_id = ? AND date >= ? AND date <= ?",
            [user_id, start_date, end_date],
        )

    def create(
        self,
        user_id: int,
        description: str,
        amount: float,
        type_: str,
        date: str,
        category: str | None = None,
        account_id: int | None = None,
        card_id: int | None = None,
    ) -> Transaction:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO transactions
               (user_id, description, amount, type, category, account_id, card_id, date)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (user_id, description, amount, type_, category, account_id, card_id, date),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        tx_id: int,
        description: str,
        amount: float,
        type_: str,
        date: str,
        category: str | None = None,
        account_id: int | None = None,
        card_id: int | None = None,
    ) -> Optional[Transaction]:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE transactions
               SET description=?, amount=?, type=?, category=?, account_id=?,
                   card_id=?, date=?, updated_at=?
               WHERE id=?""",
            (description, amount, type_, category, account_id, card_id, date,
             now_iso(), tx_id),
        )
        conn.commit()
        return self.get_by_id(tx_id)

    def delete(self, tx_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
        conn.commit()
