from typing import Optional
from database.db_manager import DatabaseManager
from models.account import Account
from utils.date_helpers import now_iso


class AccountDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Account:
        return Account(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            institution=row["institution"],
            type=row["type"],
            balance=row["balance"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_all(self, user_id: int) -> list[Account]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM accounts WHERE user_id = ? ORDER BY created_at ASC, id ASC",
            (user_id,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, account_id: int) -> Optional[Account]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM accounts WHERE id = ?", (account_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        user_id: int,
        name: str,
        institution: str | None = None,
        type_: str = "checking",
        balance: float = 0.0,
    ) -> Account:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO accounts(user_id, name, institution, type, balance)
               VALUES (?, ?, ?, ?, ?)""",
            (user_id, name, institution, type_, balance),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        account_id: int,
        name: str,
        institution: str | None,
        type_: str,
        balance: float,
    ) -> Optional[Account]:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE accounts
               SET name = ?, institution = ?, type = ?, balance = ?, updated_at = ?
               WHERE id = ?""",
            (name, institution, type_, balance, now_iso(), account_id),
        )
        conn.commit()
        return self.get_by_id(account_id)

    def delete(self, account_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM accounts WHERE id = ?", (account_id,))
        conn.commit()
