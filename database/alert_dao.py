from typing import Optional
from database.db_manager import DatabaseManager
from models.spending_alert import SpendingAlert
from utils.date_helpers import now_iso


class AlertDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> SpendingAlert:
        return SpendingAlert(
            id=row["id"],
            user_id=row["user_id"],
            monthly_limit=row["monthly_limit"],
            enabled=bool(row["enabled"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get(self, user_id: int) -> Optional[SpendingAlert]:
        """The user's single alert, or None when none was configured yet."""
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM spending_alerts WHERE user_id = ?", (user_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_id(self, alert_id: int) -> Optional[SpendingAlert]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM spending_alerts WHERE id = ?", (alert_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, user_id: int, monthly_limit: float, enabled: bool = True) -> SpendingAlert:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "INSERT INTO spending_alerts(user_id, monthly_limit, enabled) VALUES (?, ?, ?)",
            (user_id, monthly_limit, 1 if enabled else 0),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(self, alert_id: int, monthly_limit: float, enabled: bool) -> Optional[SpendingAlert]:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE spending_alerts
               SET monthly_limit=?, enabled=?, updated_at=?
               WHERE id=?""",
            (monthly_limit, 1 if enabled else 0, now_iso(), alert_id),
        )
        conn.commit()
        return self.get_by_id(alert_id)

    def delete(self, alert_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM spending_alerts WHERE id = ?", (alert_id,))
        conn.commit()
