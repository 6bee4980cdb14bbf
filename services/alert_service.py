from dataclasses import dataclass
from datetime import date

from models.spending_alert import SpendingAlert
from models.transaction import EXPENSE_TYPES
from database.alert_dao import AlertDAO
from database.transaction_dao import TransactionDAO
from utils.date_helpers import format_month, month_range, today


@dataclass
class AlertStatus:
    alert: SpendingAlert | None
    month: str
    spending: float

    @property
    def limit(self) -> float:
        return self.alert.monthly_limit if self.alert else 0.0

    @property
    def percentage(self) -> float:
        """Share of the limit used, capped at 100; 0 without a limit."""
        if self.limit <= 0:
            return 0.0
        return min(self.spending * 100 / self.limit, 100.0)

    @property
    def remaining(self) -> float:
        return max(0.0, self.limit - self.spending)

    @property
    def is_over_limit(self) -> bool:
        return bool(self.alert and self.alert.enabled and self.spending > self.limit)


class AlertService:
    def __init__(self, alert_dao: AlertDAO, tx_dao: TransactionDAO):
        self._dao = alert_dao
        self._tx_dao = tx_dao

    def get(self, user_id: int) -> SpendingAlert | None:
        return self._dao.get(user_id)

    def upsert(self, user_id: int, monthly_limit: float, enabled: bool = True) -> SpendingAlert:
        if monthly_limit is None or monthly_limit <= 0:
            raise ValueError("Monthly limit must be greater than zero.")
        existing = self._dao.get(user_id)
        if existing:
            return self._dao.update(existing.id, monthly_limit, enabled)
        return self._dao.create(user_id, monthly_limit, enabled)

    def set_enabled(self, user_id: int, enabled: bool) -> SpendingAlert:
        existing = self._dao.get(user_id)
        if existing is None:
            raise ValueError("Set a monthly limit first.")
        return self._dao.update(existing.id, existing.monthly_limit, enabled)

    def delete(self, user_id: int):
        existing = self._dao.get(user_id)
        if existing:
            self._dao.delete(existing.id)

    def get_status(self, user_id: int, ref: date | None = None) -> AlertStatus:
        month = format_month(ref or today())
        start, end = month_range(month)
        spending = sum(
            t.amount
            for t in self._tx_dao.get_by_date_range(user_id, start, end)
            if t.type in EXPENSE_TYPES
        )
        return AlertStatus(alert=self._dao.get(user_id), month=month, spending=spending)
