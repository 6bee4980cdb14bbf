from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta

from models.transaction import Transaction, EXPENSE_TYPES
from database.transaction_dao import TransactionDAO
from database.account_dao import AccountDAO
from database.card_dao import CardDAO
from utils.constants import CATEGORY_BREAKDOWN_LIMIT, UNCATEGORIZED
from utils.date_helpers import (
    format_date, format_month, month_key, month_range, months_between,
    prev_month, today, current_month_str, window_start,
)


@dataclass
class MonthlySummary:
    month: str                  # 'YYYY-MM'
    income: float = 0.0
    expenses: float = 0.0
    transaction_count: int = 0
    top_category: tuple[str, float] | None = None

    @property
    def balance(self) -> float:
        return self.income - self.expenses

    @property
    def year(self) -> int:
        return int(self.month[:4])

    @property
    def month_number(self) -> int:
        return int(self.month[5:7])


@dataclass
class PeriodReport:
    days: int
    start_date: str
    end_date: str
    income: float
    expense: float
    count: int
    biggest_expense: Transaction | None

    @property
    def balance(self) -> float:
        return self.income - self.expense

    @property
    def average_ticket(self) -> float:
        if self.count == 0:
            return 0.0
        return (self.income + self.expense) / self.count


# ── Pure aggregation over fetched rows ───────────────────────────────────────

def top_category(transactions: list[Transaction]) -> tuple[str, float] | None:
    """Expense category with the largest total.

    Rows without a category are skipped. Equal totals resolve to the
    alphabetically first name so the answer never depends on row order.
    """
    totals: dict[str, float] = defaultdict(float)
    for tx in transactions:
        if tx.type in EXPENSE_TYPES and tx.category:
            totals[tx.category] += tx.amount
    if not totals:
        return None
    name, amount = min(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    return name, amount


def summarize_month(month: str, transactions: list[Transaction]) -> MonthlySummary:
    """Summary of the rows belonging to `month`; other rows are ignored."""
    rows = [t for t in transactions if month_key(t.date) == month]
    return MonthlySummary(
        month=month,
        income=sum(t.amount for t in rows if t.type == "income"),
        expenses=sum(t.amount for t in rows if t.type in EXPENSE_TYPES),
        transaction_count=len(rows),
        top_category=top_category(rows),
    )


def monthly_summaries(transactions: list[Transaction]) -> list[MonthlySummary]:
    """One summary per month present in the data, most recent first."""
    by_month: dict[str, list[Transaction]] = defaultdict(list)
    for tx in transactions:
        by_month[month_key(tx.date)].append(tx)
    return [
        summarize_month(m, by_month[m])
        for m in sorted(by_month, reverse=True)
    ]


def available_months(
    summaries: list[MonthlySummary], ref: date | None = None
) -> list[str]:
    """Months from the earliest with data to the current one, newest first."""
    current = format_month(ref or today())
    if not summaries:
        return [current]
    earliest = min(min(s.month for s in summaries), current)
    return list(reversed(months_between(earliest, current)))


def summary_for_month(summaries: list[MonthlySummary], month: str) -> MonthlySummary:
    for s in summaries:
        if s.month == month:
            return s
    return MonthlySummary(month=month)


def _in_window(
    transactions: list[Transaction],
    days: int,
    ref: date,
    account_id: int | None,
    card_id: int | None,
) -> tuple[str, str, list[Transaction]]:
    start = format_date(window_start(ref, days))
    end = format_date(ref)
    rows = [
        t for t in transactions
        if start <= t.date <= end
        and (account_id is None or t.account_id == account_id)
        and (card_id is None or t.card_id == card_id)
    ]
    return start, end, rows


def period_report(
    transactions: list[Transaction],
    days: int,
    ref: date | None = None,
    account_id: int | None = None,
    card_id: int | None = None,
) -> PeriodReport:
    ref = ref or today()
    start, end, rows = _in_window(transactions, days, ref, account_id, card_id)
    expenses = [t for t in rows if t.type in EXPENSE_TYPES]
    biggest = max(expenses, key=lambda t: t.amount) if expenses else None
    return PeriodReport(
        days=days,
        start_date=start,
        end_date=end,
        income=sum(t.amount for t in rows if t.type == "income"),
        expense=sum(t.amount for t in expenses),
        count=len(rows),
        biggest_expense=biggest,
    )


def daily_trend(
    transactions: list[Transaction],
    days: int,
    ref: date | None = None,
    account_id: int | None = None,
    card_id: int | None = None,
) -> list[dict]:
    """Return [{date, income, expense}, ...], one entry per day of the window."""
    ref = ref or today()
    _, _, rows = _in_window(transactions, days, ref, account_id, card_id)
    by_day: dict[str, dict] = defaultdict(lambda: {"income": 0.0, "expense": 0.0})
    for tx in rows:
        if tx.type == "income":
            by_day[tx.date]["income"] += tx.amount
        elif tx.type in EXPENSE_TYPES:
            by_day[tx.date]["expense"] += tx.amount
    start = window_start(ref, days)
    points = []
    for offset in range(days):
        day = format_date(start + timedelta(days=offset))
        totals = by_day.get(day, {"income": 0.0, "expense": 0.0})
        points.append({"date": day, **totals})
    return points


def category_breakdown(
    transactions: list[Transaction],
    days: int,
    ref: date | None = None,
    account_id: int | None = None,
    card_id: int | None = None,
    limit: int = CATEGORY_BREAKDOWN_LIMIT,
) -> list[dict]:
    """Return [{category, total}, ...] for expenses, largest first."""
    ref = ref or today()
    _, _, rows = _in_window(transactions, days, ref, account_id, card_id)
    totals: dict[str, float] = defaultdict(float)
    for tx in rows:
        if tx.type in EXPENSE_TYPES:
            totals[tx.category or UNCATEGORIZED] += tx.amount
    ordered = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    return [{"category": name, "total": total} for name, total in ordered[:limit]]


def recent_months_summary(
    transactions: list[Transaction], ref: date | None = None, months: int = 3
) -> list[dict]:
    """Return [{month, income, expense}, ...] for the last `months` months, oldest first."""
    month = format_month(ref or today())
    keys = [month]
    for _ in range(months - 1):
        month = prev_month(month)
        keys.append(month)
    result = []
    for key in reversed(keys):
        s = summarize_month(key, transactions)
        result.append({"month": key, "income": s.income, "expense": s.expenses})
    return result


# ── Service ──────────────────────────────────────────────────────────────────

class ReportService:
    def __init__(self, tx_dao: TransactionDAO, account_dao: AccountDAO, card_dao: CardDAO):
        self._tx_dao = tx_dao
        self._account_dao = account_dao
        self._card_dao = card_dao

    def get_monthly_summaries(self, user_id: int) -> list[MonthlySummary]:
        return monthly_summaries(self._tx_dao.get_all(user_id))

    def get_month(self, user_id: int, month: str | None = None) -> MonthlySummary:
        m = month or current_month_str()
        start, end = month_range(m)
        return summarize_month(m, self._tx_dao.get_by_date_range(user_id, start, end))

    def get_period_data(
        self,
        user_id: int,
        days: int,
        account_id: int | None = None,
        card_id: int | None = None,
        ref: date | None = None,
    ) -> dict:
        """Everything the reports screen shows, from a single fetch."""
        ref = ref or today()
        transactions = self._tx_dao.get_all(user_id)
        return {
            "report": period_report(transactions, days, ref, account_id, card_id),
            "trend": daily_trend(transactions, days, ref, account_id, card_id),
            "categories": category_breakdown(transactions, days, ref, account_id, card_id),
            "recent_months": recent_months_summary(transactions, ref),
        }

    def export_csv(self, user_id: int, month: str | None = None) -> list[list[str]]:
        """Return rows suitable for CSV export, header first, oldest row first."""
        m = month or current_month_str()
        start, end = month_range(m)
        transactions = sorted(
            self._tx_dao.get_by_date_range(user_id, start, end),
            key=lambda t: (t.date, t.id),
        )
        account_map = {a.id: a.name for a in self._account_dao.get_all(user_id)}
        card_map = {c.id: c.name for c in self._card_dao.get_all(user_id)}

        header = ["Date", "Type", "Category", "Description", "Amount", "Account", "Card"]
        rows = [header]
        for tx in transactions:
            rows.append([
                tx.date,
                tx.type,
                tx.category or "",
                tx.description,
                f"{tx.amount:.2f}",
                account_map.get(tx.account_id, ""),
                card_map.get(tx.card_id, ""),
            ])
        return rows
