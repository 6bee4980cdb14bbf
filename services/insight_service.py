from dataclasses import dataclass
from datetime import date

from models.transaction import Transaction
from database.transaction_dao import TransactionDAO
from services.report_service import summarize_month
from utils.currency import format_currency
from utils.date_helpers import format_month, prev_month, today

# Thresholds in percent, all compared strictly on whole-cent amounts.
TOP_CATEGORY_SHARE = 40.0
SPENDING_CHANGE = 20.0
NEAR_INCOME_RATIO = 90.0
HEALTHY_INCOME_RATIO = 70.0
MANY_TRANSACTIONS = 50
FEW_TRANSACTIONS = 10


@dataclass
class Insight:
    kind: str           # 'positive' | 'warning' | 'info'
    title: str
    description: str
    icon: str


def _cents(amount: float) -> int:
    return round(amount * 100)


def _pct_above(part: float, whole: float, threshold: float) -> bool:
    """part / whole > threshold %, compared in whole cents."""
    return _cents(part) * 100 > _cents(whole) * threshold


def _pct_below(part: float, whole: float, threshold: float) -> bool:
    return _cents(part) * 100 < _cents(whole) * threshold


def generate_insights(
    transactions: list[Transaction], ref: date | None = None
) -> list[Insight]:
    """Heuristic observations about the month containing `ref`."""
    ref = ref or today()
    month = format_month(ref)
    current = summarize_month(month, transactions)
    previous = summarize_month(prev_month(month), transactions)
    income, expenses = current.income, current.expenses
    balance = current.balance
    insights: list[Insight] = []

    if balance > 0:
        insights.append(Insight(
            "positive", "Great job!",
            f"You have a positive balance of {format_currency(balance)} this month. "
            "Keep it up!",
            "checkmark-circle",
        ))
    elif balance < 0:
        insights.append(Insight(
            "warning", "Watch your budget",
            f"You are {format_currency(abs(balance))} in the red this month. "
            "Review your expenses and plan how to balance your finances.",
            "warning",
        ))

    if current.top_category is not None:
        name, amount = current.top_category
        share = amount * 100 / expenses if expenses > 0 else 0.0
        if _pct_above(amount, expenses, TOP_CATEGORY_SHARE):
            insights.append(Insight(
                "warning", "Top spending category",
                f"{share:.0f}% of your spending went to {name}. "
                "Reviewing it could improve your control.",
                "pie-chart",
            ))
        else:
            insights.append(Insight(
                "info", "Spending distribution",
                f"Your largest category this month was {name}, "
                f"with {share:.0f}% of the total.",
                "pie-chart",
            ))

    if previous.expenses > 0 and expenses > 0:
        change = (expenses - previous.expenses) * 100 / previous.expenses
        if _pct_above(expenses - previous.expenses, previous.expenses, SPENDING_CHANGE):
            insights.append(Insight(
                "warning", "Spending increased",
                f"Your spending rose {abs(change):.0f}% compared to last month.",
                "trending-up",
            ))
        elif _pct_below(expenses - previous.expenses, previous.expenses, -SPENDING_CHANGE):
            insights.append(Insight(
                "positive", "Spending decreased",
                f"You cut your spending by {abs(change):.0f}% compared to last month.",
                "trending-down",
            ))

    daily_average = expenses / ref.day
    if daily_average > 0:
        insights.append(Insight(
            "info", "Daily average",
            f"You are spending {format_currency(daily_average)} per day on average "
            "this month.",
            "calendar",
        ))

    if income > 0 and expenses > 0:
        ratio = expenses * 100 / income
        if _pct_above(expenses, income, NEAR_INCOME_RATIO):
            insights.append(Insight(
                "warning", "Spending close to income",
                f"You are spending {ratio:.0f}% of your income. "
                "Consider saving more for an emergency fund.",
                "wallet",
            ))
        elif _pct_below(expenses, income, HEALTHY_INCOME_RATIO):
            insights.append(Insight(
                "positive", "Healthy finances",
                f"You are spending only {ratio:.0f}% of your income.",
                "thumbs-up",
            ))

    count = current.transaction_count
    if count > MANY_TRANSACTIONS:
        insights.append(Insight(
            "info", "Many transactions",
            f"You made {count} transactions this month. "
            "Grouping some expenses may simplify tracking.",
            "list",
        ))
    elif count < FEW_TRANSACTIONS and expenses > 0:
        insights.append(Insight(
            "info", "Few transactions recorded",
            f"You recorded only {count} transactions this month. "
            "Remember to log every expense.",
            "create",
        ))

    return insights


class InsightService:
    def __init__(self, tx_dao: TransactionDAO):
        self._tx_dao = tx_dao

    def get_insights(self, user_id: int, ref: date | None = None) -> list[Insight]:
        return generate_insights(self._tx_dao.get_all(user_id), ref)
