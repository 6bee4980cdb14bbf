from datetime import date

import pytest

from services.report_service import (
    MonthlySummary, available_months, category_breakdown, daily_trend,
    monthly_summaries, period_report, recent_months_summary,
    summary_for_month, top_category,
)
from tests.factories import make_tx


def _sample():
    return [
        make_tx("income", 1000, "2025-01-05"),
        make_tx("expense", 300, "2025-01-10", "Food"),
        make_tx("card_expense", 200, "2025-01-20", "Shopping"),
        make_tx("income", 500, "2025-02-01"),
    ]


def test_january_february_example():
    summaries = monthly_summaries(_sample())
    assert [s.month for s in summaries] == ["2025-02", "2025-01"]
    feb, jan = summaries
    assert (jan.income, jan.expenses, jan.balance) == (1000, 500, 500)
    assert (feb.income, feb.expenses, feb.balance) == (500, 0, 500)
    assert jan.transaction_count == 3
    assert feb.top_category is None


def test_monthly_income_partitions_total():
    txs = _sample() + [
        make_tx("income", 250.5, "2024-12-31"),
        make_tx("income", 49.5, "2025-03-01"),
    ]
    summaries = monthly_summaries(txs)
    total_income = sum(t.amount for t in txs if t.type == "income")
    assert sum(s.income for s in summaries) == total_income


def test_transfer_counted_but_not_in_totals():
    txs = [
        make_tx("expense", 100, "2025-03-02", "Food"),
        make_tx("card_expense", 50, "2025-03-03", "Food"),
        make_tx("transfer", 999, "2025-03-04"),
    ]
    [march] = monthly_summaries(txs)
    assert march.expenses == 150
    assert march.income == 0
    assert march.transaction_count == 3


def test_month_key_uses_stored_date_string():
    [s] = monthly_summaries([make_tx("income", 10, "2025-01-31")])
    assert (s.year, s.month_number) == (2025, 1)


def test_top_category_ignores_uncategorized_rows():
    txs = [
        make_tx("expense", 500, "2025-01-01"),
        make_tx("expense", 20, "2025-01-02", "Food"),
    ]
    assert top_category(txs) == ("Food", 20)


def test_top_category_tie_independent_of_order():
    txs = [
        make_tx("expense", 100, "2025-01-01", "Transport"),
        make_tx("expense", 100, "2025-01-02", "Food"),
    ]
    assert top_category(txs) == ("Food", 100)
    assert top_category(list(reversed(txs))) == ("Food", 100)


def test_available_months_spans_to_current():
    summaries = monthly_summaries([make_tx("income", 1, "2025-01-15")])
    months = available_months(summaries, date(2025, 4, 2))
    assert months == ["2025-04", "2025-03", "2025-02", "2025-01"]


def test_available_months_without_data():
    assert available_months([], date(2025, 4, 2)) == ["2025-04"]


def test_summary_for_month_zero_filled():
    s = summary_for_month(monthly_summaries(_sample()), "2024-07")
    assert s == MonthlySummary(month="2024-07")
    assert s.balance == 0


def test_period_report_window_and_filters():
    ref = date(2025, 3, 31)
    txs = [
        make_tx("income", 1000, "2025-03-30", account_id=1),
        make_tx("expense", 200, "2025-03-25", "Food", account_id=1),
        make_tx("card_expense", 300, "2025-03-10", "Shopping", card_id=7),
        make_tx("expense", 50, "2025-03-24", "Food", account_id=1),   # outside 7d
        make_tx("expense", 75, "2025-03-29", "Food", account_id=2),
    ]
    week = period_report(txs, 7, ref)
    assert (week.start_date, week.end_date) == ("2025-03-25", "2025-03-31")
    assert week.income == 1000
    assert week.expense == 275
    assert week.balance == 725
    assert week.average_ticket == (1000 + 275) / 3
    assert week.biggest_expense.amount == 200

    only_account = period_report(txs, 30, ref, account_id=1)
    assert only_account.count == 3
    only_card = period_report(txs, 30, ref, card_id=7)
    assert only_card.expense == 300


def test_period_report_empty():
    report = period_report([], 30, date(2025, 3, 31))
    assert report.average_ticket == 0
    assert report.biggest_expense is None


def test_daily_trend_has_point_per_day():
    txs = [
        make_tx("income", 10, "2025-03-30"),
        make_tx("expense", 4, "2025-03-30"),
        make_tx("transfer", 99, "2025-03-31"),
    ]
    points = daily_trend(txs, 7, date(2025, 3, 31))
    assert len(points) == 7
    assert points[0]["date"] == "2025-03-25"
    assert points[-2] == {"date": "2025-03-30", "income": 10, "expense": 4}
    assert points[-1] == {"date": "2025-03-31", "income": 0.0, "expense": 0.0}


def test_category_breakdown_top_six_with_uncategorized():
    ref = date(2025, 3, 31)
    txs = [make_tx("expense", 10 * (i + 1), "2025-03-20", f"Cat{i}") for i in range(7)]
    txs.append(make_tx("expense", 500, "2025-03-21"))
    rows = category_breakdown(txs, 30, ref)
    assert len(rows) == 6
    assert rows[0] == {"category": "Uncategorized", "total": 500}
    assert [r["total"] for r in rows] == sorted((r["total"] for r in rows), reverse=True)


def test_recent_months_summary_oldest_first():
    rows = recent_months_summary(_sample(), date(2025, 2, 10))
    assert [r["month"] for r in rows] == ["2024-12", "2025-01", "2025-02"]
    assert rows[1] == {"month": "2025-01", "income": 1000, "expense": 500}


def test_export_csv(ctx, user_id):
    account = ctx.accounts.create(user_id, "Wallet")
    ctx.transactions.create(user_id, "Lunch", 12.5, "expense", "2025-05-02",
                            "Food", account_id=account.id)
    ctx.transactions.create(user_id, "Old", 1, "expense", "2025-04-30")
    rows = ctx.reports.export_csv(user_id, "2025-05")
    assert rows[0][0] == "Date"
    assert rows[1:] == [["2025-05-02", "expense", "Food", "Lunch", "12.50", "Wallet", ""]]


def test_month_picker_opens_on_most_recent_month():
    month_options = pytest.importorskip("ui.tabs.monthly_summary_tab").month_options
    summaries = monthly_summaries([make_tx("income", 1, "2025-01-15")])
    options = month_options(summaries, date(2025, 4, 2))
    assert options[0] == ("2025-04", "April 2025")
    assert options[-1] == ("2025-01", "January 2025")
