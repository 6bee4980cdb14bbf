from datetime import date

from services.insight_service import generate_insights
from tests.factories import make_tx

REF = date(2025, 3, 15)


def _titles(txs, ref=REF):
    return [i.title for i in generate_insights(txs, ref)]


def _kinds(txs, ref=REF):
    return {i.title: i.kind for i in generate_insights(txs, ref)}


def test_no_data_no_insights():
    assert generate_insights([], REF) == []


def test_positive_and_negative_balance():
    assert _kinds([make_tx("income", 100, "2025-03-01")])["Great job!"] == "positive"
    assert _kinds([make_tx("expense", 100, "2025-03-01", "Food")])["Watch your budget"] == "warning"


def test_only_current_month_counts():
    txs = [make_tx("income", 100, "2025-02-28"), make_tx("income", 100, "2025-04-01")]
    assert generate_insights(txs, REF) == []


def test_ratio_exactly_ninety_does_not_trigger():
    txs = [
        make_tx("income", 1000, "2025-03-01"),
        make_tx("expense", 900, "2025-03-02", "Food"),
    ]
    titles = _titles(txs)
    assert "Spending close to income" not in titles
    assert "Healthy finances" not in titles


def test_ratio_just_above_ninety_triggers():
    txs = [
        make_tx("income", 10000, "2025-03-01"),
        make_tx("expense", 9001, "2025-03-02", "Food"),
    ]
    assert _kinds(txs)["Spending close to income"] == "warning"


def test_ratio_below_seventy_is_positive():
    txs = [
        make_tx("income", 1000, "2025-03-01"),
        make_tx("expense", 500, "2025-03-02", "Food"),
    ]
    assert _kinds(txs)["Healthy finances"] == "positive"


def test_top_category_share_boundary():
    at_forty = [
        make_tx("expense", 40, "2025-03-02", "Food"),
        make_tx("expense", 30, "2025-03-03", "Rent"),
        make_tx("expense", 30, "2025-03-04", "Travel"),
    ]
    kinds = _kinds(at_forty)
    assert kinds["Spending distribution"] == "info"
    assert "Top spending category" not in kinds

    above = at_forty + [make_tx("expense", 1, "2025-03-05", "Food")]
    kinds = _kinds(above)
    assert kinds["Top spending category"] == "warning"
    assert "Spending distribution" not in kinds


def test_month_over_month_change_boundary():
    previous = [make_tx("expense", 100, "2025-02-10", "Food")]
    flat = previous + [make_tx("expense", 120, "2025-03-10", "Food")]
    assert "Spending increased" not in _titles(flat)

    up = previous + [make_tx("expense", 121, "2025-03-10", "Food")]
    assert _kinds(up)["Spending increased"] == "warning"

    down = previous + [make_tx("expense", 79, "2025-03-10", "Food")]
    assert _kinds(down)["Spending decreased"] == "positive"

    exactly_down = previous + [make_tx("expense", 80, "2025-03-10", "Food")]
    assert "Spending decreased" not in _titles(exactly_down)


def test_no_change_insight_without_previous_month():
    txs = [make_tx("expense", 500, "2025-03-10", "Food")]
    titles = _titles(txs)
    assert "Spending increased" not in titles
    assert "Spending decreased" not in titles


def test_daily_average_uses_day_of_month():
    txs = [make_tx("expense", 150, "2025-03-01", "Food")]
    [daily] = [i for i in generate_insights(txs, REF) if i.title == "Daily average"]
    assert daily.kind == "info"
    assert "$10.00" in daily.description


def test_transaction_count_rules():
    few = [make_tx("expense", 5, "2025-03-01", "Food")]
    assert "Few transactions recorded" in _titles(few)

    income_only = [make_tx("income", 5, "2025-03-01")]
    assert "Few transactions recorded" not in _titles(income_only)

    many = [make_tx("expense", 1, "2025-03-01", "Food") for _ in range(51)]
    titles = _titles(many)
    assert "Many transactions" in titles
    assert "Few transactions recorded" not in titles

    fifty = [make_tx("expense", 1, "2025-03-01", "Food") for _ in range(50)]
    assert "Many transactions" not in _titles(fifty)


def test_rule_order():
    txs = [
        make_tx("income", 1000, "2025-03-01"),
        make_tx("expense", 500, "2025-03-02", "Food"),
    ]
    assert _titles(txs) == [
        "Great job!",
        "Top spending category",
        "Daily average",
        "Healthy finances",
        "Few transactions recorded",
    ]


def test_service_reads_user_rows(ctx, user_id):
    ctx.transactions.create(user_id, "Salary", 1000, "income", "2025-03-01")
    insights = ctx.insights.get_insights(user_id, REF)
    assert insights[0].title == "Great job!"


def test_cent_amounts_at_ninety_percent_do_not_trigger():
    txs = [
        make_tx("income", 9.50, "2025-03-01"),
        make_tx("expense", 8.55, "2025-03-02", "Food"),
    ]
    assert "Spending close to income" not in _titles(txs)

    txs.append(make_tx("expense", 0.01, "2025-03-03", "Food"))
    assert "Spending close to income" in _titles(txs)


def test_cent_amounts_at_forty_percent_share():
    txs = [
        make_tx("expense", 1.10, "2025-03-02", "Food"),
        make_tx("expense", 0.55, "2025-03-03", "Rent"),
        make_tx("expense", 0.55, "2025-03-04", "Travel"),
        make_tx("expense", 0.55, "2025-03-05", "Health"),
    ]
    kinds = _kinds(txs)
    assert "Top spending category" not in kinds
    assert kinds["Spending distribution"] == "info"


def test_cent_amounts_at_twenty_percent_change():
    previous = [make_tx("expense", 1.10, "2025-02-10", "Food")]
    up = previous + [make_tx("expense", 1.32, "2025-03-10", "Food")]
    assert "Spending increased" not in _titles(up)

    down = previous + [make_tx("expense", 0.88, "2025-03-10", "Food")]
    assert "Spending decreased" not in _titles(down)

    more = previous + [make_tx("expense", 1.33, "2025-03-10", "Food")]
    assert "Spending increased" in _titles(more)
