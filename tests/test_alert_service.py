from datetime import date

import pytest

REF = date(2025, 6, 15)


def test_no_alert_status(ctx, user_id):
    status = ctx.alerts.get_status(user_id, REF)
    assert status.alert is None
    assert status.percentage == 0
    assert status.is_over_limit is False


@pytest.mark.parametrize("limit", [0, -10])
def test_limit_must_be_positive(ctx, user_id, limit):
    with pytest.raises(ValueError):
        ctx.alerts.upsert(user_id, limit)
    assert ctx.alerts.get(user_id) is None


def test_upsert_keeps_single_alert(ctx, user_id):
    first = ctx.alerts.upsert(user_id, 1000)
    second = ctx.alerts.upsert(user_id, 1500, enabled=False)
    assert first.id == second.id
    assert second.monthly_limit == 1500
    assert second.enabled is False


def test_status_counts_current_month_expenses(ctx, user_id):
    ctx.alerts.upsert(user_id, 1000)
    ctx.transactions.create(user_id, "Rent", 600, "expense", "2025-06-01")
    ctx.transactions.create(user_id, "Shoes", 200, "card_expense", "2025-06-02",
                            card_id=ctx.cards.create(user_id, "Visa").id)
    ctx.transactions.create(user_id, "Move", 900, "transfer", "2025-06-03")
    ctx.transactions.create(user_id, "Salary", 5000, "income", "2025-06-04")
    ctx.transactions.create(user_id, "May", 700, "expense", "2025-05-31")
    status = ctx.alerts.get_status(user_id, REF)
    assert status.spending == 800
    assert status.percentage == 80
    assert status.remaining == 200
    assert status.is_over_limit is False


def test_over_limit_is_strict_and_capped(ctx, user_id):
    ctx.alerts.upsert(user_id, 500)
    ctx.transactions.create(user_id, "Rent", 500, "expense", "2025-06-01")
    status = ctx.alerts.get_status(user_id, REF)
    assert status.percentage == 100
    assert status.is_over_limit is False

    ctx.transactions.create(user_id, "Food", 250, "expense", "2025-06-02")
    status = ctx.alerts.get_status(user_id, REF)
    assert status.percentage == 100
    assert status.is_over_limit is True


def test_disabled_alert_never_over_limit(ctx, user_id):
    ctx.alerts.upsert(user_id, 10)
    ctx.alerts.set_enabled(user_id, False)
    ctx.transactions.create(user_id, "Rent", 500, "expense", "2025-06-01")
    assert ctx.alerts.get_status(user_id, REF).is_over_limit is False


def test_delete(ctx, user_id):
    ctx.alerts.upsert(user_id, 10)
    ctx.alerts.delete(user_id)
    assert ctx.alerts.get(user_id) is None
