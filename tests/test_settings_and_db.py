import sqlite3

import pytest

from database.db_manager import DatabaseManager
from services.context import build_context


def test_theme_defaults_to_system(ctx):
    assert ctx.settings.get_theme() == "system"


def test_theme_persists_across_reopen(tmp_path):
    db = DatabaseManager.open(str(tmp_path))
    build_context(db).settings.set_theme("dark")
    db.close()

    reopened = DatabaseManager.open(str(tmp_path))
    assert build_context(reopened).settings.get_theme() == "dark"
    reopened.close()


def test_unknown_theme(ctx, db):
    with pytest.raises(ValueError):
        ctx.settings.set_theme("sepia")
    db.set_setting("theme", "sepia")
    assert ctx.settings.get_theme() == "system"


def test_active_account_and_card_per_user(ctx, user_id):
    assert ctx.settings.get_active_account(user_id) is None
    ctx.settings.set_active_account(user_id, 4)
    ctx.settings.set_active_card(user_id, 9)
    assert ctx.settings.get_active_account(user_id) == 4
    assert ctx.settings.get_active_card(user_id) == 9
    assert ctx.settings.get_active_account(user_id + 1) is None
    ctx.settings.set_active_card(user_id, None)
    assert ctx.settings.get_active_card(user_id) is None


def test_daos_are_scoped_by_user(ctx, user_id):
    ctx.accounts.create(user_id, "Ana's wallet")
    ctx.cards.create(user_id, "Ana's card")
    ctx.transactions.create(user_id, "Ana's lunch", 10, "expense", "2025-01-01")
    ctx.goals.create(user_id, "Ana's trip", 100)
    ctx.alerts.upsert(user_id, 100)

    ctx.auth.sign_out()
    bob = ctx.auth.sign_up("bob@example.com", "secret2", "Bob").user_id
    assert ctx.accounts.get_all(bob) == []
    assert ctx.cards.get_all(bob) == []
    assert ctx.transactions.get_all(bob) == []
    assert ctx.goals.get_all(bob) == []
    assert ctx.alerts.get(bob) is None
    assert ctx.reports.get_monthly_summaries(bob) == []


def test_single_row_lookup_missing_returns_none(ctx):
    assert ctx.accounts.get_by_id(12345) is None
    assert ctx.transactions.get_by_id(12345) is None
    assert ctx.profiles.get(12345) is None


def test_amount_check_constraint(db):
    with pytest.raises(sqlite3.IntegrityError):
        db.get_connection().execute(
            "INSERT INTO transactions(user_id, description, amount, type, date) "
            "VALUES (1, 'x', 0, 'expense', '2025-01-01')"
        )
