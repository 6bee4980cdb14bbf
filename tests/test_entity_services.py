import pytest

from utils.constants import INITIAL_BALANCE_CATEGORY


# ── Accounts ─────────────────────────────────────────────────────────────────

def test_account_opening_balance_records_income(ctx, user_id):
    account = ctx.accounts.create(user_id, "Checking", "Bank", "checking", 250)
    [tx] = ctx.transactions.get_all(user_id)
    assert tx.type == "income"
    assert tx.amount == 250
    assert tx.description == "Initial balance (Checking)"
    assert tx.category == INITIAL_BALANCE_CATEGORY
    assert tx.account_id == account.id


def test_account_zero_balance_records_nothing(ctx, user_id):
    ctx.accounts.create(user_id, "Savings", account_type="savings")
    assert ctx.transactions.get_all(user_id) == []


def test_account_validation(ctx, user_id):
    with pytest.raises(ValueError):
        ctx.accounts.create(user_id, "   ")
    with pytest.raises(ValueError):
        ctx.accounts.create(user_id, "X", account_type="brokerage")


def test_account_update_and_delete_keeps_transactions(ctx, user_id):
    account = ctx.accounts.create(user_id, "Old", balance=10)
    updated = ctx.accounts.update(account.id, "New", "", "savings", 10)
    assert (updated.name, updated.type, updated.institution) == ("New", "savings", None)
    ctx.accounts.delete(account.id)
    assert ctx.accounts.get_all(user_id) == []
    assert len(ctx.transactions.get_all(user_id)) == 1


# ── Cards ────────────────────────────────────────────────────────────────────

def test_card_create(ctx, user_id):
    card = ctx.cards.create(user_id, "Gold", "Visa", "4321", 5000, 10, 3)
    assert card.display_name == "Gold •••• 4321"
    assert ctx.cards.get_all(user_id) == [card]


@pytest.mark.parametrize("kwargs", [
    {"name": ""},
    {"name": "X", "last4": "123"},
    {"name": "X", "last4": "12a4"},
    {"name": "X", "credit_limit": -1},
    {"name": "X", "due_day": 0},
    {"name": "X", "closing_day": 32},
])
def test_card_validation(ctx, user_id, kwargs):
    with pytest.raises(ValueError):
        ctx.cards.create(user_id, **kwargs)


def test_card_optional_fields_blank(ctx, user_id):
    card = ctx.cards.create(user_id, "Basic")
    assert (card.brand, card.last4, card.credit_limit) == (None, None, None)
    updated = ctx.cards.update(card.id, "Basic", "Master", "0000", 0, 31, 1)
    assert (updated.last4, updated.credit_limit, updated.due_day) == ("0000", 0, 31)


# ── Categories ───────────────────────────────────────────────────────────────

def test_category_unique_per_user_case_insensitive(ctx, user_id):
    ctx.categories.create(user_id, "Food", "expense", "restaurant", "#FF6B6B")
    with pytest.raises(ValueError, match="already exists"):
        ctx.categories.create(user_id, "food ", "expense", "cart", "#FF6B6B")


def test_category_same_name_for_other_user(ctx, user_id):
    ctx.categories.create(user_id, "Food", "expense", "restaurant", "#FF6B6B")
    ctx.auth.sign_out()
    other = ctx.auth.sign_up("bob@example.com", "secret2", "Bob").user_id
    ctx.categories.create(other, "Food", "expense", "restaurant", "#FF6B6B")
    assert len(ctx.categories.get_all(user_id)) == 1
    assert len(ctx.categories.get_all(other)) == 1


def test_category_type_and_update(ctx, user_id):
    with pytest.raises(ValueError):
        ctx.categories.create(user_id, "Bonus", "gift", "gift", "#000000")
    salary = ctx.categories.create(user_id, "Salary", "income", "cash", "#31D158")
    food = ctx.categories.create(user_id, "Food", "expense", "restaurant", "#FF6B6B")
    with pytest.raises(ValueError):
        ctx.categories.update(food.id, "SALARY", "expense", "restaurant", "#FF6B6B")
    renamed = ctx.categories.update(food.id, "Groceries", "expense", "cart", "#FF6B6B")
    assert renamed.name == "Groceries"
    assert ctx.categories.get_by_type(user_id, "income") == [salary]


def test_category_delete_keeps_transaction_name(ctx, user_id):
    food = ctx.categories.create(user_id, "Food", "expense", "restaurant", "#FF6B6B")
    ctx.transactions.create(user_id, "Lunch", 10, "expense", "2025-01-01", "Food")
    ctx.categories.delete(food.id)
    assert ctx.transactions.get_all(user_id)[0].category == "Food"
