import pytest

from services.transaction_service import TransactionFilter, filter_transactions, summarize
from tests.factories import make_tx
from utils.date_helpers import today_str


def test_create_and_read_back(ctx, user_id):
    tx = ctx.transactions.create(user_id, "  Coffee ", 4.5, "expense", "2025-01-02", "Food")
    assert tx.id is not None
    assert tx.description == "Coffee"
    assert ctx.transactions.get_by_id(tx.id) == tx


def test_date_defaults_to_today(ctx, user_id):
    tx = ctx.transactions.create(user_id, "Snack", 2, "expense")
    assert tx.date == today_str()


@pytest.mark.parametrize("kwargs, message", [
    ({"description": " ", "amount": 1, "type_": "expense"}, "Description"),
    ({"description": "x", "amount": 0, "type_": "expense"}, "Amount"),
    ({"description": "x", "amount": -5, "type_": "expense"}, "Amount"),
    ({"description": "x", "amount": 1, "type_": "refund"}, "Invalid type"),
    ({"description": "x", "amount": 1, "type_": "expense", "date": "31/12/2025"}, "date"),
    ({"description": "x", "amount": 1, "type_": "card_expense"}, "card"),
])
def test_validation_errors(ctx, user_id, kwargs, message):
    with pytest.raises(ValueError, match=message):
        ctx.transactions.create(user_id, **kwargs)
    assert ctx.transactions.get_all(user_id) == []


def test_card_id_kept_only_for_card_expense(ctx, user_id):
    card = ctx.cards.create(user_id, "Visa", last4="1234")
    charge = ctx.transactions.create(user_id, "Shoes", 80, "card_expense",
                                     "2025-01-03", card_id=card.id)
    assert charge.card_id == card.id
    plain = ctx.transactions.create(user_id, "Bread", 3, "expense",
                                    "2025-01-03", card_id=card.id)
    assert plain.card_id is None


def test_update_and_delete(ctx, user_id):
    tx = ctx.transactions.create(user_id, "Rent", 900, "expense", "2025-01-01")
    updated = ctx.transactions.update(tx.id, "Rent Jan", 950, "expense", "2025-01-01", "Housing")
    assert (updated.description, updated.amount, updated.category) == ("Rent Jan", 950, "Housing")
    ctx.transactions.delete(tx.id)
    assert ctx.transactions.get_by_id(tx.id) is None


def test_get_all_newest_first_and_ranges(ctx, user_id):
    for day in ("2025-01-10", "2025-03-01", "2025-02-15"):
        ctx.transactions.create(user_id, day, 1, "income", day)
    assert [t.date for t in ctx.transactions.get_all(user_id)] == [
        "2025-03-01", "2025-02-15", "2025-01-10",
    ]
    in_range = ctx.transactions.get_by_date_range(user_id, "2025-01-10", "2025-02-15")
    assert {t.date for t in in_range} == {"2025-01-10", "2025-02-15"}
    assert len(ctx.transactions.get_by_type(user_id, "income")) == 3


def test_filter_transactions():
    txs = [
        make_tx("income", 100, "2025-01-01", "Salary", account_id=1),
        make_tx("expense", 20, "2025-01-05", "Food", account_id=1),
        make_tx("card_expense", 30, "2025-01-07", "Food", card_id=9),
        make_tx("transfer", 40, "2025-01-09", account_id=2),
    ]
    assert len(filter_transactions(txs, TransactionFilter())) == 4
    assert [t.type for t in filter_transactions(txs, TransactionFilter(type="expense"))] == [
        "expense", "card_expense",
    ]
    assert len(filter_transactions(txs, TransactionFilter(account_id=1))) == 2
    assert len(filter_transactions(txs, TransactionFilter(card_id=9))) == 1
    assert len(filter_transactions(txs, TransactionFilter(category="Food"))) == 2
    window = TransactionFilter(start_date="2025-01-05", end_date="2025-01-07")
    assert len(filter_transactions(txs, window)) == 2
    assert len(filter_transactions(txs, TransactionFilter(search="CARD_EXP"))) == 1


def test_filter_active_count():
    assert TransactionFilter(search="x").active_count == 0
    assert TransactionFilter(type="income", card_id=3, end_date="2025-01-01").active_count == 3


def test_summarize_excludes_transfers_from_totals():
    totals = summarize([
        make_tx("income", 100, "2025-01-01"),
        make_tx("card_expense", 30, "2025-01-02"),
        make_tx("transfer", 500, "2025-01-03"),
    ])
    assert totals == {"income": 100, "expense": 30, "balance": 70, "count": 3}
