from models.transaction import Transaction


def make_tx(type_, amount, date, category=None, account_id=None, card_id=None, tx_id=0):
    return Transaction(
        id=tx_id,
        user_id=1,
        description=f"{type_} {amount}",
        amount=amount,
        type=type_,
        date=date,
        category=category,
        account_id=account_id,
        card_id=card_id,
    )
