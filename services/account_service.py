import logging

from models.account import Account, ACCOUNT_TYPES
from database.account_dao import AccountDAO
from database.transaction_dao import TransactionDAO
from utils.constants import INITIAL_BALANCE_CATEGORY
from utils.date_helpers import today_str

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, account_dao: AccountDAO, tx_dao: TransactionDAO):
        self._dao = account_dao
        self._tx_dao = tx_dao

    def get_all(self, user_id: int) -> list[Account]:
        return self._dao.get_all(user_id)

    def get_by_id(self, account_id: int) -> Account | None:
        return self._dao.get_by_id(account_id)

    def create(
        self,
        user_id: int,
        name: str,
        institution: str = "",
        account_type: str = "checking",
        balance: float = 0.0,
    ) -> Account:
        """Create an account.

        A positive opening balance is also recorded as an income transaction
        so that reports include it. If that second write fails the account
        is still returned.
        """
        name = name.strip()
        self._validate(name, account_type)
        account = self._dao.create(
            user_id, name, institution.strip() or None, account_type, balance
        )
        if balance > 0:
            try:
                self._tx_dao.create(
                    user_id=user_id,
                    description=f"Initial balance ({account.name})",
                    amount=balance,
                    type_="income",
                    date=today_str(),
                    category=INITIAL_BALANCE_CATEGORY,
                    account_id=account.id,
                )
            except Exception:
                logger.exception(
                    "Could not record initial balance for account %s", account.id
                )
        return account

    def update(
        self,
        account_id: int,
        name: str,
        institution: str = "",
        account_type: str = "checking",
        balance: float = 0.0,
    ) -> Account:
        name = name.strip()
        self._validate(name, account_type)
        return self._dao.update(
            account_id, name, institution.strip() or None, account_type, balance
        )

    def delete(self, account_id: int):
        self._dao.delete(account_id)

    # ── Helpers ──────────────────────────────────────────────────────────────

    @staticmethod
    def _validate(name: str, account_type: str):
        if not name:
            raise ValueError("Account name cannot be empty.")
        if account_type not in ACCOUNT_TYPES:
            raise ValueError(
                f"Invalid account type '{account_type}'. "
                f"Must be one of: {', '.join(ACCOUNT_TYPES)}."
            )
