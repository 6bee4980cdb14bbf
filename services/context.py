from dataclasses import dataclass

from database.db_manager import DatabaseManager
from database.user_dao import UserDAO
from database.profile_dao import ProfileDAO
from database.account_dao import AccountDAO
from database.card_dao import CardDAO
from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from database.savings_goal_dao import SavingsGoalDAO
from database.achievement_dao import AchievementDAO
from database.alert_dao import AlertDAO

from services.auth_service import AuthService
from services.profile_service import ProfileService
from services.account_service import AccountService
from services.card_service import CardService
from services.category_service import CategoryService
from services.transaction_service import TransactionService
from services.report_service import ReportService
from services.insight_service import InsightService
from services.alert_service import AlertService
from services.savings_goal_service import SavingsGoalService
from services.settings_service import SettingsService


@dataclass
class AppContext:
    """Everything a screen needs, handed down from main.py."""

    auth: AuthService
    profiles: ProfileService
    accounts: AccountService
    cards: CardService
    categories: CategoryService
    transactions: TransactionService
    reports: ReportService
    insights: InsightService
    alerts: AlertService
    goals: SavingsGoalService
    settings: SettingsService

    @property
    def user_id(self) -> int | None:
        return self.auth.user_id


def build_context(db: DatabaseManager) -> AppContext:
    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(db)
    account_dao = AccountDAO(db)
    card_dao = CardDAO(db)
    profile_dao = ProfileDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    auth = AuthService(UserDAO(db), profile_dao)
    return AppContext(
        auth=auth,
        profiles=ProfileService(profile_dao, auth),
        accounts=AccountService(account_dao, tx_dao),
        cards=CardService(card_dao),
        categories=CategoryService(CategoryDAO(db)),
        transactions=TransactionService(tx_dao),
        reports=ReportService(tx_dao, account_dao, card_dao),
        insights=InsightService(tx_dao),
        alerts=AlertService(AlertDAO(db), tx_dao),
        goals=SavingsGoalService(SavingsGoalDAO(db), AchievementDAO(db)),
        settings=SettingsService(db),
    )
