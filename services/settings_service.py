from database.db_manager import DatabaseManager
from utils.constants import THEME_MODES


class SettingsService:
    """Typed access to the app_settings key-value table."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def get_theme(self) -> str:
        theme = self._db.get_setting("theme", "system")
        return theme if theme in THEME_MODES else "system"

    def set_theme(self, theme: str):
        if theme not in THEME_MODES:
            raise ValueError(f"Unknown theme: {theme}")
        self._db.set_setting("theme", theme)

    def get_date_format(self) -> str:
        return self._db.get_setting("date_format", "DD/MM/YYYY")

    def set_date_format(self, fmt: str):
        self._db.set_setting("date_format", fmt)

    # Active account/card are stored per user: 'active_account:<user_id>'.

    def get_active_account(self, user_id: int) -> int | None:
        return self._get_id(f"active_account:{user_id}")

    def set_active_account(self, user_id: int, account_id: int | None):
        self._set_id(f"active_account:{user_id}", account_id)

    def get_active_card(self, user_id: int) -> int | None:
        return self._get_id(f"active_card:{user_id}")

    def set_active_card(self, user_id: int, card_id: int | None):
        self._set_id(f"active_card:{user_id}", card_id)

    def _get_id(self, key: str) -> int | None:
        value = self._db.get_setting(key)
        return int(value) if value.isdigit() else None

    def _set_id(self, key: str, value: int | None):
        if value is None:
            self._db.delete_setting(key)
        else:
            self._db.set_setting(key, str(value))
