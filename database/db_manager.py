import logging
import os
import sqlite3

from utils.constants import DB_FILE

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the SQLite connection, the schema and the app_settings key-value table.

    Every data table carries a user_id; DAOs always filter on it.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_defaults(conn)
        conn.commit()
        logger.debug("Database ready at %s", self.db_path)

    def _create_schema(self, conn: sqlite3.Connection):
        # References between user tables are soft: no FOREIGN KEY clauses, so
        # deleting a category/account/card leaves transactions untouched.
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                email          TEXT NOT NULL UNIQUE COLLATE NOCASE,
                password_hash  TEXT NOT NULL,
                created_at     TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS profiles (
                id          INTEGER PRIMARY KEY,
                name        TEXT NOT NULL DEFAULT '',
                email       TEXT NOT NULL DEFAULT '',
                created_at  TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at  TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS accounts (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id      INTEGER NOT NULL,
                name         TEXT    NOT NULL,
                institution  TEXT,
                type         TEXT    NOT NULL DEFAULT 'checking'
                             CHECK(type IN ('checking','savings')),
                balance      REAL    NOT NULL DEFAULT 0.0,
                created_at   TEXT    NOT NULL DEFAULT (datetime('now')),
                updated_at   TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS credit_cards (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id       INTEGER NOT NULL,
                name          TEXT NOT NULL,
                brand         TEXT,
                last4         TEXT,
                credit_limit  REAL,
                due_day       INTEGER,
                closing_day   INTEGER,
                created_at    TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at    TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS categories (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id     INTEGER NOT NULL,
                name        TEXT NOT NULL,
                type        TEXT NOT NULL CHECK(type IN ('income','expense')),
                icon        TEXT NOT NULL DEFAULT 'logo-usd',
                color       TEXT NOT NULL DEFAULT '#A259FF',
                created_at  TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS transactions (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id      INTEGER NOT NULL,
                description  TEXT NOT NULL,
                amount       REAL NOT NULL CHECK(amount > 0),
                type         TEXT NOT NULL
                             CHECK(type IN ('income','expense','card_expense','transfer')),
                category     TEXT,
                account_id   INTEGER,
                card_id      INTEGER,
                date         TEXT NOT NULL,
                created_at   TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at   TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS savings_goals (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id         INTEGER NOT NULL,
                name            TEXT NOT NULL,
                target_amount   REAL NOT NULL CHECK(target_amount > 0),
                current_amount  REAL NOT NULL DEFAULT 0.0,
                icon            TEXT NOT NULL DEFAULT 'trophy',
                color           TEXT NOT NULL DEFAULT '#A259FF',
                deadline        TEXT,
                status          TEXT NOT NULL DEFAULT 'active'
                                CHECK(status IN ('active','completed','cancelled')),
                created_at      TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at      TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS achievements (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id      INTEGER NOT NULL,
                goal_id      INTEGER,
                title        TEXT NOT NULL,
                description  TEXT NOT NULL DEFAULT '',
                icon         TEXT NOT NULL DEFAULT 'trophy',
                unlocked_at  TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS spending_alerts (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id        INTEGER NOT NULL UNIQUE,
                monthly_limit  REAL NOT NULL,
                enabled        INTEGER NOT NULL DEFAULT 1,
                created_at     TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at     TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_accounts_user          ON accounts(user_id);
            CREATE INDEX IF NOT EXISTS idx_credit_cards_user      ON credit_cards(user_id);
            CREATE INDEX IF NOT EXISTS idx_categories_user        ON categories(user_id);
            CREATE INDEX IF NOT EXISTS idx_transactions_user_date ON transactions(user_id, date);
            CREATE INDEX IF NOT EXISTS idx_savings_goals_user     ON savings_goals(user_id, status);
            CREATE INDEX IF NOT EXISTS idx_achievements_user      ON achievements(user_id);
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("theme", "system"),
            ("date_format", "DD/MM/YYYY"),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    def delete_setting(self, key: str):
        conn = self.get_connection()
        conn.execute("DELETE FROM app_settings WHERE key = ?", (key,))
        conn.commit()

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) the app database.

        db_folder: if provided, the DB file is stored in that directory instead of CWD.
        """
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
            path = os.path.join(db_folder, DB_FILE)
        else:
            path = DB_FILE
        db = DatabaseManager(path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
