import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from services.context import build_context
from ui.app_window import AppWindow
from ui.login_window import LoginWindow
from utils.app_config import get_db_folder, get_log_level

logger = logging.getLogger(__name__)


def main():
    # ── Logging ──────────────────────────────────────────────────────────────
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open(get_db_folder())
    ctx = build_context(db)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(ctx.settings.get_theme())
    ctk.set_default_color_theme("blue")

    # ── Login → app, until the user closes a window without signing out ─────
    try:
        while True:
            login = LoginWindow(ctx)
            login.mainloop()
            if ctx.auth.session is None:
                break
            app = AppWindow(ctx, date_format=ctx.settings.get_date_format())
            app.mainloop()
            if not app.signed_out:
                break
    finally:
        if ctx.auth.session is not None:
            ctx.auth.sign_out()
        db.close()
        logger.debug("Database closed")


if __name__ == "__main__":
    main()
