import logging
import sqlite3
from tkinter import messagebox

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Could not complete the operation. Please try again."


def show_store_error(parent, action: str, exc: sqlite3.Error):
    """Log a storage failure and show a blocking, generic error dialog."""
    logger.error("Store error while %s: %s", action, exc)
    messagebox.showerror("Error", GENERIC_MESSAGE, parent=parent)


def show_unexpected_error(parent, action: str):
    """Generic error dialog for a failure already logged with its traceback."""
    messagebox.showerror("Error", GENERIC_MESSAGE, parent=parent)
