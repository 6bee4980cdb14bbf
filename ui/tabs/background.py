import logging
import sqlite3
import threading

from ui.components.error_dialog import show_store_error, show_unexpected_error

logger = logging.getLogger(__name__)


class BackgroundLoadMixin:
    """Runs a fetch on a worker thread and applies the result on the Tk thread.

    Results of a load that was superseded by a newer one are dropped.
    """

    _load_gen = 0

    def _load_async(self, fetch, apply, action: str = "loading data"):
        self._load_gen += 1
        gen = self._load_gen

        def worker():
            try:
                result, error = fetch(), None
            except sqlite3.Error as e:
                result, error = None, e
            except Exception as e:
                logger.exception("Unexpected error while %s", action)
                result, error = None, e
            self.after(0, lambda: self._on_loaded(gen, result, error, apply, action))

        threading.Thread(target=worker, daemon=True).start()

    def _on_loaded(self, gen, result, error, apply, action):
        if gen != self._load_gen or not self.winfo_exists():
            return
        if isinstance(error, sqlite3.Error):
            show_store_error(self.winfo_toplevel(), action, error)
            return
        if error is not None:
            show_unexpected_error(self.winfo_toplevel(), action)
            return
        apply(result)
