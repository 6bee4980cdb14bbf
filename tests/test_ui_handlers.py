import logging
import sqlite3
from types import SimpleNamespace

import pytest

pytest.importorskip("customtkinter")

from ui.components import transaction_form
from ui.components.transaction_form import TransactionForm
from ui.tabs import background, home_tab
from ui.tabs.background import BackgroundLoadMixin
from ui.tabs.home_tab import HomeTab


class _SyncThread:
    def __init__(self, target, daemon=None):
        self._target = target

    def start(self):
        self._target()


class _Screen(BackgroundLoadMixin):
    """Stands in for a tab: after() queues callbacks instead of running a Tk loop."""

    def __init__(self):
        self.posted = []

    def after(self, _ms, callback):
        self.posted.append(callback)

    def winfo_exists(self):
        return True

    def winfo_toplevel(self):
        return None


@pytest.fixture
def screen(monkeypatch):
    monkeypatch.setattr(background.threading, "Thread", _SyncThread)
    return _Screen()


def test_background_load_applies_result(screen):
    applied = []
    screen._load_async(lambda: [1, 2], applied.append)
    screen.posted[0]()
    assert applied == [[1, 2]]


def test_superseded_load_is_dropped(screen):
    applied = []
    screen._load_async(lambda: "old", applied.append)
    screen._load_async(lambda: "new", applied.append)
    for callback in screen.posted:
        callback()
    assert applied == ["new"]


def test_store_error_is_reported(screen, monkeypatch):
    shown = []
    monkeypatch.setattr(
        background, "show_store_error", lambda parent, action, exc: shown.append(action)
    )

    def fetch():
        raise sqlite3.OperationalError("disk I/O error")

    applied = []
    screen._load_async(fetch, applied.append, action="loading insights")
    screen.posted[0]()
    assert shown == ["loading insights"]
    assert applied == []


def test_unexpected_error_is_logged_and_reported(screen, monkeypatch, caplog):
    shown = []
    monkeypatch.setattr(
        background, "show_unexpected_error", lambda parent, action: shown.append(action)
    )

    def fetch():
        raise KeyError("income")

    applied = []
    with caplog.at_level(logging.ERROR, logger="ui.tabs.background"):
        screen._load_async(fetch, applied.append, action="loading reports")
    assert len(screen.posted) == 1
    screen.posted[0]()
    assert shown == ["loading reports"]
    assert applied == []
    assert "loading reports" in caplog.text


def test_transaction_delete_needs_confirmation(ctx, user_id, monkeypatch):
    tx = ctx.transactions.create(user_id, "Lunch", 12, "expense", "2025-03-01", "Food")
    answers = iter([False, True])

    class _Answer:
        def __init__(self, master, title, message, **kwargs):
            self.result = next(answers)

    monkeypatch.setattr(transaction_form, "ConfirmDialog", _Answer)
    form = SimpleNamespace(_tx=tx, _ctx=ctx, saved=False, grab_set=lambda: None)
    form._done = lambda: setattr(form, "saved", True)

    TransactionForm._on_delete(form)
    assert ctx.transactions.get_by_id(tx.id) is not None
    assert not form.saved

    TransactionForm._on_delete(form)
    assert ctx.transactions.get_by_id(tx.id) is None
    assert form.saved


def test_home_values_can_be_hidden_and_shown(monkeypatch):
    cards = []
    monkeypatch.setattr(
        home_tab, "stat_card",
        lambda parent, title, value, color, column: cards.append((title, value)),
    )
    labels = []
    tab = SimpleNamespace(
        _values_visible=True,
        _totals={"income": 100.0, "expense": 40.0, "balance": 60.0},
        _card_frame=SimpleNamespace(winfo_children=lambda: []),
        _visibility_btn=SimpleNamespace(configure=lambda text: labels.append(text)),
    )
    tab._draw_cards = lambda: HomeTab._draw_cards(tab)

    HomeTab._toggle_values(tab)
    assert labels == ["Show values"]
    assert cards == [("Income", "$ ••••"), ("Expenses", "$ ••••"), ("Balance", "$ ••••")]

    cards.clear()
    HomeTab._toggle_values(tab)
    assert labels[-1] == "Hide values"
    assert cards == [("Income", "$100.00"), ("Expenses", "$40.00"), ("Balance", "$60.00")]
