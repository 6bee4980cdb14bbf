import sqlite3

import customtkinter as ctk

from models.savings_goal import SavingsGoal
from services.savings_goal_service import SavingsGoalService
from ui.components.error_dialog import show_store_error
from ui.components.modal import ModalForm
from utils.currency import format_currency, parse_amount


class DepositDialog(ModalForm):
    """Add money to a goal. self.completed tells whether the deposit finished it."""

    def __init__(self, master, goal_service: SavingsGoalService, goal: SavingsGoal, **kwargs):
        super().__init__(master, f"Deposit to {goal.name}", **kwargs)
        self._svc = goal_service
        self._goal = goal
        self.completed = False

        self._label("Remaining:")
        ctk.CTkLabel(self, text=format_currency(goal.remaining), anchor="w").grid(
            row=self._row, column=1, padx=(0, 16), pady=(16, 4), sticky="w"
        )
        self._row += 1
        self._amount_var = self._entry("Amount:")

        self._build_footer(self._on_save, save_text="Deposit")
        self._show()

    def _on_save(self):
        amount = parse_amount(self._amount_var.get())
        if amount is None:
            self._error_var.set("Invalid amount.")
            return
        try:
            updated = self._svc.deposit(self._goal.id, amount)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self, "depositing to a goal", e)
            return
        self.completed = updated.status == "completed" and self._goal.status != "completed"
        self._done()
