import sqlite3

import customtkinter as ctk

from models.savings_goal import SavingsGoal
from services.savings_goal_service import SavingsGoalService
from ui.components.date_picker import DatePickerWidget
from ui.components.error_dialog import show_store_error
from ui.components.modal import ModalForm
from utils.constants import GOAL_ICONS, PALETTE
from utils.currency import parse_amount


class GoalForm(ModalForm):
    """Create or edit a savings goal."""

    _ICON_LABELS = {label: name for name, label in GOAL_ICONS}

    def __init__(
        self,
        master,
        goal_service: SavingsGoalService,
        user_id: int,
        goal: SavingsGoal | None = None,
        date_format: str = "DD/MM/YYYY",
        **kwargs,
    ):
        super().__init__(master, "Edit Goal" if goal else "New Goal", **kwargs)
        self._svc = goal_service
        self._user_id = user_id
        self._goal = goal

        self._name_var = self._entry("Name:", goal.name if goal else "")
        self._target_var = self._entry("Target:", f"{goal.target_amount:.2f}" if goal else "")
        self._deadline = self._widget("Deadline:", DatePickerWidget(
            self, initial_date=goal.deadline if goal else None,
            date_format=date_format, allow_empty=True,
        ), sticky="w")

        icon = goal.icon if goal else "trophy"
        self._icon_var = ctk.StringVar(
            value=next((label for name, label in GOAL_ICONS if name == icon), "Goal")
        )
        self._widget("Icon:", ctk.CTkComboBox(
            self, values=[label for _, label in GOAL_ICONS],
            variable=self._icon_var, width=240, state="readonly",
        ))
        self._color_var = ctk.StringVar(value=goal.color if goal else PALETTE[-2])
        self._widget("Color:", ctk.CTkComboBox(
            self, values=PALETTE, variable=self._color_var, width=240, state="readonly",
        ))

        self._build_footer(self._on_save)
        self._show()

    def _on_save(self):
        target = parse_amount(self._target_var.get())
        if target is None:
            self._error_var.set("Target must be a number.")
            return
        if not self._deadline.is_valid():
            self._error_var.set("Invalid deadline.")
            return
        args = dict(
            name=self._name_var.get(),
            target_amount=target,
            icon=self._ICON_LABELS.get(self._icon_var.get(), "trophy"),
            color=self._color_var.get(),
            deadline=self._deadline.get() or None,
        )
        try:
            if self._goal:
                self._svc.update(self._goal.id, **args)
            else:
                self._svc.create(self._user_id, **args)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self, "saving a goal", e)
            return
        self._done()
