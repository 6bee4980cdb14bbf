import sqlite3

import customtkinter as ctk

from services.context import AppContext
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.deposit_dialog import DepositDialog
from ui.components.error_dialog import show_store_error
from ui.components.goal_form import GoalForm
from ui.components.stat_card import stat_card
from utils.constants import ACCENT_COLOR, EXPENSE_COLOR, INCOME_COLOR
from utils.currency import format_currency
from utils.date_helpers import format_display_date

_STATUS_COLORS = {
    "active": ACCENT_COLOR,
    "completed": INCOME_COLOR,
    "cancelled": "gray50",
}


class GoalsTab(ctk.CTkFrame):
    """Savings goals with progress, deposits and unlocked achievements."""

    def __init__(self, master, ctx: AppContext, notify_refresh,
                 date_format: str = "DD/MM/YYYY", **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._filter_var = ctk.StringVar(value="active")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._stats = ctk.CTkFrame(self, fg_color="transparent")
        self._stats.grid(row=1, column=0, sticky="ew", padx=10, pady=6)
        self._stats.grid_columnconfigure((0, 1, 2), weight=1)

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(
            bar, text="Savings Goals", font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(side="left", padx=(12, 16), pady=8)
        ctk.CTkSegmentedButton(
            bar, values=["active", "completed", "cancelled", "achievements"],
            variable=self._filter_var, command=lambda _: self._load(),
        ).pack(side="left")
        ctk.CTkButton(
            bar, text="+ New Goal", fg_color=ACCENT_COLOR, command=self._open_add,
        ).pack(side="right", padx=8, pady=6)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()
        for w in self._stats.winfo_children():
            w.destroy()
        user_id = self._ctx.user_id
        try:
            stats = self._ctx.goals.get_stats(user_id)
            if self._filter_var.get() == "achievements":
                self._show_achievements(self._ctx.goals.get_achievements(user_id))
            else:
                self._show_goals(self._ctx.goals.get_by_status(user_id, self._filter_var.get()))
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "loading goals", e)
            return

        stat_card(self._stats, "Active", str(stats["active"]), ACCENT_COLOR, column=0)
        stat_card(self._stats, "Completed", str(stats["completed"]), INCOME_COLOR, column=1)
        stat_card(self._stats, "Achievements", str(stats["achievements"]), "#FECA57", column=2)

    def _show_goals(self, goals):
        if not goals:
            ctk.CTkLabel(
                self._scroll, text="No goals here yet.", text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return
        for i, goal in enumerate(goals):
            self._goal_row(i, goal)

    def _goal_row(self, idx, goal):
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=4)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text="", width=14, height=48, corner_radius=4, fg_color=goal.color,
        ).grid(row=0, column=0, rowspan=3, padx=(10, 0), pady=8)
        ctk.CTkLabel(
            row, text=goal.name, anchor="w", font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=0, column=1, sticky="w", padx=10, pady=(8, 0))

        detail = (
            f"{format_currency(goal.current_amount)} of {format_currency(goal.target_amount)}"
            f"  ·  {goal.progress:.0f}%"
        )
        if goal.deadline:
            detail += f"  ·  until {format_display_date(goal.deadline, self._date_format)}"
        ctk.CTkLabel(
            row, text=detail, anchor="w", text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=1, column=1, sticky="w", padx=10)

        bar = ctk.CTkProgressBar(row, progress_color=_STATUS_COLORS.get(goal.status, ACCENT_COLOR))
        bar.set(goal.progress / 100)
        bar.grid(row=2, column=1, sticky="ew", padx=10, pady=(4, 10))

        btns = ctk.CTkFrame(row, fg_color="transparent")
        btns.grid(row=0, column=2, rowspan=3, padx=(4, 10))
        if goal.status == "active":
            ctk.CTkButton(
                btns, text="Deposit", width=70, height=26, fg_color=INCOME_COLOR,
                command=lambda g=goal: self._open_deposit(g),
            ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            btns, text="Edit", width=55, height=26,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=lambda g=goal: self._open_edit(g),
        ).pack(side="left", padx=(0, 4))
        if goal.status == "active":
            ctk.CTkButton(
                btns, text="Cancel", width=60, height=26,
                fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
                command=lambda g=goal: self._on_cancel(g),
            ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            btns, text="Delete", width=60, height=26,
            fg_color=EXPENSE_COLOR, hover_color="#D32F2F",
            command=lambda g=goal: self._on_delete(g),
        ).pack(side="left")

    def _show_achievements(self, achievements):
        if not achievements:
            ctk.CTkLabel(
                self._scroll, text="Reach a goal to unlock your first achievement.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return
        for i, ach in enumerate(achievements):
            row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
            row.grid(row=i, column=0, sticky="ew", padx=4, pady=3)
            row.grid_columnconfigure(1, weight=1)
            ctk.CTkLabel(
                row, text="🏆", font=ctk.CTkFont(size=20), width=36,
            ).grid(row=0, column=0, rowspan=2, padx=(10, 4), pady=8)
            ctk.CTkLabel(
                row, text=ach.title, anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
            ).grid(row=0, column=1, sticky="w", pady=(8, 0))
            ctk.CTkLabel(
                row, text=ach.description, anchor="w", text_color="gray60",
            ).grid(row=1, column=1, sticky="w", pady=(0, 8))
            ctk.CTkLabel(
                row, text=format_display_date(ach.unlocked_at[:10], self._date_format),
                text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=0, column=2, rowspan=2, padx=12)

    # ── Actions ───────────────────────────────────────────────────────────────

    def _open_add(self):
        form = GoalForm(
            self.winfo_toplevel(), self._ctx.goals, self._ctx.user_id,
            date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("goal")

    def _open_edit(self, goal):
        form = GoalForm(
            self.winfo_toplevel(), self._ctx.goals, self._ctx.user_id, goal=goal,
            date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("goal")

    def _open_deposit(self, goal):
        dlg = DepositDialog(self.winfo_toplevel(), self._ctx.goals, goal)
        self.wait_window(dlg)
        if dlg.saved:
            if dlg.completed:
                self._filter_var.set("completed")
            self._notify_refresh("goal")

    def _on_cancel(self, goal):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Cancel Goal",
            message=f"Cancel '{goal.name}'? Saved amounts are kept.",
            confirm_text="Cancel Goal",
        )
        if not dlg.result:
            return
        self._run(lambda: self._ctx.goals.cancel(goal.id), "cancelling a goal")

    def _on_delete(self, goal):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Goal",
            message=f"Delete '{goal.name}'? This cannot be undone.",
        )
        if not dlg.result:
            return
        self._run(lambda: self._ctx.goals.delete(goal.id), "deleting a goal")

    def _run(self, action, label):
        try:
            action()
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), label, e)
            return
        self._notify_refresh("goal")
