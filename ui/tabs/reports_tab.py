import csv
import logging
import sqlite3
from tkinter import filedialog, messagebox

import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from services.context import AppContext
from ui.components.error_dialog import show_store_error
from ui.components.stat_card import stat_card
from ui.tabs.background import BackgroundLoadMixin
from utils.constants import ACCENT_COLOR, EXPENSE_COLOR, INCOME_COLOR, REPORT_TIMEFRAMES
from utils.currency import format_currency
from utils.date_helpers import (
    current_month_str, format_display_date, friendly_month, next_month, prev_month,
)

logger = logging.getLogger(__name__)


class ReportsTab(BackgroundLoadMixin, ctk.CTkFrame):
    """Period KPIs and charts for the last 7/30/90 days, plus CSV export."""

    def __init__(
        self,
        master,
        ctx: AppContext,
        get_selection,
        notify_refresh,
        date_format: str = "DD/MM/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._get_selection = get_selection
        self._date_format = date_format
        self._timeframe_var = ctk.StringVar(value="30d")
        self._month_var = ctk.StringVar(value=current_month_str())

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._build_summary()
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkLabel(bar, text="Period:").pack(side="left", padx=(12, 4), pady=8)
        ctk.CTkSegmentedButton(
            bar, values=list(REPORT_TIMEFRAMES), variable=self._timeframe_var,
            command=lambda _: self._load(),
        ).pack(side="left", padx=(0, 12))

        ctk.CTkButton(
            bar, text="Export CSV", fg_color=ACCENT_COLOR, command=self._export_csv,
        ).pack(side="right", padx=8)
        ctk.CTkButton(bar, text="▶", width=28, command=self._next_month).pack(side="right")
        ctk.CTkLabel(
            bar, textvariable=self._month_var, width=80, anchor="center",
        ).pack(side="right", padx=4)
        ctk.CTkButton(bar, text="◀", width=28, command=self._prev_month).pack(side="right")
        ctk.CTkLabel(bar, text="Export month:").pack(side="right", padx=(0, 4))

    def _prev_month(self):
        self._month_var.set(prev_month(self._month_var.get()))

    def _next_month(self):
        self._month_var.set(next_month(self._month_var.get()))

    def _build_summary(self):
        self._summary_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._summary_frame.grid(row=1, column=0, sticky="ew", padx=10, pady=10)
        self._summary_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _build_charts(self):
        charts = ctk.CTkFrame(self, fg_color="transparent")
        charts.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        charts.grid_columnconfigure((0, 1), weight=1)
        charts.grid_rowconfigure((0, 1), weight=1)

        self._trend_fig, self._trend_ax, self._trend_mpl = self._chart_panel(
            charts, "Daily Income vs Expenses", row=0, column=0, columnspan=2,
        )
        self._cat_fig, self._cat_ax, self._cat_mpl = self._chart_panel(
            charts, "Top Expense Categories", row=1, column=0,
        )
        self._months_fig, self._months_ax, self._months_mpl = self._chart_panel(
            charts, "Last 3 Months", row=1, column=1,
        )

    def _chart_panel(self, parent, title, row, column, columnspan=1):
        outer = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(
            row=row, column=column, columnspan=columnspan,
            sticky="nsew", padx=4, pady=4,
        )
        ctk.CTkLabel(outer, text=title, font=ctk.CTkFont(size=13, weight="bold")).pack(pady=(8, 0))
        fig = Figure(figsize=(5, 2.4), dpi=80, tight_layout=True)
        ax = fig.add_subplot(111)
        canvas = FigureCanvasTkAgg(fig, master=outer)
        canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 8))
        return fig, ax, canvas

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    @staticmethod
    def _no_data(ax, canvas, text="No data"):
        ax.text(0.5, 0.5, text, ha="center", va="center", transform=ax.transAxes, color="gray")
        canvas.draw_idle()

    # ── Loading ───────────────────────────────────────────────────────────────

    def _load(self):
        account_id, card_id = self._get_selection()
        days = REPORT_TIMEFRAMES[self._timeframe_var.get()]
        user_id = self._ctx.user_id
        self._load_async(
            lambda: self._ctx.reports.get_period_data(user_id, days, account_id, card_id),
            self._apply,
            action="loading reports",
        )

    def _apply(self, data):
        report = data["report"]
        for w in self._summary_frame.winfo_children():
            w.destroy()
        biggest = report.biggest_expense
        biggest_text = (
            f"{format_currency(biggest.amount)} · {biggest.description}" if biggest else "None"
        )
        cards = [
            ("Income", format_currency(report.income), INCOME_COLOR),
            ("Expenses", format_currency(report.expense), EXPENSE_COLOR),
            ("Balance", format_currency(report.balance),
             INCOME_COLOR if report.balance >= 0 else EXPENSE_COLOR),
            ("Transactions", str(report.count), ACCENT_COLOR),
            ("Average ticket", format_currency(report.average_ticket), ACCENT_COLOR),
            ("Biggest expense", biggest_text, EXPENSE_COLOR),
        ]
        for i, (label, value, color) in enumerate(cards):
            stat_card(self._summary_frame, label, value, color, column=i % 3, row=i // 3)

        self._draw_trend(data["trend"])
        self._draw_categories(data["categories"])
        self._draw_recent_months(data["recent_months"])

    # ── Charts ────────────────────────────────────────────────────────────────

    def _draw_trend(self, points):
        ax = self._trend_ax
        ax.clear()
        self._style_ax(ax, self._trend_fig)
        if not any(p["income"] or p["expense"] for p in points):
            self._no_data(ax, self._trend_mpl)
            return
        x = list(range(len(points)))
        ax.plot(x, [p["income"] for p in points], color=INCOME_COLOR, linewidth=1.5)
        ax.plot(x, [p["expense"] for p in points], color=EXPENSE_COLOR, linewidth=1.5)
        step = max(1, len(points) // 7)
        ticks = x[::step]
        ax.set_xticks(ticks)
        ax.set_xticklabels(
            [format_display_date(points[i]["date"], self._date_format)[:5] for i in ticks]
        )
        self._trend_mpl.draw_idle()

    def _draw_categories(self, breakdown):
        ax = self._cat_ax
        ax.clear()
        self._style_ax(ax, self._cat_fig)
        if not breakdown:
            self._no_data(ax, self._cat_mpl, "No expense data")
            return
        names = [d["category"] for d in reversed(breakdown)]
        totals = [d["total"] for d in reversed(breakdown)]
        ax.barh(names, totals, color=ACCENT_COLOR)
        self._cat_mpl.draw_idle()

    def _draw_recent_months(self, months):
        ax = self._months_ax
        ax.clear()
        self._style_ax(ax, self._months_fig)
        if not any(m["income"] or m["expense"] for m in months):
            self._no_data(ax, self._months_mpl)
            return
        x = list(range(len(months)))
        w = 0.35
        ax.bar([i - w / 2 for i in x], [m["income"] for m in months], w, color=INCOME_COLOR)
        ax.bar([i + w / 2 for i in x], [m["expense"] for m in months], w, color=EXPENSE_COLOR)
        ax.set_xticks(x)
        ax.set_xticklabels([friendly_month(m["month"])[:3] for m in months])
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        self._months_mpl.draw_idle()

    # ── Export ────────────────────────────────────────────────────────────────

    def _export_csv(self):
        month = self._month_var.get()
        path = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
            initialfile=f"equilibra_{month}.csv",
        )
        if not path:
            return
        try:
            rows = self._ctx.reports.export_csv(self._ctx.user_id, month)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "exporting transactions", e)
            return
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                csv.writer(f).writerows(rows)
        except OSError as e:
            logger.error("CSV export to %s failed: %s", path, e)
            messagebox.showerror("Export Failed", f"Could not write file:\n{e}", parent=self)
            return
        logger.info("Exported %d transactions for %s", len(rows) - 1, month)
        messagebox.showinfo(
            "Export Complete", f"Saved {len(rows) - 1} transactions to\n{path}", parent=self,
        )
