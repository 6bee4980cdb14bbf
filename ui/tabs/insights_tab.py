import customtkinter as ctk

from services.context import AppContext
from ui.tabs.background import BackgroundLoadMixin
from utils.constants import INSIGHT_COLORS, INSIGHT_ICONS


class InsightsTab(BackgroundLoadMixin, ctk.CTkFrame):
    def __init__(self, master, ctx: AppContext, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(
            self, text="Insights for this month", anchor="w",
            font=ctk.CTkFont(size=16, weight="bold"),
        ).grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _load(self):
        user_id = self._ctx.user_id
        self._load_async(
            lambda: self._ctx.insights.get_insights(user_id),
            self._apply,
            action="loading insights",
        )

    def _apply(self, insights):
        for w in self._scroll.winfo_children():
            w.destroy()
        if not insights:
            ctk.CTkLabel(
                self._scroll,
                text="Not enough data yet. Record some transactions to see insights.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        for i, insight in enumerate(insights):
            color = INSIGHT_COLORS.get(insight.kind, INSIGHT_COLORS["info"])
            card = ctk.CTkFrame(
                self._scroll, fg_color=("gray90", "gray20"), corner_radius=8,
                border_width=2, border_color=color,
            )
            card.grid(row=i, column=0, sticky="ew", padx=4, pady=4)
            card.grid_columnconfigure(1, weight=1)
            ctk.CTkLabel(
                card, text=INSIGHT_ICONS.get(insight.kind, ""), text_color=color,
                font=ctk.CTkFont(size=20), width=36,
            ).grid(row=0, column=0, rowspan=2, padx=(10, 4), pady=8)
            ctk.CTkLabel(
                card, text=insight.title, anchor="w", text_color=color,
                font=ctk.CTkFont(size=13, weight="bold"),
            ).grid(row=0, column=1, sticky="ew", padx=(4, 12), pady=(8, 0))
            ctk.CTkLabel(
                card, text=insight.description, anchor="w", justify="left",
                wraplength=700,
            ).grid(row=1, column=1, sticky="ew", padx=(4, 12), pady=(0, 8))
