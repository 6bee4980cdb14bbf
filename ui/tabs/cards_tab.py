import sqlite3

import customtkinter as ctk

from services.context import AppContext
from ui.components.card_form import CardForm
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.error_dialog import show_store_error
from utils.constants import ACCENT_COLOR, EXPENSE_COLOR
from utils.currency import format_currency


class CardsTab(ctk.CTkFrame):
    def __init__(self, master, ctx: AppContext, notify_refresh, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(
            bar, text="Credit Cards", font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(side="left", padx=(12, 16), pady=8)
        ctk.CTkButton(
            bar, text="+ Add Card", fg_color=ACCENT_COLOR, command=self._open_add,
        ).pack(side="right", padx=8, pady=6)

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()
        try:
            cards = self._ctx.cards.get_all(self._ctx.user_id)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "loading cards", e)
            return
        if not cards:
            ctk.CTkLabel(
                self._scroll, text="No cards registered.", text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        for i, card in enumerate(cards):
            row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
            row.grid(row=i, column=0, sticky="ew", padx=4, pady=3)
            row.grid_columnconfigure(0, weight=1)

            title = card.display_name
            if card.brand:
                title += f"  ({card.brand})"
            ctk.CTkLabel(
                row, text=title, anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
            ).grid(row=0, column=0, sticky="w", padx=12, pady=(8, 0))

            details = []
            if card.credit_limit is not None:
                details.append(f"Limit {format_currency(card.credit_limit)}")
            if card.closing_day:
                details.append(f"closes day {card.closing_day}")
            if card.due_day:
                details.append(f"due day {card.due_day}")
            ctk.CTkLabel(
                row, text=" · ".join(details) or "No details", anchor="w",
                text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=1, column=0, sticky="w", padx=12, pady=(0, 8))

            btns = ctk.CTkFrame(row, fg_color="transparent")
            btns.grid(row=0, column=1, rowspan=2, padx=(4, 10))
            ctk.CTkButton(
                btns, text="Edit", width=60, height=26,
                fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
                command=lambda c=card: self._open_edit(c),
            ).pack(side="left", padx=(0, 4))
            ctk.CTkButton(
                btns, text="Delete", width=65, height=26,
                fg_color=EXPENSE_COLOR, hover_color="#D32F2F",
                command=lambda c=card: self._on_delete(c),
            ).pack(side="left")

    def _open_add(self):
        form = CardForm(self.winfo_toplevel(), self._ctx.cards, self._ctx.user_id)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("card")

    def _open_edit(self, card):
        form = CardForm(self.winfo_toplevel(), self._ctx.cards, self._ctx.user_id, card=card)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("card")

    def _on_delete(self, card):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Card",
            message=f"Delete '{card.name}'? Card expenses already recorded are kept.",
        )
        if not dlg.result:
            return
        try:
            self._ctx.cards.delete(card.id)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "deleting a card", e)
            return
        self._notify_refresh("card")
