import sqlite3

import customtkinter as ctk

from services.context import AppContext
from ui.components.category_form import CategoryForm
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.error_dialog import show_store_error
from utils.constants import ACCENT_COLOR, CATEGORY_ICONS, EXPENSE_COLOR, INCOME_COLOR

_ICON_LABELS = dict(CATEGORY_ICONS)


class CategoriesTab(ctk.CTkFrame):
    def __init__(self, master, ctx: AppContext, notify_refresh, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._notify_refresh = notify_refresh
        self._type_var = ctk.StringVar(value="expense")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_toolbar()
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(
            bar, text="Categories", font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(side="left", padx=(12, 16), pady=8)
        ctk.CTkSegmentedButton(
            bar, values=["expense", "income"], variable=self._type_var,
            command=lambda _: self._load(),
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            bar, text="+ Add Category", fg_color=ACCENT_COLOR, command=self._open_add,
        ).pack(side="right", padx=8, pady=6)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()
        try:
            categories = self._ctx.categories.get_by_type(self._ctx.user_id, self._type_var.get())
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "loading categories", e)
            return
        if not categories:
            ctk.CTkLabel(
                self._scroll, text="No categories found.", text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return
        for idx, cat in enumerate(categories):
            self._add_row(idx, cat)

    def _add_row(self, idx, cat):
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text="", width=28, height=28, corner_radius=14, fg_color=cat.color,
        ).grid(row=0, column=0, padx=(10, 0), pady=8)
        ctk.CTkLabel(
            row, text=cat.name, font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).grid(row=0, column=1, padx=8, sticky="w")
        ctk.CTkLabel(
            row, text=_ICON_LABELS.get(cat.icon, cat.icon), width=90,
            text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=0, column=2, padx=4)
        ctk.CTkLabel(
            row, text=cat.type, width=70,
            text_color=INCOME_COLOR if cat.type == "income" else EXPENSE_COLOR,
            font=ctk.CTkFont(size=11, weight="bold"),
        ).grid(row=0, column=3, padx=4)

        btn_frame = ctk.CTkFrame(row, fg_color="transparent")
        btn_frame.grid(row=0, column=4, padx=(4, 10), pady=6)
        ctk.CTkButton(
            btn_frame, text="Edit", width=60, height=26,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=lambda c=cat: self._open_edit(c),
        ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            btn_frame, text="Delete", width=65, height=26,
            fg_color=EXPENSE_COLOR, hover_color="#D32F2F",
            command=lambda c=cat: self._on_delete(c),
        ).pack(side="left")

    def _open_add(self):
        form = CategoryForm(
            self.winfo_toplevel(), self._ctx.categories, self._ctx.user_id,
            initial_type=self._type_var.get(),
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _open_edit(self, cat):
        form = CategoryForm(
            self.winfo_toplevel(), self._ctx.categories, self._ctx.user_id, category=cat,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _on_delete(self, cat):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Category",
            message=f"Delete '{cat.name}'? Existing transactions keep their category label.",
        )
        if not dlg.result:
            return
        try:
            self._ctx.categories.delete(cat.id)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "deleting a category", e)
            return
        self._notify_refresh("category")
