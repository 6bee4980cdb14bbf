import sqlite3

import customtkinter as ctk

from models.category import Category
from services.category_service import CategoryService
from ui.components.error_dialog import show_store_error
from ui.components.modal import ModalForm
from utils.constants import CATEGORY_ICONS, PALETTE


class CategoryForm(ModalForm):
    """Add or edit a category: name, income/expense, icon and color."""

    _ICON_LABELS = {label: name for name, label in CATEGORY_ICONS}

    def __init__(
        self,
        master,
        category_service: CategoryService,
        user_id: int,
        category: Category | None = None,
        initial_type: str = "expense",
        **kwargs,
    ):
        super().__init__(master, "Edit Category" if category else "New Category", **kwargs)
        self._svc = category_service
        self._user_id = user_id
        self._category = category

        self._name_var = self._entry("Name:", category.name if category else "")

        self._type_var = ctk.StringVar(value=category.type if category else initial_type)
        self._widget("Type:", ctk.CTkSegmentedButton(
            self, values=["expense", "income"], variable=self._type_var,
        ), sticky="w")

        icon = category.icon if category else CATEGORY_ICONS[0][0]
        icon_label = next((label for name, label in CATEGORY_ICONS if name == icon), "Other")
        self._icon_var = ctk.StringVar(value=icon_label)
        self._widget("Icon:", ctk.CTkComboBox(
            self, values=[label for _, label in CATEGORY_ICONS],
            variable=self._icon_var, width=240, state="readonly",
        ))

        self._color_var = ctk.StringVar(value=category.color if category else PALETTE[0])
        swatches = ctk.CTkFrame(self, fg_color="transparent")
        self._swatch_buttons = {}
        for color in PALETTE:
            btn = ctk.CTkButton(
                swatches, text="", width=22, height=22, corner_radius=11,
                fg_color=color, hover_color=color, border_width=0,
                command=lambda c=color: self._select_color(c),
            )
            btn.pack(side="left", padx=2)
            self._swatch_buttons[color] = btn
        self._widget("Color:", swatches, sticky="w")
        self._select_color(self._color_var.get())

        self._build_footer(self._on_save)
        self._show()

    def _select_color(self, color: str):
        self._color_var.set(color)
        for c, btn in self._swatch_buttons.items():
            btn.configure(border_width=2 if c == color else 0, border_color=("gray10", "white"))

    def _on_save(self):
        icon = self._ICON_LABELS.get(self._icon_var.get(), "logo-usd")
        args = (self._name_var.get(), self._type_var.get(), icon, self._color_var.get())
        try:
            if self._category:
                self._svc.update(self._category.id, *args)
            else:
                self._svc.create(self._user_id, *args)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self, "saving a category", e)
            return
        self._done()
