import sqlite3

import customtkinter as ctk

from services.context import AppContext
from ui.components.error_dialog import show_store_error
from ui.components.modal import ModalForm


class ProfileForm(ModalForm):
    """Edit name and email; the password section is optional."""

    def __init__(self, master, ctx: AppContext, **kwargs):
        super().__init__(master, "Edit Profile", **kwargs)
        self._ctx = ctx
        user_id = ctx.user_id
        profile = ctx.profiles.get(user_id)
        session = ctx.auth.session

        self._name_var = self._entry("Name:", profile.name if profile else "")
        self._email_var = self._entry(
            "Email:", profile.email if profile else (session.email if session else "")
        )

        ctk.CTkLabel(
            self, text="Change password (optional)",
            font=ctk.CTkFont(size=12, weight="bold"), anchor="w",
        ).grid(row=self._row, column=0, columnspan=2, padx=16, pady=(12, 4), sticky="w")
        self._row += 1

        self._current_var = self._password("Current:")
        self._new_var = self._password("New:")
        self._confirm_var = self._password("Confirm:")

        self._build_footer(self._on_save)
        self._show()

    def _password(self, text: str) -> ctk.StringVar:
        var = ctk.StringVar()
        self._widget(text, ctk.CTkEntry(self, textvariable=var, width=240, show="•"))
        return var

    def _on_save(self):
        try:
            self._ctx.profiles.update(
                self._ctx.user_id,
                self._name_var.get(),
                self._email_var.get(),
                self._current_var.get(),
                self._new_var.get(),
                self._confirm_var.get(),
            )
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self, "updating the profile", e)
            return
        self._done()
