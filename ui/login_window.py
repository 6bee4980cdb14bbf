import sqlite3

import customtkinter as ctk

from services.context import AppContext
from ui.components.error_dialog import show_store_error
from utils.constants import ACCENT_COLOR, APP_NAME, EXPENSE_COLOR


class LoginWindow(ctk.CTk):
    """Sign in / sign up screen. Closes itself once a session exists."""

    def __init__(self, ctx: AppContext, **kwargs):
        super().__init__(**kwargs)
        self._ctx = ctx
        self._mode = "sign_in"

        self.title(APP_NAME)
        self.geometry("380x420")
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=APP_NAME,
            font=ctk.CTkFont(size=26, weight="bold"), text_color=ACCENT_COLOR,
        ).grid(row=0, column=0, pady=(28, 4))
        self._subtitle = ctk.CTkLabel(self, text="", text_color="gray60")
        self._subtitle.grid(row=1, column=0, pady=(0, 16))

        self._name_var = ctk.StringVar()
        self._email_var = ctk.StringVar()
        self._password_var = ctk.StringVar()

        self._name_entry = ctk.CTkEntry(
            self, textvariable=self._name_var, placeholder_text="Name", width=260
        )
        self._name_entry.grid(row=2, column=0, pady=4)
        ctk.CTkEntry(
            self, textvariable=self._email_var, placeholder_text="Email", width=260
        ).grid(row=3, column=0, pady=4)
        password = ctk.CTkEntry(
            self, textvariable=self._password_var, placeholder_text="Password",
            show="•", width=260,
        )
        password.grid(row=4, column=0, pady=4)
        password.bind("<Return>", lambda _e: self._submit())

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var, text_color=EXPENSE_COLOR, wraplength=300,
        ).grid(row=5, column=0, pady=(4, 0))

        self._submit_btn = ctk.CTkButton(
            self, text="", width=260, fg_color=ACCENT_COLOR, command=self._submit,
        )
        self._submit_btn.grid(row=6, column=0, pady=(8, 4))
        self._switch_btn = ctk.CTkButton(
            self, text="", width=260, fg_color="transparent",
            text_color=("gray10", "gray90"), command=self._toggle_mode,
        )
        self._switch_btn.grid(row=7, column=0)

        self._apply_mode()

    def _toggle_mode(self):
        self._mode = "sign_up" if self._mode == "sign_in" else "sign_in"
        self._error_var.set("")
        self._apply_mode()

    def _apply_mode(self):
        if self._mode == "sign_in":
            self._subtitle.configure(text="Sign in to your account")
            self._submit_btn.configure(text="Sign in")
            self._switch_btn.configure(text="Create an account")
            self._name_entry.grid_remove()
        else:
            self._subtitle.configure(text="Create your account")
            self._submit_btn.configure(text="Sign up")
            self._switch_btn.configure(text="I already have an account")
            self._name_entry.grid()

    def _submit(self):
        email = self._email_var.get()
        password = self._password_var.get()
        try:
            if self._mode == "sign_in":
                self._ctx.auth.sign_in(email, password)
            else:
                self._ctx.auth.sign_up(email, password, self._name_var.get())
        except ValueError as e:
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            show_store_error(self, "signing in", e)
            return
        self.destroy()
