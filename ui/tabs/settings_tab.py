import logging
import sqlite3

import customtkinter as ctk
from tkinter import filedialog

from services.context import AppContext
from ui.components.error_dialog import show_store_error
from ui.components.profile_form import ProfileForm
from utils.app_config import get_db_folder, set_db_folder
from utils.constants import EXPENSE_COLOR, THEME_MODES
from utils.date_helpers import DATE_FORMAT_OPTIONS

logger = logging.getLogger(__name__)


class SettingsTab(ctk.CTkFrame):
    """Profile, appearance, date format, database folder and sign-out."""

    def __init__(self, master, ctx: AppContext, notify_refresh, on_sign_out, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctx = ctx
        self._notify_refresh = notify_refresh
        self._on_sign_out = on_sign_out

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_profile_section(scroll)
        self._build_appearance_section(scroll)
        self._build_db_folder_section(scroll)
        self._build_session_section(scroll)
        self.refresh()

    def refresh(self):
        """Re-read profile and preferences."""
        try:
            profile = self._ctx.profiles.get(self._ctx.user_id)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "loading the profile", e)
            return
        session = self._ctx.auth.session
        name = profile.name if profile and profile.name else "(no name)"
        email = profile.email if profile and profile.email else (session.email if session else "")
        self._name_label.configure(text=name)
        self._email_label.configure(text=email)
        self._theme_var.set(self._ctx.settings.get_theme())
        self._date_fmt_var.set(self._ctx.settings.get_date_format())

    # ── Section 1: Profile ────────────────────────────────────────────────────

    def _build_profile_section(self, parent):
        section = self._make_section(parent, "Profile", row=0)
        self._name_label = ctk.CTkLabel(
            section, text="", anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
        )
        self._name_label.grid(row=0, column=0, sticky="w", padx=8, pady=(4, 0))
        self._email_label = ctk.CTkLabel(section, text="", anchor="w", text_color="gray60")
        self._email_label.grid(row=1, column=0, sticky="w", padx=8, pady=(0, 6))
        ctk.CTkButton(
            section, text="Edit Profile", width=120, command=self._open_profile,
        ).grid(row=0, column=1, rowspan=2, padx=8)

    def _open_profile(self):
        form = ProfileForm(self.winfo_toplevel(), self._ctx)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("profile")

    # ── Section 2: Appearance ─────────────────────────────────────────────────

    def _build_appearance_section(self, parent):
        section = self._make_section(parent, "Appearance", row=1)

        ctk.CTkLabel(section, text="Theme:", anchor="e", width=120).grid(
            row=0, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._theme_var = ctk.StringVar(value=self._ctx.settings.get_theme())
        ctk.CTkSegmentedButton(
            section, values=list(THEME_MODES), variable=self._theme_var,
            command=self._on_theme,
        ).grid(row=0, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(section, text="Date Format:", anchor="e", width=120).grid(
            row=1, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._date_fmt_var = ctk.StringVar(value=self._ctx.settings.get_date_format())
        ctk.CTkComboBox(
            section, values=DATE_FORMAT_OPTIONS, variable=self._date_fmt_var,
            width=180, state="readonly", command=self._on_date_format,
        ).grid(row=1, column=1, padx=4, pady=6, sticky="w")

        self._appearance_status = ctk.CTkLabel(
            section, text="", text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        )
        self._appearance_status.grid(row=2, column=0, columnspan=2, sticky="w", padx=8)

    def _on_theme(self, theme: str):
        try:
            self._ctx.settings.set_theme(theme)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "saving the theme", e)
            return
        ctk.set_appearance_mode(theme)
        logger.info("Theme set to %s", theme)
        self._notify_refresh("theme")

    def _on_date_format(self, fmt: str):
        try:
            self._ctx.settings.set_date_format(fmt)
        except sqlite3.Error as e:
            show_store_error(self.winfo_toplevel(), "saving the date format", e)
            return
        self._appearance_status.configure(
            text="Date format changes take effect on next sign-in."
        )

    # ── Section 3: DB folder ──────────────────────────────────────────────────

    def _build_db_folder_section(self, parent):
        section = self._make_section(parent, "Database Folder", row=2)

        ctk.CTkLabel(
            section,
            text="The database file (equilibra.db) is stored in this folder.",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=8, pady=(4, 6))

        self._db_folder_var = ctk.StringVar(value=get_db_folder() or "(default: app folder)")
        ctk.CTkEntry(
            section, textvariable=self._db_folder_var, state="readonly", width=340,
        ).grid(row=1, column=0, padx=(8, 4), pady=4, sticky="ew")

        ctk.CTkButton(
            section, text="Browse…", width=90, command=self._browse_db_folder,
        ).grid(row=1, column=1, padx=4)
        ctk.CTkButton(
            section, text="Reset to Default", width=120,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=self._reset_db_folder,
        ).grid(row=1, column=2, padx=(4, 8))

        self._db_restart_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800", font=ctk.CTkFont(size=11), anchor="w",
        )
        self._db_restart_label.grid(row=2, column=0, columnspan=3, sticky="w", padx=8, pady=(0, 6))

    def _browse_db_folder(self):
        path = filedialog.askdirectory(title="Choose DB folder")
        if path:
            set_db_folder(path)
            self._db_folder_var.set(path)
            self._db_restart_label.configure(text="Restart the app for the change to take effect.")

    def _reset_db_folder(self):
        set_db_folder(None)
        self._db_folder_var.set("(default: app folder)")
        self._db_restart_label.configure(text="Restart the app for the change to take effect.")

    # ── Section 4: Session ────────────────────────────────────────────────────

    def _build_session_section(self, parent):
        section = self._make_section(parent, "Session", row=3)
        ctk.CTkButton(
            section, text="Sign Out", width=120,
            fg_color=EXPENSE_COLOR, hover_color="#D32F2F",
            command=self._on_sign_out,
        ).grid(row=0, column=0, sticky="w", padx=8, pady=6)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        """Create a labelled card section and return its inner frame."""
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            outer, text=title, font=ctk.CTkFont(size=14, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))

        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        inner.grid_columnconfigure(0, weight=1)
        return inner
