import customtkinter as ctk

from utils.constants import EXPENSE_COLOR


class ModalForm(ctk.CTkToplevel):
    """Base for add/edit dialogs: label/entry grid, inline error, button row.

    Subclasses build their rows with _label()/_entry() and finish with
    _build_footer(). self.saved is True once the form wrote successfully.
    """

    def __init__(self, master, title: str, **kwargs):
        super().__init__(master, **kwargs)
        self.saved = False
        self.title(title)
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)
        self._row = 0

    # ── Row helpers ──────────────────────────────────────────────────────────

    def _label(self, text: str):
        pady = (16, 4) if self._row == 0 else 4
        ctk.CTkLabel(self, text=text).grid(
            row=self._row, column=0, padx=(16, 8), pady=pady, sticky="e"
        )

    def _entry(self, text: str, value: str = "", width: int = 240) -> ctk.StringVar:
        self._label(text)
        var = ctk.StringVar(value=value)
        pady = (16, 4) if self._row == 0 else 4
        ctk.CTkEntry(self, textvariable=var, width=width).grid(
            row=self._row, column=1, padx=(0, 16), pady=pady, sticky="ew"
        )
        self._row += 1
        return var

    def _widget(self, text: str, widget, sticky: str = "ew"):
        self._label(text)
        widget.grid(row=self._row, column=1, padx=(0, 16), pady=4, sticky=sticky)
        self._row += 1
        return widget

    def _build_footer(self, on_save, on_delete=None, save_text: str = "Save"):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color=EXPENSE_COLOR, wraplength=300, anchor="w",
        ).grid(row=self._row, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        self._row += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=self._row, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        if on_delete:
            ctk.CTkButton(
                btn_frame, text="Delete", width=80,
                fg_color=EXPENSE_COLOR, hover_color="#D32F2F",
                command=on_delete,
            ).pack(side="left", padx=8)
        ctk.CTkButton(btn_frame, text=save_text, width=90, command=on_save).pack(side="right")
        self._row += 1

    def _show(self):
        self.transient(self.master)
        self.grab_set()
        self._center()

    def _done(self):
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
