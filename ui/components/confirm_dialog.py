import customtkinter as ctk

from utils.constants import EXPENSE_COLOR


class ConfirmDialog(ctk.CTkToplevel):
    """Blocking yes/no question. Read the answer from .result after construction."""

    def __init__(
        self,
        master,
        title: str,
        message: str,
        confirm_text: str = "Delete",
        destructive: bool = True,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))

        confirm_colors = (
            {"fg_color": EXPENSE_COLOR, "hover_color": "#D32F2F"} if destructive else {}
        )
        ctk.CTkButton(
            btn_frame, text=confirm_text, width=90,
            command=self._on_confirm, **confirm_colors,
        ).pack(side="left")

        self.transient(master)
        self.grab_set()
        self.update_idletasks()
        x = master.winfo_x() + master.winfo_width() // 2 - self.winfo_width() // 2
        y = master.winfo_y() + master.winfo_height() // 2 - self.winfo_height() // 2
        self.geometry(f"+{x}+{y}")
        self.wait_window()

    def _on_confirm(self):
        self.result = True
        self.destroy()
