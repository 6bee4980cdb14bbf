import customtkinter as ctk


def stat_card(parent, label: str, value: str, color=None, column: int = 0, row: int = 0):
    """Rounded label/value tile used on the summary screens."""
    card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
    card.grid(row=row, column=column, padx=6, pady=4, sticky="ew")
    ctk.CTkLabel(card, text=label, text_color="gray60").pack(pady=(10, 0), padx=16)
    ctk.CTkLabel(
        card, text=value,
        font=ctk.CTkFont(size=18, weight="bold"),
        text_color=color or ("gray10", "gray90"),
    ).pack(pady=(4, 10), padx=16)
    return card
