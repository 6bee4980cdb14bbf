import math


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format a float as currency string, e.g. '$1,234.56'."""
    return f"{symbol}{amount:,.2f}"


def format_signed(amount: float, symbol: str = "$") -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def parse_amount(text: str) -> float | None:
    """Parse a user-entered amount, accepting ',' as the decimal separator.

    Returns None for empty or non-numeric input.
    """
    if text is None:
        return None
    cleaned = text.strip().replace(" ", "")
    if not cleaned:
        return None
    if "," in cleaned and "." not in cleaned:
        cleaned = cleaned.replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")
    try:
        value = float(cleaned)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def masked_currency(amount: float, visible: bool = True, symbol: str = "$") -> str:
    """format_currency, or a fixed placeholder while values are hidden."""
    return format_currency(amount, symbol) if visible else f"{symbol} ••••"
