"""Display helpers shared by the commands."""

from decimal import Decimal


def format_money(amount: Decimal) -> str:
    """Fixed two-decimal display of an amount, e.g. ``$1,234.50``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percent(value: Decimal) -> str:
    """One-decimal percentage, e.g. ``75.0%``."""
    return f"{value:.1f}%"
