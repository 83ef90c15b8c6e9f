"""CLI display formatting helpers."""

from decimal import Decimal


def format_money(amount: Decimal) -> str:
    """Format an amount for display, e.g. $1,234.50 or -$12.00."""
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"
