"""Amount parsing and formatting utilities."""

from decimal import Decimal, InvalidOperation
import re

CURRENCY_SYMBOL = "৳"


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "500"
    - "1,250.50"
    - "৳500"
    - "Tk 500" / "500 BDT"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"(?i)(৳|tk\.?|bdt)", "", amount_str)
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_positive_amount(amount_str: str) -> Decimal:
    """Parse an amount that must be greater than zero.

    Raises:
        ValueError: If the string cannot be parsed or the amount is not positive
    """
    amount = parse_amount(amount_str)
    if amount <= 0:
        raise ValueError(f"Amount must be greater than zero, got {amount}")
    return amount


def format_amount(amount: Decimal) -> str:
    """Format an amount in Taka, e.g. "৳1,250.00"."""
    if amount < 0:
        return f"-{CURRENCY_SYMBOL}{-amount:,.2f}"
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"
