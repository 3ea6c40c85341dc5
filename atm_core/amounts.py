"""
Amount Handling Module

Converts user-supplied quantities into Decimal and formats them for display.
Balances are plain signed Decimals: no currency precision or rounding is
applied, and no sign validation happens here.
"""

from decimal import Decimal, InvalidOperation, getcontext
from typing import Union
import re

# Set global decimal context for balance arithmetic
getcontext().prec = 28

AmountLike = Union[Decimal, int, float, str]

ZERO = Decimal('0')


def as_amount(value: AmountLike) -> Decimal:
    """
    Convert a number to Decimal without rounding.

    Floats go through str() so that 1000.01 stays 1000.01 instead of its
    binary expansion. NaN and infinities raise ValueError.
    """
    if isinstance(value, bool):
        raise TypeError("Amount cannot be a boolean")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = decimal_from_string(value)
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    # NaN cannot be ordered against a balance
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return amount


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number, e.g. "1 000,50 zł"

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Strip currency symbols and whitespace (including thousands spaces)
    clean_value = re.sub(r'[^\d.,\-+]', '', value.strip())

    if ',' in clean_value and '.' in clean_value:
        # Both present - comma is a thousands separator
        clean_value = clean_value.replace(',', '')
    elif clean_value.count(',') == 1:
        whole, fraction = clean_value.split(',')
        if len(fraction) <= 2:
            clean_value = f"{whole}.{fraction}"
        else:
            clean_value = whole + fraction

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")


def format_amount(amount: Decimal, symbol: str = "zł") -> str:
    """Format for receipts, e.g. ``1000.00 zł``"""
    return f"{amount:.2f} {symbol}"
