#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All amounts are handled as integer cents internally to avoid floating-point errors.

Currency Systems:
- Order history extracts use dollar strings: "12.34", "$1,234.56"
- The ledger API uses JSON numbers in dollars: -12.34
- Internal calculations use cents: 100 cents = $1.00

Key Principles:
- Convert to cents once, at the boundary, using decimal arithmetic
- Never use floating-point arithmetic for currency calculations
- Keep sign: negative amounts are debits (charges), positive are credits (refunds)
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string

    Example:
        cents_to_dollars_str(4599) -> "45.99"
        cents_to_dollars_str(-4599) -> "-45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def parse_dollars_to_cents(dollars_str: str) -> int:
    """
    Parse dollar string to cents using integer arithmetic only.

    Args:
        dollars_str: String representation of dollar amount

    Returns:
        Amount in cents

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$12.34") -> 1234
        parse_dollars_to_cents("1,234.56") -> 123456
        parse_dollars_to_cents("-12.5") -> -1250
    """
    clean = dollars_str.replace("$", "").replace(",", "").strip()

    if not clean:
        return 0

    is_negative = clean.startswith("-")
    if is_negative:
        clean = clean[1:]

    if "." in clean:
        parts = clean.split(".")
        dollars = int(parts[0]) if parts[0] else 0
        # Pad to 2 digits, truncate beyond 2
        cents_str = parts[1].ljust(2, "0")[:2]
        total = dollars * 100 + int(cents_str)
    else:
        total = int(clean) * 100

    return -total if is_negative else total


def decimal_to_cents(value: Union[Decimal, float, int, str]) -> int:
    """
    Convert a dollar amount to cents, rounding half away from zero.

    Floats are converted through their shortest string representation so that
    values such as 0.29 become 29 cents rather than 28.

    Args:
        value: Dollar amount (Decimal, float, int or numeric string)

    Returns:
        Amount in cents

    Raises:
        InvalidOperation: If a string value is not numeric
    """
    if isinstance(value, float):
        value = repr(value)
    amount = Decimal(value) * 100
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def safe_currency_to_cents(currency_str: Union[str, int, float, None]) -> int:
    """
    Safely convert a currency value from a tabular extract to integer cents.

    Args:
        currency_str: Currency string like '$12.34', '12.34', or '12,345.67'

    Returns:
        Integer cents (1234 for $12.34), 0 for empty or non-numeric input

    Examples:
        safe_currency_to_cents('$45.99') -> 4599
        safe_currency_to_cents('Not Available') -> 0
        safe_currency_to_cents('') -> 0
    """
    if currency_str is None:
        return 0
    try:
        if isinstance(currency_str, (int, float)):
            return decimal_to_cents(currency_str)

        clean_str = str(currency_str).replace("$", "").replace(",", "").strip()
        if not clean_str or clean_str.lower() in ["nan", "none", "free"]:
            return 0

        return decimal_to_cents(clean_str)
    except (ValueError, TypeError, OverflowError, InvalidOperation):
        return 0
