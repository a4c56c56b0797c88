"""Rupee amount formatting."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric value to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def group_indian(digits: str) -> str:
    """Group a digit string the Indian way: last three, then pairs.

    Examples:
        "1234567" -> "12,34,567"
        "999" -> "999"
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def to_money(value: Number) -> Decimal:
    """Round to whole paise, the precision amounts are stored at."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Number, paise: bool = False) -> str:
    """Format an amount as rupees, e.g. ``₹1,23,456`` or ``-₹500``.

    Whole rupees by default; with ``paise`` the amount keeps two decimals
    (``₹199.60``).
    """
    if paise:
        value = to_money(amount)
    else:
        value = to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    rupees, _, fraction = str(abs(value)).partition(".")
    text = group_indian(rupees)
    if fraction:
        text = f"{text}.{fraction}"
    return f"{sign}₹{text}"
