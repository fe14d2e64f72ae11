"""Currency parsing and formatting helpers"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Union

Number = Union[int, float, Decimal]

_CENT = Decimal("0.01")

# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")

# Longest numeric prefix, e.g. "12.5abc" -> "12.5", "  3e2" -> "3e2"
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Parse a user-entered amount.

    Accepts numbers and numeric strings (only the leading numeric part of a
    string is read). Returns None when nothing numeric can be read or the
    value is not finite or its magnitude exceeds MAX_AMOUNT. The result is
    rounded to whole cents.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)):
        raw = str(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            return None
        raw = match.group(1)
    else:
        return None

    try:
        parsed = Decimal(raw)
    except InvalidOperation:
        return None
    if not parsed.is_finite() or abs(parsed) > MAX_AMOUNT:
        return None
    try:
        amount = parsed.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    if abs(amount) > MAX_AMOUNT:
        return None
    return amount


def coerce_amount(value: Any) -> Decimal:
    """parse_amount, falling back to zero for unreadable or negative input"""
    parsed = parse_amount(value)
    if parsed is None or parsed < 0:
        return Decimal("0.00")
    return parsed


def _group_indian(digits: str) -> str:
    """1234567 -> 12,34,567"""
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


def format_amount(value: Number) -> str:
    """
    Format an amount with Indian digit grouping.

    Whole amounts print without decimals (5000 -> "5,000"), fractional
    amounts keep two places (1234.5 -> "1,234.50").
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite amount: {value}")
    amount = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    grouped = _group_indian(whole)
    if fraction == "00":
        return f"{sign}{grouped}"
    return f"{sign}{grouped}.{fraction}"


def format_currency(value: Number, symbol: str = "Rs.") -> str:
    """format_amount with a currency symbol prefix, e.g. "Rs. 1,00,000" """
    formatted = format_amount(value)
    if formatted.startswith("-"):
        return f"-{symbol} {formatted[1:]}"
    return f"{symbol} {formatted}"
