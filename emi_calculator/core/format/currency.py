# emi_calculator/core/format/currency.py
"""
Display formatting for the calculator (INR, whole rupees).

Rounding rule: nearest whole unit, ties away from zero (ROUND_HALF_UP), applied
before grouping. Grouping follows en-IN by default (lakh/crore):

    format_currency(1234567)                      -> ₹12,34,567
    format_currency(1234567, grouping="western")  -> ₹1,234,567
    format_currency(-2000.4)                      -> -₹2,000
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

Grouping = Literal["indian", "western"]

RUPEE = "₹"

# Insert a comma after every digit that is followed by whole pairs of digits
_LAKH_PAIRS = re.compile(r"(\d)(?=(\d{2})+(?!\d))")


def round_half_up(amount: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(amount).to_integral_value(rounding=ROUND_HALF_UP))


def group_digits(digits: str, grouping: Grouping = "indian") -> str:
    """
    Group a string of digits (no sign) with commas.

    Indian: last three digits, then pairs (12,34,567). Western: triples (1,234,567).
    """
    if grouping == "western":
        return f"{int(digits):,}"
    if grouping != "indian":
        raise ValueError(f"unknown grouping: {grouping!r}")

    head, last_three = digits[:-3], digits[-3:]
    if not head:
        return last_three
    head = _LAKH_PAIRS.sub(r"\1,", head)
    return f"{head},{last_three}"


def format_currency(amount: float, *, symbol: str = RUPEE, grouping: Grouping = "indian") -> str:
    """
    Format an amount as whole currency units with a leading symbol.

    Non-finite values do not raise: NaN -> "₹NaN", ±inf -> "₹∞" / "-₹∞".
    """
    if grouping not in ("indian", "western"):
        raise ValueError(f"unknown grouping: {grouping!r}")
    if math.isnan(amount):
        return f"{symbol}NaN"
    if math.isinf(amount):
        return f"-{symbol}∞" if amount < 0 else f"{symbol}∞"

    n = round_half_up(amount)
    sign = "-" if n < 0 else ""
    return f"{sign}{symbol}{group_digits(str(abs(n)), grouping)}"


def format_rate(annual_rate_percent: float) -> str:
    """7.5 -> '7.5%' (one decimal, as shown under the rate slider).

    Rounds the exact binary value half away from zero, so 12.25 -> '12.3%' but
    1.45 (stored as 1.4499...) -> '1.4%'.
    """
    if not math.isfinite(annual_rate_percent):
        return f"{annual_rate_percent}%"
    tenth = Decimal(annual_rate_percent).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{tenth}%"


def format_tenure(term_years: int) -> str:
    return f"{term_years} Yr"


__all__ = [
    "Grouping",
    "RUPEE",
    "round_half_up",
    "group_digits",
    "format_currency",
    "format_rate",
    "format_tenure",
]
