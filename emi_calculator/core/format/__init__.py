# emi_calculator/core/format/__init__.py
from .currency import RUPEE, format_currency, format_rate, format_tenure, group_digits, round_half_up

__all__ = [
    "RUPEE",
    "format_currency",
    "format_rate",
    "format_tenure",
    "group_digits",
    "round_half_up",
]
