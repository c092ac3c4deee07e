# emi_calculator/core/finance/errors.py
"""
Typed errors + utilities for the loan calculator.

Exports
-------
- LoanCalculatorError, InvalidLoanParametersError, ScheduleOverflowError
- LOAN_ERRORS
- classify_loan_error(exc)
- loan_error_guard()
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError

# =========================
# Exception types
# =========================


class LoanCalculatorError(ValueError):
    """Base class for loan calculation failures."""


class InvalidLoanParametersError(LoanCalculatorError):
    """Principal, rate or tenure is outside the accepted domain."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class ScheduleOverflowError(LoanCalculatorError):
    """Arithmetic overflowed while computing the payment or schedule."""


# Selector tuple for grouped exception handling
LOAN_ERRORS = (
    InvalidLoanParametersError,
    ScheduleOverflowError,
)

# =========================
# Classification helpers
# =========================


def _describe_validation_error(exc: ValidationError) -> tuple[str, tuple[str, ...]]:
    fields: list[str] = []
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "loan"
        if loc not in fields:
            fields.append(loc)
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "invalid loan parameters: " + "; ".join(parts), tuple(fields)


def classify_loan_error(exc: Exception) -> LoanCalculatorError:
    """
    Map exceptions raised while validating/computing to a typed LoanCalculatorError.

      - LoanCalculatorError subclasses → passed through
      - pydantic ValidationError       → InvalidLoanParametersError (with field names)
      - ZeroDivisionError              → InvalidLoanParametersError
      - OverflowError                  → ScheduleOverflowError
      - Fallback                       → LoanCalculatorError
    """
    if isinstance(exc, LoanCalculatorError):
        return exc

    if isinstance(exc, ValidationError):
        msg, fields = _describe_validation_error(exc)
        return InvalidLoanParametersError(msg, fields)

    if isinstance(exc, ZeroDivisionError):
        return InvalidLoanParametersError(f"invalid loan parameters: {exc}")

    if isinstance(exc, OverflowError):
        return ScheduleOverflowError(f"numeric overflow: {exc}")

    return LoanCalculatorError(f"{type(exc).__name__}: {exc}")


@contextmanager
def loan_error_guard() -> Iterator[None]:
    """Context manager to normalize validation/arithmetic failures into typed errors."""
    try:
        yield
    except LOAN_ERRORS:
        raise
    except (ValidationError, ArithmeticError) as exc:
        raise classify_loan_error(exc) from exc


__all__ = [
    "LoanCalculatorError",
    "InvalidLoanParametersError",
    "ScheduleOverflowError",
    "LOAN_ERRORS",
    "classify_loan_error",
    "loan_error_guard",
]
