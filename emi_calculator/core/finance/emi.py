# emi_calculator/core/finance/emi.py
from __future__ import annotations

import logging
import math

from emi_calculator.schemas.models import LoanInput

from .errors import loan_error_guard

logger = logging.getLogger(__name__)


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate (7.5 = 7.5% p.a.) to a monthly decimal rate."""
    return annual_rate_percent / 12 / 100


def total_months(term_years: int) -> int:
    return term_years * 12


def validate_loan(principal: float, annual_rate_percent: float, term_years: int) -> LoanInput:
    """
    Build a LoanInput, raising InvalidLoanParametersError on anything outside the domain
    (non-positive principal, rate outside [0, 100], tenure < 1 year, NaN/inf).
    """
    with loan_error_guard():
        return LoanInput(principal=principal, annual_rate_percent=annual_rate_percent, term_years=term_years)


def payment_for(loan: LoanInput) -> float:
    """Fixed monthly installment for an already validated LoanInput."""
    r = monthly_rate(loan.annual_rate_percent)
    n = loan.months

    if r == 0:
        return loan.principal / n

    # r * P / (1 - (1 + r)^-n) == P * r * (1 + r)^n / ((1 + r)^n - 1), without overflowing for large n.
    # expm1/log1p keep the denominator accurate when r is tiny and (1 + r) rounds to 1.0.
    with loan_error_guard():
        denom = -math.expm1(-n * math.log1p(r))
        return r * loan.principal / denom


def compute_monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """
    Compute the constant monthly installment (EMI) for a fully-amortizing fixed-rate loan.

    Formula (standard annuity):
        EMI = [ P * r * (1 + r)^n ] / [ (1 + r)^n - 1 ]

    Where:
        P = principal
        r = monthly rate = annual_rate_percent / 12 / 100
        n = number of monthly installments = term_years * 12

    Args:
        principal: Amount borrowed (> 0).
        annual_rate_percent: Annual rate in percent, 0..100 (e.g., 7.5).
        term_years: Tenure in whole years (>= 1).

    Returns:
        The fixed monthly payment, unrounded.

    Raises:
        InvalidLoanParametersError: if any input is outside the accepted domain.

    Notes:
        - A 0% rate is an interest-free loan: EMI = principal / n.
    """
    loan = validate_loan(principal, annual_rate_percent, term_years)
    emi = payment_for(loan)
    logger.debug(
        "emi principal=%s rate=%s%% years=%s -> %.4f", loan.principal, loan.annual_rate_percent, loan.term_years, emi
    )
    return emi
