# emi_calculator/core/finance/__init__.py

from .amortization import (
    generate_schedule,
    schedule_for,
    summarize_loan,
    summary_for,
    year_totals,
)
from .emi import compute_monthly_payment, monthly_rate, payment_for, total_months, validate_loan
from .errors import (
    LOAN_ERRORS,
    InvalidLoanParametersError,
    LoanCalculatorError,
    ScheduleOverflowError,
    loan_error_guard,
)

__all__ = [
    "compute_monthly_payment",
    "generate_schedule",
    "summarize_loan",
    "year_totals",
    "schedule_for",
    "summary_for",
    "payment_for",
    "validate_loan",
    "monthly_rate",
    "total_months",
    "LoanCalculatorError",
    "InvalidLoanParametersError",
    "ScheduleOverflowError",
    "LOAN_ERRORS",
    "loan_error_guard",
]
