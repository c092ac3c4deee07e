# emi_calculator/core/finance/amortization.py
from __future__ import annotations

import logging
from datetime import date

from dateutil.relativedelta import relativedelta

from emi_calculator.schemas.models import (
    AmortizationEntry,
    AmortizationSchedule,
    LoanInput,
    LoanSummary,
    YearTotals,
)

from .emi import monthly_rate, payment_for, validate_loan
from .errors import ScheduleOverflowError

logger = logging.getLogger(__name__)


def _anchor(start: date | None) -> date:
    """First day of the start month; "today" when no start is given."""
    return (start or date.today()).replace(day=1)


def schedule_for(loan: LoanInput, start: date | None = None) -> AmortizationSchedule:
    """Year-bucketed monthly schedule for an already validated LoanInput."""
    r = monthly_rate(loan.annual_rate_percent)
    pmt = payment_for(loan)
    first = _anchor(start)
    try:
        first + relativedelta(months=loan.months - 1)
    except (ValueError, OverflowError) as e:
        raise ScheduleOverflowError(
            f"schedule of {loan.months} months from {first:%Y-%m} runs past the last supported calendar year: {e}"
        ) from e

    by_year: dict[int, list[AmortizationEntry]] = {}
    bal = loan.principal

    for i in range(loan.months):
        interest = bal * r
        principal_paid = pmt - interest
        bal -= principal_paid
        when = first + relativedelta(months=i)
        by_year.setdefault(when.year, []).append(
            AmortizationEntry(
                period=i + 1,
                year=when.year,
                month_label=when.strftime("%b"),
                principal_paid=principal_paid,
                interest_paid=interest,
                payment_amount=pmt,
                remaining_balance=bal,
            )
        )

    logger.debug(
        "schedule start=%s months=%d years=%d final_balance=%.6f",
        first.isoformat(),
        loan.months,
        len(by_year),
        bal,
    )
    return AmortizationSchedule(by_year={y: tuple(rows) for y, rows in by_year.items()})


def generate_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    start: date | None = None,
) -> AmortizationSchedule:
    """
    Replay a fixed-rate, fixed-payment loan month by month, bucketed by calendar year.

    Model:
        - The EMI is computed once and held constant.
        - Each month: interest = balance * r, principal = EMI - interest, balance -= principal.
        - Month i (0-based) is labelled with the calendar month of `start + i months`.

    Args:
        principal: Amount borrowed (> 0).
        annual_rate_percent: Annual rate in percent, 0..100.
        term_years: Tenure in whole years (>= 1).
        start: Month the first installment falls in. Defaults to the current month at call time;
            only year and month are used.

    Returns:
        AmortizationSchedule with exactly term_years * 12 entries spread over at most
        term_years + 1 calendar years.

    Notes:
        - No final-month reconciliation: the last balance is ~0 up to floating-point drift.
    """
    loan = validate_loan(principal, annual_rate_percent, term_years)
    return schedule_for(loan, start)


def summary_for(loan: LoanInput) -> LoanSummary:
    pmt = payment_for(loan)
    total = pmt * loan.months
    return LoanSummary(
        principal=loan.principal,
        monthly_payment=pmt,
        months=loan.months,
        total_payment=total,
        total_interest=total - loan.principal,
    )


def summarize_loan(principal: float, annual_rate_percent: float, term_years: int) -> LoanSummary:
    """Monthly EMI plus total amount payable and total interest over the tenure."""
    return summary_for(validate_loan(principal, annual_rate_percent, term_years))


def year_totals(schedule: AmortizationSchedule) -> list[YearTotals]:
    """
    Aggregate the schedule per calendar year (ascending).

    Definitions:
        - payment_total = sum of monthly installments in the year.
        - interest_paid / principal_paid = sums of the monthly components.
        - ending_balance = balance after the year's last installment.
    """
    out: list[YearTotals] = []
    for year, rows in schedule.iter_years():
        if not rows:
            continue
        out.append(
            YearTotals(
                year=year,
                months=len(rows),
                principal_paid=sum(e.principal_paid for e in rows),
                interest_paid=sum(e.interest_paid for e in rows),
                payment_total=sum(e.payment_amount for e in rows),
                ending_balance=rows[-1].remaining_balance,
            )
        )
    return out
