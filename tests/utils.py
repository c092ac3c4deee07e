# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from emi_calculator.core.finance import schedule_for, summary_for
from emi_calculator.schemas.models import AmortizationSchedule, LoanInput, LoanSummary

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_PRINCIPAL = 1_000_000.0
DEFAULT_RATE_PCT = 7.5
DEFAULT_TERM_YEARS = 5

# Mid-year start so schedules straddle calendar years
OCT_START = date(2026, 10, 1)
JAN_START = date(2026, 1, 1)

EPS_BALANCE = 1e-2


# -----------------------------
# Factories
# -----------------------------


def make_loan(**overrides: Any) -> LoanInput:
    data: dict[str, Any] = {
        "principal": DEFAULT_PRINCIPAL,
        "annual_rate_percent": DEFAULT_RATE_PCT,
        "term_years": DEFAULT_TERM_YEARS,
    }
    data.update(overrides)
    return LoanInput(**data)


def make_schedule(loan: LoanInput | None = None, *, start: date = OCT_START, **overrides: Any) -> AmortizationSchedule:
    return schedule_for(loan or make_loan(**overrides), start)


def make_summary(loan: LoanInput | None = None, **overrides: Any) -> LoanSummary:
    return summary_for(loan or make_loan(**overrides))


def write_json(path, payload: str) -> str:
    path.write_text(payload, encoding="utf-8")
    return str(path)
