# tests/conftest.py
from __future__ import annotations

import os

import pytest

from tests.utils import JAN_START, OCT_START, make_loan, make_schedule, make_summary

_ENV_KEYS = (
    "EMI_PRINCIPAL",
    "EMI_RATE",
    "EMI_TENURE",
    "EMI_OUT",
    "EMI_START",
    "EMI_GROUPING",
    "EMI_DEBUG",
    "EMI_LOG_PATH",
)


# -------- Hermetic environment --------
@pytest.fixture(autouse=True)
def _clean_emi_env(monkeypatch):
    for key in _ENV_KEYS:
        if key in os.environ:
            monkeypatch.delenv(key)
    yield


# -------- Loan fixtures --------
@pytest.fixture
def loan_factory():
    """Factory for LoanInput with baseline 1,000,000 / 7.5% / 5 years (overridable)."""

    def _factory(**overrides):
        return make_loan(**overrides)

    return _factory


@pytest.fixture
def schedule_factory():
    """Factory for deterministic schedules (default start: Oct 2026)."""

    def _factory(*, start=OCT_START, **overrides):
        return make_schedule(start=start, **overrides)

    return _factory


@pytest.fixture
def baseline_summary():
    return make_summary()


@pytest.fixture
def ten_year_schedule():
    """Calendar-aligned 10-year schedule: exactly 10 years, 12 entries each."""
    return make_schedule(start=JAN_START, term_years=10)
