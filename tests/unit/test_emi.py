# tests/unit/test_emi.py
import math

import pytest

from emi_calculator.core.finance import (
    InvalidLoanParametersError,
    compute_monthly_payment,
    monthly_rate,
    total_months,
)


def test_monthly_rate_and_months_conversion():
    assert monthly_rate(12.0) == pytest.approx(0.01)
    assert monthly_rate(7.5) == pytest.approx(0.00625)
    assert total_months(5) == 60


def test_payment_ten_lakh_at_7_5_for_5_years():
    pmt = compute_monthly_payment(1_000_000, 7.5, 5)
    assert 20_037 < pmt < 20_039  # ≈ 20,038


def test_payment_five_lakh_at_10_for_1_year():
    pmt = compute_monthly_payment(500_000, 10, 1)
    assert 43_957 < pmt < 43_959  # ≈ 43,958


def test_payment_matches_closed_form():
    p, rate, years = 2_500_000, 8.4, 20
    r = rate / 12 / 100
    n = years * 12
    expected = p * r * (1 + r) ** n / ((1 + r) ** n - 1)
    assert compute_monthly_payment(p, rate, years) == pytest.approx(expected, rel=1e-12)


@pytest.mark.parametrize(
    "principal,rate,years",
    [
        (100_000, 1, 1),
        (1_000_000, 7.5, 5),
        (5_000_000, 20, 30),
        (250_000, 0.1, 3),
        (750_000, 100, 2),
    ],
)
def test_payment_positive_and_total_exceeds_principal(principal, rate, years):
    pmt = compute_monthly_payment(principal, rate, years)
    assert math.isfinite(pmt) and pmt > 0
    assert pmt * years * 12 > principal


def test_zero_rate_is_even_split():
    # 1 year interest-free → principal / 12
    assert compute_monthly_payment(120_000, 0, 1) == 10_000.0
    assert compute_monthly_payment(300_000, 0.0, 5) == pytest.approx(5_000.0)


def test_very_long_term_does_not_overflow():
    pmt = compute_monthly_payment(1_000_000, 12, 10_000)
    # Perpetuity limit: interest-only on the principal
    assert pmt == pytest.approx(1_000_000 * 0.01)


@pytest.mark.parametrize("rate", [1e-15, 1e-12, 1e-9])
def test_tiny_positive_rate_is_near_even_split(rate):
    # (1 + r) rounds to 1.0 for these rates; the payment must still approach P / n
    assert compute_monthly_payment(1_200_000, rate, 1) == pytest.approx(100_000)


@pytest.mark.parametrize(
    "principal,rate,years,field",
    [
        (0, 7.5, 5, "principal"),
        (-100_000, 7.5, 5, "principal"),
        (float("nan"), 7.5, 5, "principal"),
        (1_000_000, -1, 5, "annual_rate_percent"),
        (1_000_000, 100.5, 5, "annual_rate_percent"),
        (1_000_000, float("inf"), 5, "annual_rate_percent"),
        (1_000_000, 7.5, 0, "term_years"),
        (1_000_000, 7.5, 2.5, "term_years"),
    ],
)
def test_invalid_inputs_raise_typed_error(principal, rate, years, field):
    with pytest.raises(InvalidLoanParametersError) as ei:
        compute_monthly_payment(principal, rate, years)
    assert field in ei.value.fields
    assert "invalid loan parameters" in str(ei.value)


def test_invalid_parameters_error_is_value_error():
    with pytest.raises(ValueError):
        compute_monthly_payment(1_000_000, 7.5, -3)
