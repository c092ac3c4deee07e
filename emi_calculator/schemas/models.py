# emi_calculator/schemas/models.py

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =========================
# Core inputs
# =========================


class LoanInput(BaseModel):
    """
    Loan parameters for a fixed-rate, fully amortizing loan. All money amounts use one currency (INR).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    principal: float = Field(..., gt=0, allow_inf_nan=False, description="Amount borrowed (currency units).")
    annual_rate_percent: float = Field(
        ...,
        ge=0,
        le=100,
        allow_inf_nan=False,
        description="Annual interest rate in percent (e.g., 7.5 = 7.5% p.a.). 0 means an interest-free loan.",
    )
    term_years: int = Field(..., ge=1, description="Tenure in whole years.")

    @property
    def months(self) -> int:
        return self.term_years * 12


# -------------------------
# Form ranges (shell-side)
# -------------------------


class SliderRange(BaseModel):
    """Bounds and step of one form slider."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    min: float = Field(..., description="Lowest accepted value.")
    max: float = Field(..., description="Highest accepted value.")
    step: float = Field(1.0, gt=0, description="Slider increment.")

    @model_validator(mode="after")
    def _ordered(self) -> SliderRange:
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must be <= max ({self.max})")
        return self

    def clamp(self, value: float) -> float:
        return min(max(value, self.min), self.max)


class InputRanges(BaseModel):
    """
    Accepted ranges for the three form inputs. The calculator core does not clamp;
    callers apply these before computing.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    principal: SliderRange = Field(
        default_factory=lambda: SliderRange(min=100_000, max=5_000_000, step=50_000),
        description="Loan amount range (INR).",
    )
    rate: SliderRange = Field(
        default_factory=lambda: SliderRange(min=1, max=20, step=0.1),
        description="Rate of interest range (percent p.a.).",
    )
    tenure: SliderRange = Field(
        default_factory=lambda: SliderRange(min=1, max=30, step=1),
        description="Loan tenure range (years).",
    )

    def clamp_values(self, principal: float, annual_rate_percent: float, term_years: float) -> tuple[float, float, int]:
        """Clamp raw (unvalidated) form values into their ranges."""
        return (
            self.principal.clamp(principal),
            self.rate.clamp(annual_rate_percent),
            int(self.tenure.clamp(term_years)),
        )

    def clamp(self, loan: LoanInput) -> LoanInput:
        """Return a copy of `loan` with each field pulled into its range."""
        p, r, t = self.clamp_values(loan.principal, loan.annual_rate_percent, loan.term_years)
        return LoanInput(principal=p, annual_rate_percent=r, term_years=t)


# =========================
# Computed outputs
# =========================


class AmortizationEntry(BaseModel):
    """One month of the amortization ledger."""

    model_config = ConfigDict(frozen=True)

    period: int = Field(..., ge=1, description="1-based month number since the schedule start.")
    year: int = Field(..., description="Calendar year the installment falls in.")
    month_label: str = Field(..., description="Short month name, e.g. 'Oct'.")
    principal_paid: float = Field(..., description="Principal component of this month's payment.")
    interest_paid: float = Field(..., description="Interest charged on the opening balance this month.")
    payment_amount: float = Field(..., description="Total installment (EMI) paid this month.")
    remaining_balance: float = Field(..., description="Outstanding principal after this month's payment.")


class AmortizationSchedule(BaseModel):
    """
    Calendar year -> chronologically ordered entries for that year.

    Years are inserted in increasing order; `years` always returns them sorted so
    callers never rely on mapping order.
    """

    model_config = ConfigDict(frozen=True)

    by_year: dict[int, tuple[AmortizationEntry, ...]] = Field(default_factory=dict)

    @property
    def years(self) -> list[int]:
        return sorted(self.by_year)

    @property
    def total_entries(self) -> int:
        return sum(len(rows) for rows in self.by_year.values())

    @property
    def final_balance(self) -> float:
        entries = self.entries()
        return entries[-1].remaining_balance if entries else 0.0

    def entries(self) -> list[AmortizationEntry]:
        """All entries across years, in chronological order."""
        return [e for y in self.years for e in self.by_year[y]]

    def for_year(self, year: int) -> list[AmortizationEntry]:
        return list(self.by_year.get(year, []))

    def __getitem__(self, year: int) -> tuple[AmortizationEntry, ...]:
        return self.by_year[year]

    def __contains__(self, year: object) -> bool:
        return year in self.by_year

    def __len__(self) -> int:
        return len(self.by_year)

    def iter_years(self) -> Iterator[tuple[int, tuple[AmortizationEntry, ...]]]:
        for y in self.years:
            yield y, self.by_year[y]


class YearTotals(BaseModel):
    """Per-calendar-year aggregate of the schedule."""

    model_config = ConfigDict(frozen=True)

    year: int
    months: int = Field(..., description="Number of installments falling in this year.")
    principal_paid: float
    interest_paid: float
    payment_total: float
    ending_balance: float = Field(..., description="Balance after the last installment of the year.")


class LoanSummary(BaseModel):
    """Headline numbers shown on the summary card."""

    model_config = ConfigDict(frozen=True)

    principal: float
    monthly_payment: float
    months: int
    total_payment: float = Field(..., description="monthly_payment * months.")
    total_interest: float = Field(..., description="total_payment - principal.")
