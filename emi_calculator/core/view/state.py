# emi_calculator/core/view/state.py
"""
UI state for the amortization panel, kept apart from the computed schedule.

The schedule is derived data, recomputed from the current inputs every time.
This state only changes through explicit user actions (details toggle,
expand/collapse a year, show more/less) and every action returns a new
instance.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from emi_calculator.schemas.models import AmortizationSchedule

DEFAULT_PAGE_SIZE = 4


class AmortizationViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    show_details: bool = Field(False, description="Whether the 'Amortization Details' panel is open.")
    open_years: frozenset[int] = Field(default_factory=frozenset, description="Calendar years whose tables are expanded.")
    visible_count: int = Field(DEFAULT_PAGE_SIZE, ge=1, description="How many years are currently listed.")
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, description="Years added per 'Show More' and the reset size.")

    # ---------- Queries ----------

    def is_open(self, year: int) -> bool:
        return year in self.open_years

    def visible_years(self, schedule: AmortizationSchedule) -> list[int]:
        return schedule.years[: self.visible_count]

    def has_more_control(self, schedule: AmortizationSchedule) -> bool:
        """The show more/less button only exists when the loan spans more than one page of years."""
        return len(schedule.years) > self.page_size

    def more_label(self, schedule: AmortizationSchedule) -> str:
        return "Show More" if self.visible_count < len(schedule.years) else "Show Less"

    # ---------- Actions ----------

    def toggle_details(self) -> AmortizationViewState:
        return self.model_copy(update={"show_details": not self.show_details})

    def toggle_year(self, year: int) -> AmortizationViewState:
        opened = self.open_years ^ {year}
        return self.model_copy(update={"open_years": frozenset(opened)})

    def expand(self, years: list[int]) -> AmortizationViewState:
        return self.model_copy(update={"open_years": self.open_years | frozenset(years)})

    def toggle_more(self, schedule: AmortizationSchedule) -> AmortizationViewState:
        """
        'Show More' reveals up to `page_size` further years; once everything is
        listed, 'Show Less' goes back to the first page and collapses all years.
        """
        n_years = len(schedule.years)
        if self.visible_count < n_years:
            return self.model_copy(update={"visible_count": min(self.visible_count + self.page_size, n_years)})
        return self.model_copy(update={"visible_count": self.page_size, "open_years": frozenset()})
