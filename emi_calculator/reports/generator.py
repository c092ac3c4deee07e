# emi_calculator/reports/generator.py
from __future__ import annotations

from collections.abc import Sequence

from emi_calculator.core.finance.amortization import year_totals
from emi_calculator.core.format.currency import Grouping, format_currency, format_rate, format_tenure
from emi_calculator.core.view.state import AmortizationViewState
from emi_calculator.schemas.models import (
    AmortizationEntry,
    AmortizationSchedule,
    LoanInput,
    LoanSummary,
    YearTotals,
)


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


# -----------------------
# Header & summary card
# -----------------------


def _render_header(loan: LoanInput, grouping: Grouping) -> str:
    """Inputs block: the three form values as the form echoes them."""
    lines = [
        "# Loan EMI Calculator",
        "",
        f"- **Loan amount:** {format_currency(loan.principal, grouping=grouping)}",
        f"- **Rate of interest (p.a):** {format_rate(loan.annual_rate_percent)}",
        f"- **Loan tenure:** {format_tenure(loan.term_years)}",
    ]
    return "\n".join(lines) + "\n"


def render_summary_card(summary: LoanSummary, *, grouping: Grouping = "indian") -> str:
    """Plain-text summary card with aligned labels (also used for console output)."""
    rows = [
        ("Your Monthly EMI Payment", summary.monthly_payment),
        ("Principal Amount", summary.principal),
        ("Total Interest", summary.total_interest),
        ("Total Amount", summary.total_payment),
    ]
    width = max(len(label) for label, _ in rows) + 1
    return "\n".join(f"{label + ':':<{width}} {format_currency(val, grouping=grouping)}" for label, val in rows)


def _render_summary(summary: LoanSummary, grouping: Grouping) -> str:
    lines = [
        _section("Your Monthly EMI Payment"),
        f"**{format_currency(summary.monthly_payment, grouping=grouping)}**",
        "",
        "| | |",
        "| :--- | ---: |",
        f"| Principal Amount | {format_currency(summary.principal, grouping=grouping)} |",
        f"| Total Interest | {format_currency(summary.total_interest, grouping=grouping)} |",
        f"| **Total Amount** | **{format_currency(summary.total_payment, grouping=grouping)}** |",
    ]
    return "\n".join(lines) + "\n"


# -----------------------
# Amortization details
# -----------------------


def _render_month_table(entries: Sequence[AmortizationEntry], grouping: Grouping) -> str:
    """
    Columns:
      Month | Principal Paid | Interest Charged | Total Payment | Balance
    """
    header = [
        "| Month | Principal Paid | Interest Charged | Total Payment | Balance |",
        "| :--- | ---: | ---: | ---: | ---: |",
    ]
    rows = [
        f"| {e.month_label} "
        f"| {format_currency(e.principal_paid, grouping=grouping)} "
        f"| {format_currency(e.interest_paid, grouping=grouping)} "
        f"| {format_currency(e.payment_amount, grouping=grouping)} "
        f"| {format_currency(e.remaining_balance, grouping=grouping)} |"
        for e in entries
    ]
    return "\n".join(header + rows) + "\n"


def _render_year_line(t: YearTotals, grouping: Grouping) -> str:
    return (
        f"{t.months} payments · principal {format_currency(t.principal_paid, grouping=grouping)}"
        f" · interest {format_currency(t.interest_paid, grouping=grouping)}"
        f" · balance {format_currency(t.ending_balance, grouping=grouping)}"
    )


def _render_amortization(schedule: AmortizationSchedule, view: AmortizationViewState, grouping: Grouping) -> str:
    if not view.show_details:
        return ""

    totals = {t.year: t for t in year_totals(schedule)}
    body = [_section("Amortization Details")]
    for year in view.visible_years(schedule):
        marker = "▾" if view.is_open(year) else "▸"
        body.append(f"### {marker} {year}")
        body.append("")
        body.append(_render_year_line(totals[year], grouping))
        if view.is_open(year):
            body.append("")
            body.append(_render_month_table(schedule[year], grouping).rstrip("\n"))
        body.append("")

    if view.has_more_control(schedule):
        shown = len(view.visible_years(schedule))
        body.append(f"_{shown} of {len(schedule.years)} years shown · [{view.more_label(schedule)}]_")
    return "\n".join(body).rstrip("\n") + "\n"


# -----------------------
# Orchestration
# -----------------------


def generate_report(
    loan: LoanInput,
    summary: LoanSummary,
    schedule: AmortizationSchedule,
    view: AmortizationViewState | None = None,
    *,
    grouping: Grouping = "indian",
    title_override: str | None = None,
) -> str:
    """
    Generate the calculator output as Markdown.

    Sections:
      - Header: loan amount, rate, tenure
      - Summary card: monthly EMI, principal, total interest, total amount
      - Amortization Details (when view.show_details): one block per visible year,
        with a month table for each expanded year
    """
    view = view or AmortizationViewState(show_details=True)
    header = _render_header(loan, grouping)
    if title_override:
        header_lines = header.splitlines()
        header_lines[0] = f"# {title_override}"
        header = "\n".join(header_lines) + "\n"

    parts = [
        header,
        _render_summary(summary, grouping),
        _render_amortization(schedule, view, grouping),
    ]
    return "\n".join(part for part in parts if part).strip() + "\n"


def write_report(
    path: str,
    loan: LoanInput,
    summary: LoanSummary,
    schedule: AmortizationSchedule,
    view: AmortizationViewState | None = None,
    *,
    grouping: Grouping = "indian",
) -> None:
    """
    Convenience helper to write the generated report to disk.
    """
    md = generate_report(loan, summary, schedule, view, grouping=grouping)
    with open(path, "w", encoding="utf-8") as f:
        f.write(md)
