# main.py
"""
Entry Point: Loan EMI Calculator

Purpose
-------
Compute the monthly EMI for a fixed-rate loan, the totals payable, and the
month-by-month amortization schedule grouped by calendar year:
  1) Load inputs (built-in defaults, --config JSON, EMI_* env vars, CLI flags).
  2) Clamp the loan into the form's slider ranges (unless --no-clamp).
  3) Compute EMI, totals and schedule (recomputed from scratch every run).
  4) Print the summary card and the Markdown report (or write it to --out).

Usage
-----
    python main.py
    python main.py --principal 500000 --rate 10 --tenure 1 --start 2026-10
    python main.py --config emi.json --out emi_report.md --years 8 --expand all
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from typing import Literal

from emi_calculator.core.diagnostics import configure_logging, print_error
from emi_calculator.core.finance import LOAN_ERRORS, schedule_for, summary_for
from emi_calculator.core.view import AmortizationViewState
from emi_calculator.inputs.inputs import InputsLoader, parse_numeric_input
from emi_calculator.reports.generator import generate_report, render_summary_card, write_report

logger = logging.getLogger("emi_calculator.cli")


def _parse_expand(val: str | None) -> list[int] | Literal["all"] | None:
    if not val:
        return None
    if val.strip().lower() == "all":
        return "all"
    years: list[int] = []
    for it in (v.strip() for v in val.split(",")):
        if not it:
            continue
        try:
            years.append(int(it))
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid year: {it!r}") from None
    return years


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Loan EMI Calculator")
    p.add_argument("--config", type=str, default=None, help="Path to JSON config (flat loan fields or structured).")
    p.add_argument("--principal", type=parse_numeric_input, default=None, help="Loan amount (INR).")
    p.add_argument("--rate", type=parse_numeric_input, default=None, help="Rate of interest, percent p.a. (e.g. 7.5).")
    p.add_argument("--tenure", type=int, default=None, help="Loan tenure in years.")
    p.add_argument("--start", type=str, default=None, help="First installment month, YYYY-MM (default: this month).")
    p.add_argument("--out", type=str, default=None, help="Write the Markdown report here instead of printing it.")
    p.add_argument("--years", type=int, default=None, help="Number of years listed in the amortization details.")
    p.add_argument("--expand", type=_parse_expand, default=None, help='Comma-separated years to expand, or "all".')
    p.add_argument("--grouping", type=str, default=None, choices=["indian", "western"], help="Digit grouping for amounts.")
    p.add_argument("--no-clamp", action="store_true", help="Do not pull inputs into the slider ranges.")
    p.add_argument("--debug", action="store_true", help="Write a DEBUG log to logs/emi_calculator.log.")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run one calculation and print/write the result. Returns a process exit code."""
    args = parse_args(argv)
    configure_logging(debug=True if args.debug else None)

    loader = InputsLoader()
    try:
        cfg = loader.load(args.config)
        cfg = loader.with_overrides(
            cfg,
            principal=args.principal,
            rate=args.rate,
            tenure=args.tenure,
            out=args.out,
            start=args.start,
            visible_years=args.years,
            expand=args.expand,
            grouping=args.grouping,
            clamp=False if args.no_clamp else None,
        )
        cfg, adjusted = loader.apply_ranges(cfg)
        if adjusted:
            logger.info("clamped to slider ranges: %s", ", ".join(adjusted))

        loan = cfg.loan
        summary = summary_for(loan)
        schedule = schedule_for(loan, cfg.run.start)
    except LOAN_ERRORS as e:
        print_error("Invalid loan parameters", e)
        return 2
    except (ValueError, FileNotFoundError) as e:
        print_error("Invalid inputs", e)
        return 2

    view = AmortizationViewState(show_details=cfg.run.show_details, visible_count=cfg.run.visible_years)
    expand = schedule.years if cfg.run.expand == "all" else cfg.run.expand
    view = view.expand(list(expand))

    grouping = cfg.run.grouping
    print(render_summary_card(summary, grouping=grouping))

    if cfg.run.out:
        write_report(cfg.run.out, loan, summary, schedule, view, grouping=grouping)
        print(f"Report written to {cfg.run.out}")
    else:
        print()
        print(generate_report(loan, summary, schedule, view, grouping=grouping), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
