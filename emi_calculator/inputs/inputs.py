# emi_calculator/inputs/inputs.py
"""
Inputs loader for the EMI calculator.

Goals
-----
- File-first configuration with validation via Pydantic.
- Accepts a flat shape (loan fields at the root, including the calculator
  form's field names) and a structured shape with run options.
- Light environment-variable overrides for CI/CLI convenience.
- Optional clamping of the loan to the form's slider ranges.

Supported JSON shapes
---------------------
1) Flat
   {"principal": 1000000, "annual_rate_percent": 7.5, "term_years": 5}
   {"loanAmount": 1000000, "interestRate": 7.5, "loanTenure": 5}

2) Structured (root = CalculatorConfig)
   {
     "loan":   {"principal": 1000000, "annual_rate_percent": 7.5, "term_years": 5},
     "ranges": {"principal": {"min": 100000, "max": 5000000, "step": 50000}},
     "run":    {"out": "emi_report.md", "start": "2026-10-01", "visible_years": 4,
                "expand": [2026], "grouping": "indian", "clamp": true}
   }

Environment overrides (optional)
--------------------------------
- EMI_PRINCIPAL, EMI_RATE, EMI_TENURE  -> loan fields
- EMI_OUT                              -> run.out
- EMI_START (YYYY-MM or YYYY-MM-DD)    -> run.start
- EMI_GROUPING (indian|western)        -> run.grouping

Public API
----------
- parse_numeric_input(text) -> float
- class InputsLoader:
    - load(path) -> CalculatorConfig
    - load_json(text) -> CalculatorConfig
    - with_overrides(cfg, **kwargs) -> CalculatorConfig (non-destructive copies)
    - apply_ranges(cfg) -> (CalculatorConfig, adjusted field names)
- function load_inputs(path) -> CalculatorConfig (convenience)
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, Field, ValidationError, field_validator

from emi_calculator.core.finance.errors import loan_error_guard
from emi_calculator.core.format.currency import Grouping
from emi_calculator.core.view.state import DEFAULT_PAGE_SIZE
from emi_calculator.schemas.models import InputRanges, LoanInput

logger = logging.getLogger(__name__)

DEFAULT_LOAN = LoanInput(principal=1_000_000, annual_rate_percent=7.5, term_years=5)

# Field names used by the calculator form
_FORM_ALIASES = {
    "loanAmount": "principal",
    "interestRate": "annual_rate_percent",
    "loanTenure": "term_years",
}
_LOAN_FIELDS = ("principal", "annual_rate_percent", "term_years")

_LEADING_ZEROS = re.compile(r"^0+")


def parse_numeric_input(text: str) -> float:
    """
    Parse a typed form value the way the calculator form does: leading zeros are
    dropped ("0050000" -> 50000) and an empty field reads as 0.

    Raises:
        ValueError: if the remaining text is not a number.
    """
    cleaned = _LEADING_ZEROS.sub("", text.strip())
    if not cleaned:
        return 0.0
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"not a number: {text!r}") from None


def parse_start(value: str) -> date:
    """Accept YYYY-MM or YYYY-MM-DD."""
    v = value.strip()
    try:
        if len(v) == 7:
            return date.fromisoformat(f"{v}-01")
        return date.fromisoformat(v)
    except ValueError:
        raise ValueError(f"invalid start month {value!r}; expected YYYY-MM or YYYY-MM-DD") from None


# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Presentation (non-financial) options for one calculator run."""

    out: str | None = Field(None, description="Path to write the Markdown report; None prints it.")
    start: date | None = Field(None, description="Month of the first installment; None means the current month.")
    visible_years: int = Field(DEFAULT_PAGE_SIZE, ge=1, description="Years listed before 'Show More'.")
    expand: list[int] | Literal["all"] = Field(default_factory=list, description='Years whose tables are expanded, or "all".')
    show_details: bool = Field(True, description="Render the amortization details panel.")
    grouping: Grouping = Field("indian", description='Digit grouping for amounts: "indian" (12,34,567) or "western".')
    clamp: bool = Field(True, description="Pull loan inputs into the slider ranges before computing.")

    @field_validator("start", mode="before")
    @classmethod
    def _month_start(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_start(v)
        return v


class CalculatorConfig(BaseModel):
    """
    Full input payload.

    Attributes:
        loan:   The loan to compute (validated LoanInput).
        ranges: Slider ranges used for clamping.
        run:    Presentation options for the current execution.
    """

    loan: LoanInput = DEFAULT_LOAN
    ranges: InputRanges = Field(default_factory=InputRanges)
    run: RunOptions = Field(default_factory=RunOptions)


def _clamped(raw: dict[str, Any], ranges: InputRanges) -> tuple[dict[str, Any], list[str]]:
    p, r, t = ranges.clamp_values(
        float(raw["principal"]), float(raw["annual_rate_percent"]), float(raw["term_years"])
    )
    out = {"principal": p, "annual_rate_percent": r, "term_years": t}
    adjusted = [k for k in _LOAN_FIELDS if out[k] != raw[k]]
    for k in adjusted:
        logger.warning("%s=%r outside the accepted range; using %r", k, raw[k], out[k])
    return out, adjusted


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Default search (when path=None):
        1) ./emi.json
        2) ./config.json
        Falls back to the built-in defaults (1,000,000 at 7.5% for 5 years).
    """

    env_prefix: str = "EMI_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> CalculatorConfig:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.

        Returns:
            CalculatorConfig (validated).
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p) if p is not None else {}
        return self._finish(raw)

    def load_json(self, text: str) -> CalculatorConfig:
        """Load inputs from a JSON string (flat or structured shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Inputs JSON must be an object.")
        return self._finish(raw)

    def with_overrides(
        self,
        cfg: CalculatorConfig,
        *,
        principal: float | None = None,
        rate: float | None = None,
        tenure: float | None = None,
        out: str | None = None,
        start: date | str | None = None,
        visible_years: int | None = None,
        expand: list[int] | Literal["all"] | None = None,
        grouping: Grouping | None = None,
        clamp: bool | None = None,
    ) -> CalculatorConfig:
        """
        Return a *new* CalculatorConfig with provided non-null overrides applied.
        Loan overrides are clamped (when run.clamp) before validation.

        Raises:
            InvalidLoanParametersError: if the resulting loan is invalid.
        """
        run_updates: dict[str, Any] = {}
        if out is not None:
            run_updates["out"] = out
        if start is not None:
            run_updates["start"] = parse_start(start) if isinstance(start, str) else start
        if visible_years is not None:
            if visible_years < 1:
                raise ValueError("visible_years must be >= 1")
            run_updates["visible_years"] = visible_years
        if expand is not None:
            run_updates["expand"] = expand
        if grouping is not None:
            if grouping not in ("indian", "western"):
                raise ValueError(f"unknown grouping: {grouping!r}")
            run_updates["grouping"] = grouping
        if clamp is not None:
            run_updates["clamp"] = clamp

        run_new = cfg.run.model_copy(update=run_updates) if run_updates else cfg.run

        loan_updates: dict[str, Any] = {}
        if principal is not None:
            loan_updates["principal"] = principal
        if rate is not None:
            loan_updates["annual_rate_percent"] = rate
        if tenure is not None:
            loan_updates["term_years"] = tenure

        loan_new = cfg.loan
        if loan_updates:
            raw = {**cfg.loan.model_dump(), **loan_updates}
            if run_new.clamp:
                raw, _ = _clamped(raw, cfg.ranges)
            with loan_error_guard():
                loan_new = LoanInput.model_validate(raw)

        if run_new is cfg.run and loan_new is cfg.loan:
            return cfg
        return cfg.model_copy(update={"run": run_new, "loan": loan_new})

    def apply_ranges(self, cfg: CalculatorConfig) -> tuple[CalculatorConfig, list[str]]:
        """Clamp cfg.loan into cfg.ranges when run.clamp is set; report which fields moved."""
        if not cfg.run.clamp:
            return cfg, []
        raw, adjusted = _clamped(cfg.loan.model_dump(), cfg.ranges)
        if not adjusted:
            return cfg, []
        return cfg.model_copy(update={"loan": LoanInput.model_validate(raw)}), adjusted

    # ---------- Internals ----------

    def _finish(self, raw: dict[str, Any]) -> CalculatorConfig:
        data = self._maybe_translate_flat(raw)
        data = self._apply_env_overrides(data)
        return self._parse_root(data)

    def _resolve_path(self, path: str | Path | None) -> Path | None:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("emi.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        return None

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Inputs JSON in {p} must be an object.")
        return cast(dict[str, Any], data)

    def _maybe_translate_flat(self, raw: dict[str, Any]) -> dict[str, Any]:
        """
        Accept the structured shape as-is. Otherwise treat the root as loan fields,
        mapping the form's field names (loanAmount/interestRate/loanTenure).
        """
        if any(k in raw for k in ("loan", "ranges", "run")):
            data = dict(raw)
            if isinstance(data.get("loan"), dict):
                data["loan"] = {**DEFAULT_LOAN.model_dump(), **data["loan"]}
            return data

        loan: dict[str, Any] = {}
        for key, val in raw.items():
            name = _FORM_ALIASES.get(key, key)
            if name in _LOAN_FIELDS:
                loan[name] = val
        if not loan:
            return {}
        return {"loan": {**DEFAULT_LOAN.model_dump(), **loan}}

    def _parse_root(self, data: dict[str, Any]) -> CalculatorConfig:
        try:
            return CalculatorConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Apply light, optional overrides from environment variables. Values that do
        not parse are ignored with a warning.
        """
        prefix = self.env_prefix
        loan_src, run_src = data.get("loan"), data.get("run")
        loan = dict(loan_src) if isinstance(loan_src, dict) else DEFAULT_LOAN.model_dump()
        run = dict(run_src) if isinstance(run_src, dict) else {}
        touched = False

        for env_name, field, conv in (
            ("PRINCIPAL", "principal", float),
            ("RATE", "annual_rate_percent", float),
            ("TENURE", "term_years", int),
        ):
            val = os.getenv(f"{prefix}{env_name}")
            if not val:
                continue
            try:
                loan[field] = conv(val)
                touched = True
            except ValueError:
                logger.warning("ignoring %s%s=%r (not a number)", prefix, env_name, val)

        out = os.getenv(f"{prefix}OUT")
        if out:
            run["out"] = out
            touched = True

        start = os.getenv(f"{prefix}START")
        if start:
            try:
                run["start"] = parse_start(start)
                touched = True
            except ValueError as e:
                logger.warning("ignoring %sSTART: %s", prefix, e)

        grouping = os.getenv(f"{prefix}GROUPING")
        if grouping:
            normalized = grouping.strip().lower()
            if normalized in ("indian", "western"):
                run["grouping"] = normalized
                touched = True
            else:
                logger.warning("ignoring %sGROUPING=%r", prefix, grouping)

        if not touched:
            return data
        return {**data, "loan": loan, "run": run}


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> CalculatorConfig:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
