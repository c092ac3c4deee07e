# tests/unit/test_inputs_loader.py
import logging
from datetime import date

import pytest

from emi_calculator.core.finance import InvalidLoanParametersError
from emi_calculator.inputs.inputs import (
    CalculatorConfig,
    InputsLoader,
    load_inputs,
    parse_numeric_input,
    parse_start,
)
from emi_calculator.schemas.models import LoanInput
from tests.utils import write_json


@pytest.mark.parametrize(
    "text,expected",
    [
        ("0050000", 50_000.0),
        ("007.5", 7.5),
        ("12", 12.0),
        (" 25 ", 25.0),
        ("", 0.0),
        ("000", 0.0),
    ],
)
def test_parse_numeric_input_strips_leading_zeros(text, expected):
    assert parse_numeric_input(text) == expected


def test_parse_numeric_input_rejects_garbage():
    with pytest.raises(ValueError):
        parse_numeric_input("12abc")


def test_parse_start_formats():
    assert parse_start("2026-10") == date(2026, 10, 1)
    assert parse_start("2026-10-15") == date(2026, 10, 15)
    with pytest.raises(ValueError):
        parse_start("October")


def test_defaults_when_no_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_inputs()
    assert cfg.loan == LoanInput(principal=1_000_000, annual_rate_percent=7.5, term_years=5)
    assert cfg.run.visible_years == 4
    assert cfg.run.grouping == "indian"
    assert cfg.run.start is None


def test_default_search_finds_emi_json(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_json(tmp_path / "emi.json", '{"principal": 750000, "annual_rate_percent": 9, "term_years": 10}')
    assert load_inputs().loan.principal == 750_000


def test_flat_shape():
    cfg = InputsLoader().load_json('{"principal": 500000, "annual_rate_percent": 10, "term_years": 1}')
    assert cfg.loan == LoanInput(principal=500_000, annual_rate_percent=10, term_years=1)


def test_form_field_names_are_accepted():
    cfg = InputsLoader().load_json('{"loanAmount": 2000000, "interestRate": 8.5, "loanTenure": 20}')
    assert cfg.loan == LoanInput(principal=2_000_000, annual_rate_percent=8.5, term_years=20)


def test_partial_flat_shape_keeps_defaults():
    cfg = InputsLoader().load_json('{"loanTenure": 10}')
    assert cfg.loan.term_years == 10
    assert cfg.loan.principal == 1_000_000


def test_structured_shape_with_run_options():
    payload = """
    {
      "loan": {"principal": 3000000, "annual_rate_percent": 9.25, "term_years": 15},
      "ranges": {"principal": {"min": 50000, "max": 10000000, "step": 10000}},
      "run": {"start": "2026-10", "visible_years": 8, "expand": "all", "grouping": "western"}
    }
    """
    cfg = InputsLoader().load_json(payload)
    assert cfg.loan.term_years == 15
    assert cfg.ranges.principal.max == 10_000_000
    assert cfg.ranges.rate.max == 20  # untouched ranges keep defaults
    assert cfg.run.start == date(2026, 10, 1)
    assert cfg.run.visible_years == 8
    assert cfg.run.expand == "all"
    assert cfg.run.grouping == "western"


def test_invalid_json_and_invalid_values():
    loader = InputsLoader()
    with pytest.raises(ValueError, match="Invalid JSON"):
        loader.load_json("{not json")
    with pytest.raises(ValueError, match="validation failed"):
        loader.load_json('{"principal": 100000, "annual_rate_percent": 7, "term_years": 0}')
    with pytest.raises(ValueError):
        loader.load_json("[1, 2, 3]")


def test_load_from_path(tmp_path):
    p = write_json(tmp_path / "loan.json", '{"principal": 600000, "annual_rate_percent": 11, "term_years": 3}')
    assert InputsLoader().load(p).loan.annual_rate_percent == 11


def test_load_missing_or_wrong_suffix(tmp_path):
    with pytest.raises(FileNotFoundError):
        InputsLoader().load(tmp_path / "missing.json")
    txt = write_json(tmp_path / "loan.txt", "{}")
    with pytest.raises(ValueError, match="only .json"):
        InputsLoader().load(txt)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EMI_PRINCIPAL", "250000")
    monkeypatch.setenv("EMI_RATE", "9.5")
    monkeypatch.setenv("EMI_TENURE", "7")
    monkeypatch.setenv("EMI_START", "2027-03")
    monkeypatch.setenv("EMI_GROUPING", "Western")
    monkeypatch.setenv("EMI_OUT", "out.md")
    cfg = InputsLoader().load_json("{}")
    assert cfg.loan == LoanInput(principal=250_000, annual_rate_percent=9.5, term_years=7)
    assert cfg.run.start == date(2027, 3, 1)
    assert cfg.run.grouping == "western"
    assert cfg.run.out == "out.md"


def test_bad_env_values_are_ignored_with_warning(monkeypatch, caplog):
    monkeypatch.setenv("EMI_TENURE", "ten")
    monkeypatch.setenv("EMI_GROUPING", "swiss")
    with caplog.at_level(logging.WARNING, logger="emi_calculator"):
        cfg = InputsLoader().load_json('{"principal": 400000, "annual_rate_percent": 6, "term_years": 4}')
    assert cfg.loan.term_years == 4
    assert cfg.run.grouping == "indian"
    assert "EMI_TENURE" in caplog.text
    assert "EMI_GROUPING" in caplog.text


def test_with_overrides_is_non_destructive():
    loader = InputsLoader()
    cfg = CalculatorConfig()
    new = loader.with_overrides(cfg, principal=500_000, rate=10, tenure=1, start="2026-10", expand=[2026])
    assert new.loan == LoanInput(principal=500_000, annual_rate_percent=10, term_years=1)
    assert new.run.start == date(2026, 10, 1)
    assert new.run.expand == [2026]
    assert cfg.loan.principal == 1_000_000
    assert loader.with_overrides(cfg) is cfg


def test_with_overrides_clamps_before_validating(caplog):
    loader = InputsLoader()
    with caplog.at_level(logging.WARNING, logger="emi_calculator"):
        cfg = loader.with_overrides(CalculatorConfig(), principal=-5, rate=35)
    assert cfg.loan.principal == 100_000
    assert cfg.loan.annual_rate_percent == 20
    assert "principal" in caplog.text


def test_with_overrides_without_clamp_raises_typed_error():
    with pytest.raises(InvalidLoanParametersError) as ei:
        InputsLoader().with_overrides(CalculatorConfig(), principal=0, clamp=False)
    assert ei.value.fields == ("principal",)


def test_with_overrides_rejects_bad_run_values():
    loader = InputsLoader()
    with pytest.raises(ValueError):
        loader.with_overrides(CalculatorConfig(), visible_years=0)
    with pytest.raises(ValueError):
        loader.with_overrides(CalculatorConfig(), grouping="swiss")  # type: ignore[arg-type]


def test_apply_ranges():
    loader = InputsLoader()
    cfg = CalculatorConfig(loan=LoanInput(principal=50_000, annual_rate_percent=7.5, term_years=5))
    clamped, adjusted = loader.apply_ranges(cfg)
    assert adjusted == ["principal"]
    assert clamped.loan.principal == 100_000

    no_clamp = loader.with_overrides(cfg, clamp=False)
    same, adjusted = loader.apply_ranges(no_clamp)
    assert same is no_clamp and adjusted == []
