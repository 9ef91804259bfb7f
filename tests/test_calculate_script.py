"""Tests for the command-line calculator."""

import argparse
import json
from decimal import Decimal
from pathlib import Path

import pytest

from scripts.calculate import main, parse_entry

RULES = Path(__file__).resolve().parent.parent / "config" / "deduction_rules.example.yaml"


class TestParseEntry:
    def test_valid(self) -> None:
        assert parse_entry("Employment=2,000,000") == ("Employment", Decimal("2000000"))

    @pytest.mark.parametrize("value", ["Employment", "=100", "Pension=abc", "Pension=-5", "NHF=inf"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_entry(value)


def test_main_prints_breakdown(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--income", "Employment=2000000"])
    data = json.loads(capsys.readouterr().out)
    assert data["breakdown"]["annualTax"] == 186000.0
    assert data["breakdown"]["monthlyTax"] == 15500.0


def test_main_with_rules(capsys: pytest.CaptureFixture[str]) -> None:
    main([
        "--income", "Employment=5000000",
        "--deduction", "Pension=400000",
        "--deduction", "LifeInsurance=100000",
        "--rules", str(RULES),
    ])
    data = json.loads(capsys.readouterr().out)
    assert data["breakdown"]["taxableIncome"] == 3300000.0
    assert data["breakdown"]["annualTax"] == 584000.0


def test_main_rejects_bad_entry() -> None:
    with pytest.raises(SystemExit):
        main(["--income", "Employment"])
