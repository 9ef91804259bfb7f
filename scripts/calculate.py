"""Calculate PAYE from the command line.

Usage:
    python scripts/calculate.py --income Employment=5000000 --deduction Pension=400000
    python scripts/calculate.py --income Employment=5000000 \
        --deduction LifeInsurance=100000 --rules config/deduction_rules.example.yaml
"""

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import load_yaml_config
from src.calculators.deductions import DeductionRegistry
from src.calculators.service import TaxService
from src.models import Deduction, IncomeSource, TaxCalculationRequest

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def parse_entry(value: str) -> tuple[str, Decimal]:
    """Parse a TYPE=AMOUNT pair."""
    label, sep, raw_amount = value.partition("=")
    if not sep or not label.strip():
        raise argparse.ArgumentTypeError(f"Expected TYPE=AMOUNT, got {value!r}")
    try:
        amount = Decimal(raw_amount.replace(",", "").strip())
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"Invalid amount in {value!r}") from None
    if not amount.is_finite() or amount < 0:
        raise argparse.ArgumentTypeError(f"Amount must be a non-negative number in {value!r}")
    return label.strip(), amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calculate Nigerian PAYE tax")
    parser.add_argument(
        "--income",
        action="append",
        type=parse_entry,
        default=[],
        metavar="TYPE=AMOUNT",
        help="Annual income source (repeatable)",
    )
    parser.add_argument(
        "--deduction",
        action="append",
        type=parse_entry,
        default=[],
        metavar="TYPE=AMOUNT",
        help="Annual deduction claimed (repeatable)",
    )
    parser.add_argument("--rules", help="YAML file of extra deduction rules")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run one calculation and print the response as JSON."""
    args = build_parser().parse_args(argv)

    registry = DeductionRegistry.with_defaults()
    if args.rules:
        added = registry.load_rules(load_yaml_config(str(Path(args.rules).resolve())))
        logger.info("Loaded %d deduction rules from %s", added, args.rules)

    request = TaxCalculationRequest(
        incomes=[IncomeSource(type=label, amount=amount) for label, amount in args.income],
        deductions=[Deduction(type=label, amount=amount) for label, amount in args.deduction],
    )
    response = TaxService(registry=registry).calculate_tax(request)
    print(json.dumps(response.model_dump(by_alias=True), indent=2))


if __name__ == "__main__":
    main()
