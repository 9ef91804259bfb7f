"""Nigerian PAYE constants: bracket schedule, relief allowance and deduction caps.

Hardcoded Python constants (not DB-driven). The engine supports a single tax
year; changing the schedule means editing this module.
"""

from decimal import Decimal
from typing import NamedTuple


class TaxBracket(NamedTuple):
    """A single income tax band.

    ``width`` is the slice of income taxed at ``rate``, not a cumulative ceiling.
    """

    width: Decimal
    rate: Decimal


class TaxSchedule(NamedTuple):
    """Ordered bracket sequence plus the rate applied beyond the last band."""

    brackets: tuple[TaxBracket, ...]
    top_rate: Decimal


class ReliefAllowance(NamedTuple):
    """Consolidated Relief Allowance parameters.

    CRA = max(fixed_minimum, gross_percent * gross) + additional_percent * gross
    """

    fixed_minimum: Decimal
    gross_percent: Decimal
    additional_percent: Decimal


TAX_YEAR = "2024"

# Bands are consumed in order; widths ascend with rates.
DEFAULT_SCHEDULE = TaxSchedule(
    brackets=(
        TaxBracket(Decimal("300000"), Decimal("0.07")),
        TaxBracket(Decimal("300000"), Decimal("0.11")),
        TaxBracket(Decimal("500000"), Decimal("0.15")),
        TaxBracket(Decimal("500000"), Decimal("0.19")),
        TaxBracket(Decimal("1600000"), Decimal("0.21")),
        TaxBracket(Decimal("3200000"), Decimal("0.24")),
    ),
    top_rate=Decimal("0.24"),
)

DEFAULT_RELIEF = ReliefAllowance(
    fixed_minimum=Decimal("200000"),
    gross_percent=Decimal("0.01"),
    additional_percent=Decimal("0.20"),
)

# Statutory deductions, capped as a fraction of gross income
DEFAULT_DEDUCTION_CAPS: dict[str, Decimal] = {
    "Pension": Decimal("0.08"),
    "NHF": Decimal("0.025"),
    "NHIS": Decimal("0.05"),
}
