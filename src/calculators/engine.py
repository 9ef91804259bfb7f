"""Progressive tax engine with relief allowance and band-by-band tax."""

from decimal import Decimal
from typing import NamedTuple

from src.calculators.tax_data import (
    DEFAULT_RELIEF,
    DEFAULT_SCHEDULE,
    ReliefAllowance,
    TaxSchedule,
)

_ZERO = Decimal("0")


class BracketTax(NamedTuple):
    """Tax charged within one band. ``width`` is None for the overflow band."""

    width: Decimal | None
    rate: Decimal
    taxable_amount: Decimal
    tax: Decimal


class TaxEngine:
    """Holds the bracket schedule and relief parameters for one tax year.

    The schedule is trusted as given: bands are walked in construction order and
    never sorted. Instances carry no mutable state and can be shared freely.
    """

    def __init__(
        self,
        schedule: TaxSchedule = DEFAULT_SCHEDULE,
        relief: ReliefAllowance = DEFAULT_RELIEF,
    ) -> None:
        self._schedule = schedule
        self._relief = relief

    @property
    def schedule(self) -> TaxSchedule:
        return self._schedule

    @property
    def relief(self) -> ReliefAllowance:
        return self._relief

    def calculate_cra(self, gross_income: Decimal) -> Decimal:
        """Consolidated Relief Allowance for a gross income (must be >= 0)."""
        relief = self._relief
        return (
            max(relief.fixed_minimum, relief.gross_percent * gross_income)
            + relief.additional_percent * gross_income
        )

    def bracket_breakdown(self, taxable_income: Decimal) -> list[BracketTax]:
        """Split taxable income across the bands it reaches.

        Args:
            taxable_income: Income after deductions and relief.

        Returns:
            One entry per band touched, in schedule order. Income beyond the
            sum of all band widths is reported as a final entry taxed at the
            schedule's top rate.
        """
        breakdown: list[BracketTax] = []
        remaining = taxable_income

        for bracket in self._schedule.brackets:
            if remaining <= 0:
                break
            taxed = min(remaining, bracket.width)
            breakdown.append(BracketTax(bracket.width, bracket.rate, taxed, taxed * bracket.rate))
            remaining -= taxed

        if remaining > 0:
            top_rate = self._schedule.top_rate
            breakdown.append(BracketTax(None, top_rate, remaining, remaining * top_rate))

        return breakdown

    def calculate_progressive_tax(self, taxable_income: Decimal) -> Decimal:
        """Total tax on taxable income, walking the bands in order."""
        return sum((band.tax for band in self.bracket_breakdown(taxable_income)), _ZERO)
