"""Tax calculation service: combines income, deductions, relief and bracket tax."""

import logging
from decimal import Decimal

from src.calculators.deductions import DeductionRegistry
from src.calculators.engine import TaxEngine
from src.models import TaxBreakdown, TaxCalculationRequest, TaxCalculationResponse

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Tax calculated successfully."

MONTHS_PER_YEAR = 12


class TaxService:
    """Turns declared incomes and deductions into a tax breakdown.

    The engine and registry are owned by the instance, so separate services
    never share deduction rules.
    """

    def __init__(
        self,
        engine: TaxEngine | None = None,
        registry: DeductionRegistry | None = None,
    ) -> None:
        self.engine = engine or TaxEngine()
        self.registry = registry if registry is not None else DeductionRegistry.with_defaults()

    def calculate_tax(self, request: TaxCalculationRequest) -> TaxCalculationResponse:
        """Calculate annual and monthly tax for a request.

        Amounts are assumed validated (non-negative) by the caller. Deductions
        whose type has no registered rule contribute nothing.

        Args:
            request: Incomes and deductions for one taxpayer.

        Returns:
            TaxCalculationResponse with the breakdown and a success message.
        """
        gross_income = sum((income.amount for income in request.incomes), Decimal("0"))

        statutory_deductions = Decimal("0")
        for deduction in request.deductions:
            rule = self.registry.resolve(deduction.type)
            if rule is None:
                logger.debug("No rule for deduction type %r, ignoring", deduction.type)
                continue
            statutory_deductions += rule.cap(deduction.amount, gross_income)

        consolidated_relief = self.engine.calculate_cra(gross_income)
        total_deductions = statutory_deductions + consolidated_relief
        taxable_income = max(Decimal("0"), gross_income - total_deductions)

        annual_tax = self.engine.calculate_progressive_tax(taxable_income)
        monthly_tax = annual_tax / MONTHS_PER_YEAR

        logger.debug(
            "Calculated tax: gross=%s taxable=%s annual=%s",
            gross_income,
            taxable_income,
            annual_tax,
        )

        return TaxCalculationResponse(
            breakdown=TaxBreakdown(
                total_gross_income=float(gross_income),
                total_deductions=float(total_deductions),
                consolidated_relief=float(consolidated_relief),
                taxable_income=float(taxable_income),
                annual_tax=float(annual_tax),
                monthly_tax=float(monthly_tax),
            ),
            message=SUCCESS_MESSAGE,
        )
