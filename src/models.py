"""Pydantic models for tax calculation requests, responses and scenarios."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Request records ---


class IncomeSource(BaseModel):
    """A single source of income, e.g. Employment or Freelance."""

    type: str
    amount: Decimal = Field(ge=0, description="Annual amount")


class Deduction(BaseModel):
    """A claimed deduction; ``type`` selects the capping rule."""

    type: str
    amount: Decimal = Field(ge=0, description="Annual amount claimed")


class TaxCalculationRequest(BaseModel):
    """Request body for the tax calculation endpoint."""

    incomes: list[IncomeSource] = []
    deductions: list[Deduction] = []


# --- Response records ---


class TaxBreakdown(BaseModel):
    """Breakdown of a tax calculation. Serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total_gross_income: float
    total_deductions: float
    consolidated_relief: float
    taxable_income: float
    annual_tax: float
    monthly_tax: float


class TaxCalculationResponse(BaseModel):
    """Response body for the tax calculation endpoint."""

    breakdown: TaxBreakdown
    message: str


class Scenario(BaseModel):
    """An educational tax scenario."""

    title: str
    description: str
    example: str
