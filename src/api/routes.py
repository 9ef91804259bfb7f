"""API routes for the PAYE tax calculator."""

from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Request

from config import load_yaml_config
from config.settings import settings
from src.calculators.service import TaxService
from src.calculators.tax_data import TAX_YEAR
from src.models import Scenario, TaxCalculationRequest, TaxCalculationResponse

router = APIRouter()


@lru_cache(maxsize=1)
def load_scenarios() -> tuple[Scenario, ...]:
    """Read the educational scenarios once from config."""
    raw = load_yaml_config(settings.scenarios_file) or []
    return tuple(Scenario.model_validate(item) for item in raw)


def _tax_service(request: Request) -> TaxService:
    return request.app.state.tax_service


@router.get("/ping")
async def ping() -> dict[str, str]:
    """Liveness check."""
    return {"message": "pong"}


@router.get("/health")
async def health(request: Request) -> dict:  # type: ignore[type-arg]
    """Health check endpoint with the loaded tax year and deduction types."""
    result: dict[str, object] = {"status": "ok", "tax_year": TAX_YEAR}
    service = getattr(request.app.state, "tax_service", None)
    if service is not None:
        result["deduction_types"] = service.registry.types()
    return result


@router.post("/api/tax/calculate", response_model=TaxCalculationResponse)
async def calculate_tax(body: TaxCalculationRequest, request: Request) -> TaxCalculationResponse:
    """Calculate annual and monthly PAYE for the declared incomes and deductions."""
    return _tax_service(request).calculate_tax(body)


@router.get("/api/tax/scenarios", response_model=list[Scenario])
async def scenarios() -> list[Scenario]:
    """List the predefined educational scenarios."""
    return list(load_scenarios())


@router.get("/api/tax/brackets")
async def brackets(request: Request) -> dict[str, Any]:
    """Describe the bracket schedule, relief formula and deduction types in use."""
    service = _tax_service(request)
    schedule = service.engine.schedule
    relief = service.engine.relief
    return {
        "tax_year": TAX_YEAR,
        "brackets": [
            {"width": float(b.width), "rate": float(b.rate)} for b in schedule.brackets
        ],
        "top_rate": float(schedule.top_rate),
        "consolidated_relief": {
            "fixed_minimum": float(relief.fixed_minimum),
            "gross_percent": float(relief.gross_percent),
            "additional_percent": float(relief.additional_percent),
        },
        "deduction_types": service.registry.types(),
    }
