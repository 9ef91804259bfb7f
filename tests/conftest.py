"""Shared test fixtures."""

from collections.abc import Callable
from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.calculators.deductions import DeductionRegistry, Uncapped
from src.calculators.engine import TaxEngine
from src.calculators.service import TaxService
from src.models import Deduction, IncomeSource, TaxCalculationRequest


def _make_request(
    incomes: dict[str, str] | None = None,
    deductions: list[tuple[str, str]] | None = None,
) -> TaxCalculationRequest:
    """Build a request from {type: amount} incomes and (type, amount) deductions."""
    return TaxCalculationRequest(
        incomes=[IncomeSource(type=t, amount=Decimal(a)) for t, a in (incomes or {}).items()],
        deductions=[Deduction(type=t, amount=Decimal(a)) for t, a in (deductions or [])],
    )


@pytest.fixture
def make_request() -> Callable[..., TaxCalculationRequest]:
    return _make_request


@pytest.fixture
def engine() -> TaxEngine:
    return TaxEngine()


@pytest.fixture
def registry() -> DeductionRegistry:
    return DeductionRegistry.with_defaults()


@pytest.fixture
def service(registry: DeductionRegistry) -> TaxService:
    return TaxService(registry=registry)


@pytest.fixture
def life_insurance_service() -> TaxService:
    """Service with an extra uncapped LifeInsurance rule."""
    registry = DeductionRegistry.with_defaults()
    registry.register("LifeInsurance", Uncapped())
    return TaxService(registry=registry)


@pytest.fixture
def app(service: TaxService) -> FastAPI:
    """App from the factory with a service attached, lifespan not run."""
    test_app = create_app()
    test_app.state.tax_service = service
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
