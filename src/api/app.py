"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config import load_yaml_config
from config.settings import settings
from src.api.routes import router
from src.calculators.deductions import DeductionRegistry
from src.calculators.service import TaxService

logger = logging.getLogger(__name__)


def build_tax_service() -> TaxService:
    """Build a service with the default rules plus any configured extras."""
    registry = DeductionRegistry.with_defaults()
    if settings.deduction_rules_file:
        added = registry.load_rules(load_yaml_config(settings.deduction_rules_file))
        logger.info("Loaded %d deduction rules from %s", added, settings.deduction_rules_file)
    return TaxService(registry=registry)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: configure logging, build the tax service."""
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting up...")

    app.state.tax_service = build_tax_service()

    yield

    logger.info("Shutting down...")


def _format_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's default 422."""
    message = _format_errors(exc)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse({"error": f"Invalid request body: {message}"}, status_code=400)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title=settings.app_title, lifespan=lifespan)
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.include_router(router)
    return app
