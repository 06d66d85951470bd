"""FastAPI application entry point for the Payment Gateway."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from payment_gateway import __version__
from payment_gateway.api.routes import payments
from payment_gateway.clients.factory import get_bank_client
from payment_gateway.config import settings
from payment_gateway.infrastructure.database import close_pool, get_pool
from payment_gateway.infrastructure.postgres_repository import PostgresPaymentRepository
from payment_gateway.infrastructure.repository import (
    InMemoryPaymentRepository,
    PaymentRepository,
)
from payment_gateway.logging_config import configure_logging
from payment_gateway.services.payment_service import PaymentService

# Configure logging at module level
configure_logging()

logger = structlog.get_logger()


async def build_repository(backend: str) -> PaymentRepository:
    """Create the payment repository for the configured storage backend.

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend == "memory":
        return InMemoryPaymentRepository()

    if backend == "postgres":
        pool = await get_pool()
        repository = PostgresPaymentRepository(pool)
        await repository.ensure_schema()
        return repository

    raise ValueError(f"Unknown storage backend: {backend}. Available backends: memory, postgres")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager.

    Handles startup and shutdown:
    - Build the bank client and payment repository
    - Attach the payment service to app state
    - Release connections on shutdown
    """
    logger.info(
        "starting_payment_gateway",
        environment=settings.environment,
        bank_client=settings.bank.client,
        storage_backend=settings.storage.backend,
    )

    bank_client = get_bank_client(settings.bank.client)
    try:
        repository = await build_repository(settings.storage.backend)
    except Exception as e:
        logger.error(
            "payment_gateway_startup_failed",
            storage_backend=settings.storage.backend,
            error_type=type(e).__name__,
            error=str(e),
        )
        await bank_client.close()
        await close_pool()
        raise

    app.state.payment_service = PaymentService(bank_client, repository)

    logger.info("payment_gateway_started")

    yield

    # Shutdown
    logger.info("shutting_down_payment_gateway")

    await bank_client.close()
    await repository.close()
    if settings.storage.backend == "postgres":
        await close_pool()

    logger.info("payment_gateway_shutdown_complete")


# Create FastAPI app
app = FastAPI(
    title="Payment Gateway API",
    description=(
        "Validates card payments, authorizes them with the acquiring bank "
        "and stores the outcome. Only the last four card digits are stored "
        "or returned; the CVV is never stored."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.include_router(payments.router)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer 400 for bodies that cannot be parsed into a payment request."""
    logger.info("invalid_request_body", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"detail": {"code": "invalid_request_body", "message": "Invalid request body"}},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness probe."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "Payment Gateway API",
        "version": __version__,
        "status": "running",
    }


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
