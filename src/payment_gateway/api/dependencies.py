"""FastAPI dependencies for service injection."""

from collections.abc import Set
from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request, status

from payment_gateway.config import settings
from payment_gateway.services.payment_service import PaymentService

logger = structlog.get_logger(__name__)


def get_payment_service(request: Request) -> PaymentService:
    """Provide the payment service built during application startup.

    Raises:
        HTTPException: 503 if the application has not finished starting
    """
    service = getattr(request.app.state, "payment_service", None)
    if service is None:
        logger.error("payment_service_not_initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"code": "service_unavailable", "message": "Payment service not initialized"},
        )
    return service


# Type alias for payment service dependency
PaymentSvc = Annotated[PaymentService, Depends(get_payment_service)]


def get_supported_currencies() -> Set[str]:
    """Currency codes accepted by payment validation."""
    return settings.supported_currencies


# Type alias for supported currencies dependency
SupportedCurrencies = Annotated[Set[str], Depends(get_supported_currencies)]
