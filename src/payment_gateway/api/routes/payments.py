"""POST /api/payments and GET /api/payments/{payment_id} endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, status

from payment_gateway.api.dependencies import PaymentSvc, SupportedCurrencies
from payment_gateway.api.models import (
    ErrorDetailJSON,
    PaymentRequestJSON,
    PaymentResponseJSON,
)
from payment_gateway.domain.card import Card
from payment_gateway.domain.errors import (
    AuthorizationFailed,
    PaymentNotFound,
    PaymentValidationError,
    SaveFailed,
    StorageError,
)
from payment_gateway.domain.payment import create_payment

logger = structlog.get_logger()

router = APIRouter(prefix="/api/payments", tags=["payments"])


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"code": code, "message": message})


@router.post(
    "",
    response_model=PaymentResponseJSON,
    responses={
        400: {"model": ErrorDetailJSON, "description": "Validation error (Rejected)"},
        500: {"model": ErrorDetailJSON, "description": "Payment could not be stored"},
        502: {"model": ErrorDetailJSON, "description": "Bank unavailable or error"},
    },
)
async def process_payment(
    body: PaymentRequestJSON,
    service: PaymentSvc,
    supported_currencies: SupportedCurrencies,
) -> PaymentResponseJSON:
    """Validate a card payment, authorize it with the bank and store the outcome.

    Returns:
        The finalized payment (Authorized or Declined)

    Raises:
        HTTPException: 400 on validation error, 502 if the bank gave no
            decision, 500 if the decision could not be stored
    """
    card = Card(
        number=body.card_number,
        expiry_month=body.expiry_month,
        expiry_year=body.expiry_year,
        cvv=body.cvv,
    )

    try:
        payment = create_payment(
            card,
            body.currency,
            body.amount,
            supported_currencies=supported_currencies,
        )
    except PaymentValidationError as e:
        logger.info(
            "payment_rejected",
            code=e.code.value,
            field=e.field,
            card_last_four=card.last_four,
        )
        raise _error(status.HTTP_400_BAD_REQUEST, e.code.value, e.message)

    try:
        record = await service.process_payment(payment)
    except AuthorizationFailed as e:
        logger.warning("process_payment_bank_failure", error=str(e.reason))
        raise _error(
            status.HTTP_502_BAD_GATEWAY,
            "authorization_failed",
            "Unable to process payment with bank",
        )
    except SaveFailed as e:
        logger.error("process_payment_save_failure", error=str(e.reason))
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "save_failed",
            "Payment was processed by the bank but could not be stored",
        )

    return PaymentResponseJSON.from_record(record)


@router.get(
    "/{payment_id}",
    response_model=PaymentResponseJSON,
    responses={
        404: {"model": ErrorDetailJSON, "description": "Payment not found"},
        500: {"model": ErrorDetailJSON, "description": "Storage error"},
    },
)
async def get_payment(payment_id: str, service: PaymentSvc) -> PaymentResponseJSON:
    """Retrieve a previously processed payment by identifier.

    Raises:
        HTTPException: 404 if not found, 500 if the store could not be read
    """
    try:
        record = await service.get_payment(payment_id)
    except PaymentNotFound:
        raise _error(status.HTTP_404_NOT_FOUND, "payment_not_found", "Payment not found")
    except StorageError as e:
        logger.error("get_payment_storage_failure", payment_id=payment_id, error=str(e))
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "storage_error",
            "Failed to retrieve payment",
        )

    return PaymentResponseJSON.from_record(record)
