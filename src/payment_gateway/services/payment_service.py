"""Payment processing service.

Runs one payment through the bank and the store:

1. Assign a fresh identifier
2. Ask the bank to authorize (no retry)
3. Move the status to Authorized or Declined
4. Persist the finalized record
5. Return the record

Validation happens before this service is called. A bank failure aborts the
payment without persisting anything; a storage failure after the bank has
decided is reported as ``SaveFailed`` and the decision is not recorded.
"""

import uuid
from collections.abc import Callable

import structlog

from payment_gateway.clients.base import BankClient
from payment_gateway.domain.errors import (
    AuthorizationFailed,
    InvalidStatusTransition,
    PaymentNotFound,
    SaveFailed,
    StorageError,
)
from payment_gateway.domain.payment import Payment, PaymentRecord
from payment_gateway.infrastructure.repository import PaymentRepository
from payment_gateway.models import BankError

logger = structlog.get_logger(__name__)


def generate_payment_id() -> str:
    return str(uuid.uuid4())


class PaymentService:
    """Orchestrates authorization and storage of validated payments."""

    def __init__(
        self,
        bank_client: BankClient,
        repository: PaymentRepository,
        id_factory: Callable[[], str] = generate_payment_id,
    ) -> None:
        self.bank_client = bank_client
        self.repository = repository
        self.id_factory = id_factory

    async def process_payment(self, payment: Payment) -> PaymentRecord:
        """
        Authorize a validated payment with the bank and record the outcome.

        Args:
            payment: Payment that has passed validation (status Rejected)

        Returns:
            The finalized, persisted PaymentRecord

        Raises:
            InvalidStatusTransition: If the payment was already finalized
            AuthorizationFailed: The bank gave no decision; nothing was saved
            SaveFailed: The bank decided but the record could not be stored
        """
        if payment.is_final:
            raise InvalidStatusTransition(
                f"payment {payment.id} is already {payment.status.value}"
            )

        payment.id = self.id_factory()
        log = logger.bind(payment_id=payment.id, card_last_four=payment.card.last_four)

        log.info(
            "payment_processing_started",
            amount=payment.amount,
            currency=payment.currency,
        )

        try:
            outcome = await self.bank_client.authorize(payment)
        except BankError as e:
            log.warning(
                "payment_authorization_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise AuthorizationFailed(e) from e

        payment.apply_authorization(outcome.authorized)
        record = payment.to_record()

        try:
            await self.repository.save(record)
        except StorageError as e:
            log.error(
                "payment_save_failed",
                status=record.status.value,
                error=str(e),
            )
            raise SaveFailed(e) from e

        log.info("payment_processed", status=record.status.value)
        return record

    async def get_payment(self, payment_id: str) -> PaymentRecord:
        """
        Retrieve a previously processed payment.

        Raises:
            PaymentNotFound: No payment has this identifier
            StorageError: The store could not be read
        """
        record = await self.repository.find_by_id(payment_id)

        if record is None:
            logger.info("payment_not_found", payment_id=payment_id)
            raise PaymentNotFound(payment_id)

        return record
