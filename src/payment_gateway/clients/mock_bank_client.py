"""
In-process acquiring bank for local development and end-to-end tests.

Mirrors the behaviour of the bank simulator the gateway is developed against,
keyed on the last digit of the card number:

- odd digit (1, 3, 5, 7, 9): authorized, with a generated authorization code
- even digit (2, 4, 6, 8): declined
- zero: the bank answers 503 (``BankServiceUnavailable``)
"""

import asyncio
import uuid

import structlog

from payment_gateway.clients.base import BankClient
from payment_gateway.domain.payment import Payment
from payment_gateway.models import AuthorizationOutcome, BankServiceUnavailable

logger = structlog.get_logger(__name__)


class MockBankClient(BankClient):
    """Mock acquiring bank that decides from the card number's last digit."""

    def __init__(self, latency_ms: int = 0) -> None:
        """
        Initialize mock bank.

        Args:
            latency_ms: Simulated latency in milliseconds (default: 0)
        """
        self.latency_ms = latency_ms

        logger.info("mock_bank_client_initialized", latency_ms=latency_ms)

    async def authorize(self, payment: Payment) -> AuthorizationOutcome:
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

        last_digit = int(payment.card.number[-1])

        logger.info(
            "mock_bank_authorization",
            payment_id=payment.id,
            card_last_four=payment.card.last_four,
            amount=payment.amount,
            currency=payment.currency,
        )

        if last_digit == 0:
            raise BankServiceUnavailable()

        if last_digit % 2 == 1:
            return AuthorizationOutcome(
                authorized=True,
                authorization_code=str(uuid.uuid4()),
            )

        return AuthorizationOutcome(authorized=False)
