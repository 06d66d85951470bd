"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- Valid card and payment builders
- A scripted bank client that records every call
- In-memory payment repository
"""

from datetime import date

import pytest

from payment_gateway.clients.base import BankClient
from payment_gateway.domain.card import Card
from payment_gateway.domain.payment import Payment
from payment_gateway.infrastructure.repository import InMemoryPaymentRepository
from payment_gateway.models import AuthorizationOutcome

NEXT_YEAR = date.today().year + 1


class StubBankClient(BankClient):
    """Bank client returning a fixed outcome or raising a fixed error."""

    def __init__(
        self,
        outcome: AuthorizationOutcome | None = None,
        error: Exception | None = None,
    ) -> None:
        self.outcome = outcome or AuthorizationOutcome(authorized=True, authorization_code="AUTH-1")
        self.error = error
        self.calls: list[Payment] = []

    async def authorize(self, payment: Payment) -> AuthorizationOutcome:
        self.calls.append(payment)
        if self.error is not None:
            raise self.error
        return self.outcome


@pytest.fixture
def valid_card() -> Card:
    """A card that passes every validation rule."""
    return Card(
        number="2222405343248877",
        expiry_month=4,
        expiry_year=NEXT_YEAR,
        cvv="123",
    )


@pytest.fixture
def valid_payment(valid_card) -> Payment:
    """A payment that passes every validation rule (still Rejected)."""
    return Payment(card=valid_card, currency="GBP", amount=100)


@pytest.fixture
def repository() -> InMemoryPaymentRepository:
    return InMemoryPaymentRepository()


@pytest.fixture
def make_bank():
    """Factory for stub bank clients with a chosen outcome or error."""
    return StubBankClient


@pytest.fixture
def authorizing_bank() -> StubBankClient:
    return StubBankClient(AuthorizationOutcome(authorized=True, authorization_code="AUTH-1"))


@pytest.fixture
def declining_bank() -> StubBankClient:
    return StubBankClient(AuthorizationOutcome(authorized=False))


@pytest.fixture
def valid_request_body() -> dict:
    """JSON body for POST /api/payments that passes validation."""
    return {
        "card_number": "2222405343248877",
        "expiry_month": 4,
        "expiry_year": NEXT_YEAR,
        "currency": "GBP",
        "amount": 100,
        "cvv": "123",
    }
