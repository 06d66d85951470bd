"""Acquiring bank models for the Payment Gateway."""

from payment_gateway.models.authorization import (
    AuthorizationOutcome,
    BankAuthorizationRequest,
)
from payment_gateway.models.exceptions import (
    BankCommunicationError,
    BankError,
    BankRequestRejected,
    BankResponseDecodeError,
    BankServiceUnavailable,
    BankTimeout,
)

__all__ = [
    "AuthorizationOutcome",
    "BankAuthorizationRequest",
    "BankError",
    "BankResponseDecodeError",
    "BankRequestRejected",
    "BankServiceUnavailable",
    "BankCommunicationError",
    "BankTimeout",
]
