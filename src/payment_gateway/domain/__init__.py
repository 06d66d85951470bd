"""Payment gateway domain layer.

This package contains the card and payment entities, the validation rules
applied before any bank call, and the domain exceptions.
"""

from payment_gateway.domain.card import Card, validate_card
from payment_gateway.domain.errors import (
    AuthorizationFailed,
    InvalidStatusTransition,
    PaymentGatewayError,
    PaymentNotFound,
    PaymentValidationError,
    SaveFailed,
    StorageError,
    ValidationErrorCode,
)
from payment_gateway.domain.payment import (
    Payment,
    PaymentRecord,
    PaymentStatus,
    create_payment,
    validate_payment,
)

__all__ = [
    # Entities
    "Card",
    "Payment",
    "PaymentRecord",
    "PaymentStatus",
    # Validation
    "validate_card",
    "validate_payment",
    "create_payment",
    "ValidationErrorCode",
    # Exceptions
    "PaymentGatewayError",
    "PaymentValidationError",
    "InvalidStatusTransition",
    "AuthorizationFailed",
    "SaveFailed",
    "StorageError",
    "PaymentNotFound",
]
