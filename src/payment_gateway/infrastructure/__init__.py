"""Infrastructure layer: payment record storage backends."""

from payment_gateway.infrastructure.postgres_repository import PostgresPaymentRepository
from payment_gateway.infrastructure.repository import (
    InMemoryPaymentRepository,
    PaymentRepository,
)

__all__ = [
    "PaymentRepository",
    "InMemoryPaymentRepository",
    "PostgresPaymentRepository",
]
