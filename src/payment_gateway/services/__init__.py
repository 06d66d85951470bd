"""Application services for the Payment Gateway."""

from payment_gateway.services.payment_service import PaymentService, generate_payment_id

__all__ = ["PaymentService", "generate_payment_id"]
