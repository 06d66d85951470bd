"""Acquiring bank wire models."""

from dataclasses import asdict, dataclass
from typing import Any

from payment_gateway.domain.payment import Payment


@dataclass(frozen=True)
class BankAuthorizationRequest:
    """
    Request body sent to the acquiring bank.

    Carries the full card number and CVV, so it only lives for the
    duration of one bank call and is never logged or stored.
    """

    card_number: str
    expiry_date: str
    currency: str
    amount: int
    cvv: str

    @classmethod
    def from_payment(cls, payment: Payment) -> "BankAuthorizationRequest":
        return cls(
            card_number=payment.card.number,
            expiry_date=payment.card.expiry_date,
            currency=payment.currency,
            amount=payment.amount,
            cvv=payment.card.cvv,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AuthorizationOutcome:
    """
    Decision returned by the acquiring bank.

    A decline is a normal outcome, not an error: ``authorized`` is False
    and ``authorization_code`` is empty.
    """

    authorized: bool
    authorization_code: str = ""
