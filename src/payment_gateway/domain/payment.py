"""Payment entity, its persisted view, and payment validation rules.

A ``Payment`` starts out ``Rejected``. Only the payment service moves it to
``Authorized`` or ``Declined`` after a real bank decision; both are terminal.
The ``PaymentRecord`` is what gets stored and returned, and it never holds
the full card number or the CVV.
"""

from collections.abc import Set
from dataclasses import dataclass
from datetime import date
from enum import Enum

from payment_gateway.config import DEFAULT_SUPPORTED_CURRENCIES
from payment_gateway.domain.card import Card, validate_card
from payment_gateway.domain.errors import (
    InvalidStatusTransition,
    PaymentValidationError,
    ValidationErrorCode,
)

CURRENCY_CODE_LENGTH = 3


class PaymentStatus(str, Enum):
    """Payment status."""

    AUTHORIZED = "Authorized"
    DECLINED = "Declined"
    REJECTED = "Rejected"


ALLOWED_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.REJECTED: frozenset({PaymentStatus.AUTHORIZED, PaymentStatus.DECLINED}),
    PaymentStatus.AUTHORIZED: frozenset(),
    PaymentStatus.DECLINED: frozenset(),
}


def validate_transition(current: PaymentStatus, new: PaymentStatus) -> None:
    """Raise ``InvalidStatusTransition`` unless ``current -> new`` is allowed."""
    if new not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransition(f"cannot move payment from {current.value} to {new.value}")


@dataclass(frozen=True)
class PaymentRecord:
    """Stored view of a finalized payment."""

    id: str
    status: PaymentStatus
    card_last_four: str
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int


@dataclass
class Payment:
    """A card payment moving through validation, authorization and storage."""

    card: Card
    currency: str
    amount: int
    id: str = ""
    status: PaymentStatus = PaymentStatus.REJECTED

    @property
    def is_final(self) -> bool:
        return self.status in (PaymentStatus.AUTHORIZED, PaymentStatus.DECLINED)

    def apply_authorization(self, authorized: bool) -> None:
        """Move to ``Authorized`` or ``Declined`` from a bank decision."""
        new_status = PaymentStatus.AUTHORIZED if authorized else PaymentStatus.DECLINED
        validate_transition(self.status, new_status)
        self.status = new_status

    def to_record(self) -> PaymentRecord:
        return PaymentRecord(
            id=self.id,
            status=self.status,
            card_last_four=self.card.last_four,
            expiry_month=self.card.expiry_month,
            expiry_year=self.card.expiry_year,
            currency=self.currency,
            amount=self.amount,
        )


def normalize_currency(currency: str, supported_currencies: Set[str]) -> str:
    """
    Validate a currency code and return it uppercased.

    Raises:
        PaymentValidationError: CURRENCY_REQUIRED or CURRENCY_INVALID
    """
    if not currency:
        raise PaymentValidationError(ValidationErrorCode.CURRENCY_REQUIRED)

    code = currency.upper()
    if len(code) != CURRENCY_CODE_LENGTH or code not in supported_currencies:
        raise PaymentValidationError(ValidationErrorCode.CURRENCY_INVALID)

    return code


def validate_amount(amount: int) -> None:
    if amount <= 0:
        raise PaymentValidationError(ValidationErrorCode.AMOUNT_INVALID)


def validate_payment(
    payment: Payment,
    supported_currencies: Set[str] = DEFAULT_SUPPORTED_CURRENCIES,
    today: date | None = None,
) -> Payment:
    """
    Validate a payment and normalize its currency.

    Card rules run first, then currency, then amount. The first failure is
    raised and the payment is left untouched; on success the currency is
    replaced by its uppercase form.

    Args:
        payment: Payment to validate
        supported_currencies: Accepted currency codes (uppercase)
        today: Reference date for the card expiry check

    Returns:
        The same payment, now safe to submit for authorization

    Raises:
        PaymentValidationError: With the code of the first rule that failed
    """
    validate_card(payment.card, today)
    currency = normalize_currency(payment.currency, supported_currencies)
    validate_amount(payment.amount)

    payment.currency = currency
    return payment


def create_payment(
    card: Card,
    currency: str,
    amount: int,
    supported_currencies: Set[str] = DEFAULT_SUPPORTED_CURRENCIES,
    today: date | None = None,
) -> Payment:
    """Build a ``Rejected`` payment and validate it in one step."""
    payment = Payment(card=card, currency=currency, amount=amount)
    return validate_payment(payment, supported_currencies, today)
