"""Card value object and card validation rules."""

from dataclasses import dataclass, field
from datetime import date

from payment_gateway.domain.errors import PaymentValidationError, ValidationErrorCode

CARD_NUMBER_MIN_LENGTH = 14
CARD_NUMBER_MAX_LENGTH = 19
CVV_MIN_LENGTH = 3
CVV_MAX_LENGTH = 4


def is_numeric(value: str) -> bool:
    """Return True when ``value`` is made only of ASCII digits."""
    return value.isascii() and value.isdigit()


@dataclass(frozen=True)
class Card:
    """
    Card details taken from an inbound payment request (PCI scope).

    The full number and the CVV are excluded from ``repr`` so they cannot
    end up in logs or tracebacks. Only ``last_four`` is ever exposed.

    Attributes:
        number: Card number (PAN), 14-19 digits
        expiry_month: Expiry month, 1-12
        expiry_year: Four digit expiry year
        cvv: Card verification value, 3-4 digits
    """

    number: str = field(repr=False)
    expiry_month: int
    expiry_year: int
    cvv: str = field(repr=False)

    @property
    def last_four(self) -> str:
        """Last four digits of the card number (the whole number if shorter)."""
        return self.number[-4:]

    @property
    def expiry_date(self) -> str:
        """Expiry formatted as zero padded ``MM/YYYY``."""
        return f"{self.expiry_month:02d}/{self.expiry_year}"


def validate_card_number(number: str) -> None:
    if not number:
        raise PaymentValidationError(ValidationErrorCode.CARD_NUMBER_REQUIRED)

    if not CARD_NUMBER_MIN_LENGTH <= len(number) <= CARD_NUMBER_MAX_LENGTH:
        raise PaymentValidationError(ValidationErrorCode.CARD_NUMBER_INVALID)

    if not is_numeric(number):
        raise PaymentValidationError(ValidationErrorCode.CARD_NUMBER_NOT_NUMERIC)


def validate_expiry(expiry_month: int, expiry_year: int, today: date | None = None) -> None:
    """
    Check the expiry month/year and reject cards that expired before ``today``.

    Only (year, month) is compared: a card expiring in the current month is
    valid for the whole month.
    """
    if expiry_month == 0:
        raise PaymentValidationError(ValidationErrorCode.EXPIRY_MONTH_REQUIRED)

    if not 1 <= expiry_month <= 12:
        raise PaymentValidationError(ValidationErrorCode.EXPIRY_MONTH_INVALID)

    if expiry_year == 0:
        raise PaymentValidationError(ValidationErrorCode.EXPIRY_YEAR_REQUIRED)

    today = today or date.today()
    if (expiry_year, expiry_month) < (today.year, today.month):
        raise PaymentValidationError(ValidationErrorCode.EXPIRY_DATE_IN_PAST)


def validate_cvv(cvv: str) -> None:
    if not cvv:
        raise PaymentValidationError(ValidationErrorCode.CVV_REQUIRED)

    if not CVV_MIN_LENGTH <= len(cvv) <= CVV_MAX_LENGTH:
        raise PaymentValidationError(ValidationErrorCode.CVV_INVALID)

    if not is_numeric(cvv):
        raise PaymentValidationError(ValidationErrorCode.CVV_NOT_NUMERIC)


def validate_card(card: Card, today: date | None = None) -> None:
    """
    Validate a card, stopping at the first broken rule.

    Rules run in order: number, expiry, CVV.

    Args:
        card: Card to validate
        today: Reference date for the expiry check (defaults to the current date)

    Raises:
        PaymentValidationError: With the code of the first rule that failed
    """
    validate_card_number(card.number)
    validate_expiry(card.expiry_month, card.expiry_year, today)
    validate_cvv(card.cvv)
