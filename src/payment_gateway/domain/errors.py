"""Domain exceptions for the Payment Gateway.

Validation failures carry a ``ValidationErrorCode`` naming the single rule
that was violated. Orchestration failures keep the bank failure and the
storage failure apart so callers can tell "bank never reached" from
"bank decision lost".
"""

from enum import Enum


class ValidationErrorCode(str, Enum):
    """One code per validation rule, in evaluation order."""

    CARD_NUMBER_REQUIRED = "card_number_required"
    CARD_NUMBER_INVALID = "card_number_invalid"
    CARD_NUMBER_NOT_NUMERIC = "card_number_not_numeric"
    EXPIRY_MONTH_REQUIRED = "expiry_month_required"
    EXPIRY_MONTH_INVALID = "expiry_month_invalid"
    EXPIRY_YEAR_REQUIRED = "expiry_year_required"
    EXPIRY_DATE_IN_PAST = "expiry_date_in_past"
    CVV_REQUIRED = "cvv_required"
    CVV_INVALID = "cvv_invalid"
    CVV_NOT_NUMERIC = "cvv_not_numeric"
    CURRENCY_REQUIRED = "currency_required"
    CURRENCY_INVALID = "currency_invalid"
    AMOUNT_INVALID = "amount_invalid"


# (field, message) for every code
_ERROR_DETAILS: dict[ValidationErrorCode, tuple[str, str]] = {
    ValidationErrorCode.CARD_NUMBER_REQUIRED: ("card_number", "card number is required"),
    ValidationErrorCode.CARD_NUMBER_INVALID: (
        "card_number",
        "card number must be between 14-19 digits",
    ),
    ValidationErrorCode.CARD_NUMBER_NOT_NUMERIC: (
        "card_number",
        "card number must only contain numeric characters",
    ),
    ValidationErrorCode.EXPIRY_MONTH_REQUIRED: ("expiry_month", "expiry month is required"),
    ValidationErrorCode.EXPIRY_MONTH_INVALID: (
        "expiry_month",
        "expiry month must be between 1-12",
    ),
    ValidationErrorCode.EXPIRY_YEAR_REQUIRED: ("expiry_year", "expiry year is required"),
    ValidationErrorCode.EXPIRY_DATE_IN_PAST: (
        "expiry_year",
        "expiry date must be in the future",
    ),
    ValidationErrorCode.CVV_REQUIRED: ("cvv", "CVV is required"),
    ValidationErrorCode.CVV_INVALID: ("cvv", "CVV must be 3-4 digits"),
    ValidationErrorCode.CVV_NOT_NUMERIC: ("cvv", "CVV must only contain numeric characters"),
    ValidationErrorCode.CURRENCY_REQUIRED: ("currency", "currency is required"),
    ValidationErrorCode.CURRENCY_INVALID: (
        "currency",
        "currency must be a supported 3-character ISO code",
    ),
    ValidationErrorCode.AMOUNT_INVALID: ("amount", "amount must be a positive integer"),
}


class PaymentGatewayError(Exception):
    """Base exception for payment gateway errors."""

    pass


class PaymentValidationError(PaymentGatewayError):
    """
    Raised when a card or payment breaks a validation rule.

    This is a TERMINAL error. The payment is discarded by the caller and
    never reaches the bank or the store.
    """

    def __init__(self, code: ValidationErrorCode) -> None:
        self.code = code
        self.field, self.message = _ERROR_DETAILS[code]
        super().__init__(self.message)


class InvalidStatusTransition(PaymentGatewayError):
    """Raised when a payment status change is not allowed by the state machine."""

    pass


class AuthorizationFailed(PaymentGatewayError):
    """
    Raised when the bank could not produce an authorize/decline decision.

    The underlying ``BankError`` is available as ``reason`` (and as
    ``__cause__``). Nothing is persisted when this is raised.
    """

    def __init__(self, reason: Exception) -> None:
        self.reason = reason
        super().__init__(f"failed to process payment with bank: {reason}")


class StorageError(PaymentGatewayError):
    """Raised when the payment store cannot complete a read or write."""

    pass


class SaveFailed(PaymentGatewayError):
    """
    Raised when a finalized payment could not be persisted.

    The bank has already decided at this point; the decision is not
    recorded and is not retried.
    """

    def __init__(self, reason: Exception) -> None:
        self.reason = reason
        super().__init__(f"failed to save payment: {reason}")


class PaymentNotFound(PaymentGatewayError):
    """Raised when no payment exists for the requested identifier."""

    def __init__(self, payment_id: str) -> None:
        self.payment_id = payment_id
        super().__init__(f"payment {payment_id} not found")
