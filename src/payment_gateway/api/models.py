"""Pydantic models for JSON API requests/responses."""

from pydantic import BaseModel, ConfigDict, Field

from payment_gateway.domain.payment import PaymentRecord

# Ranges of the SMALLINT, INTEGER and BIGINT columns the values are stored in
SMALLINT_MAX = 2**15 - 1
INTEGER_MAX = 2**31 - 1
BIGINT_MAX = 2**63 - 1


class PaymentRequestJSON(BaseModel):
    """JSON request model for processing a payment.

    Missing fields default to empty values so the domain validation reports
    which field is required. Integers must be JSON integers that fit the
    storage columns; anything else is an invalid body.
    """

    card_number: str = Field("", description="Full card number, 14-19 digits")
    expiry_month: int = Field(
        0, strict=True, ge=-SMALLINT_MAX - 1, le=SMALLINT_MAX, description="Expiry month (1-12)"
    )
    expiry_year: int = Field(
        0, strict=True, ge=-INTEGER_MAX - 1, le=INTEGER_MAX, description="Four digit expiry year"
    )
    currency: str = Field("", description="ISO 4217 currency code (USD, GBP, EUR)")
    amount: int = Field(
        0, strict=True, ge=-BIGINT_MAX - 1, le=BIGINT_MAX, description="Amount in minor currency units"
    )
    cvv: str = Field("", description="Card verification value, 3-4 digits")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "card_number": "2222405343248877",
                "expiry_month": 4,
                "expiry_year": 2030,
                "currency": "GBP",
                "amount": 100,
                "cvv": "123",
            }
        }
    )


class PaymentResponseJSON(BaseModel):
    """JSON response model for a processed payment."""

    id: str = Field(..., description="Payment identifier")
    status: str = Field(..., description="Payment status (Authorized, Declined)")
    card_number_last_four: str = Field(..., description="Last four digits of the card number")
    expiry_month: int = Field(..., description="Expiry month")
    expiry_year: int = Field(..., description="Expiry year")
    currency: str = Field(..., description="ISO 4217 currency code")
    amount: int = Field(..., description="Amount in minor currency units")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "status": "Authorized",
                "card_number_last_four": "8877",
                "expiry_month": 4,
                "expiry_year": 2030,
                "currency": "GBP",
                "amount": 100,
            }
        }
    )

    @classmethod
    def from_record(cls, record: PaymentRecord) -> "PaymentResponseJSON":
        return cls(
            id=record.id,
            status=record.status.value,
            card_number_last_four=record.card_last_four,
            expiry_month=record.expiry_month,
            expiry_year=record.expiry_year,
            currency=record.currency,
            amount=record.amount,
        )


class ErrorDetailJSON(BaseModel):
    """Error body returned under ``detail`` for every failed request."""

    code: str = Field(..., description="Machine readable error code")
    message: str = Field(..., description="Human readable error message")
