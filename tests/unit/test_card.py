"""Unit tests for card validation rules."""

from datetime import date

import pytest

from payment_gateway.domain.card import (
    Card,
    validate_card,
    validate_card_number,
    validate_cvv,
    validate_expiry,
)
from payment_gateway.domain.errors import PaymentValidationError, ValidationErrorCode

TODAY = date(2026, 6, 15)


def _card(**overrides) -> Card:
    fields = {
        "number": "1234567890123456",
        "expiry_month": 12,
        "expiry_year": TODAY.year + 1,
        "cvv": "123",
    }
    fields.update(overrides)
    return Card(**fields)


class TestCardNumber:
    """Tests for card number rules."""

    @pytest.mark.parametrize(
        "number",
        ["1234567890123456", "12345678901234", "1234567890123456789"],
    )
    def test_valid_lengths(self, number):
        validate_card_number(number)

    def test_empty_number_is_required(self):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_card_number("")

        assert exc_info.value.code == ValidationErrorCode.CARD_NUMBER_REQUIRED
        assert exc_info.value.field == "card_number"

    @pytest.mark.parametrize(
        "number",
        ["1234567890123", "12345678901234567890", "123", "ABCDEFGHIJKLMNOPQRSTU"],
    )
    def test_length_outside_range_is_invalid(self, number):
        """Length is checked before content, so letters of a bad length are INVALID."""
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_card_number(number)

        assert exc_info.value.code == ValidationErrorCode.CARD_NUMBER_INVALID

    @pytest.mark.parametrize(
        "number",
        ["123456789012345A", "1234 5678 9012 3456", "1234-5678-9012-3456", "١٢٣٤٥٦٧٨٩٠١٢٣٤٥"],
    )
    def test_non_numeric_number(self, number):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_card_number(number)

        assert exc_info.value.code == ValidationErrorCode.CARD_NUMBER_NOT_NUMERIC


class TestExpiry:
    """Tests for expiry month/year rules."""

    def test_future_year(self):
        validate_expiry(1, TODAY.year + 1, TODAY)

    def test_current_year_later_month(self):
        validate_expiry(12, TODAY.year, TODAY)

    def test_current_month_is_valid(self):
        """A card expiring this month stays valid for the whole month."""
        validate_expiry(TODAY.month, TODAY.year, TODAY)
        validate_expiry(TODAY.month, TODAY.year, date(TODAY.year, TODAY.month, 30))

    def test_previous_month_same_year_is_in_past(self):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_expiry(TODAY.month - 1, TODAY.year, TODAY)

        assert exc_info.value.code == ValidationErrorCode.EXPIRY_DATE_IN_PAST

    def test_previous_month_in_january_rolls_to_previous_year(self):
        """December of last year is already in the past during January."""
        january = date(2026, 1, 10)

        validate_expiry(1, 2026, january)
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_expiry(12, 2025, january)

        assert exc_info.value.code == ValidationErrorCode.EXPIRY_DATE_IN_PAST

    def test_past_year(self):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_expiry(12, TODAY.year - 1, TODAY)

        assert exc_info.value.code == ValidationErrorCode.EXPIRY_DATE_IN_PAST

    def test_month_missing(self):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_expiry(0, TODAY.year + 1, TODAY)

        assert exc_info.value.code == ValidationErrorCode.EXPIRY_MONTH_REQUIRED

    @pytest.mark.parametrize("month", [13, -1, 99])
    def test_month_out_of_range(self, month):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_expiry(month, TODAY.year + 1, TODAY)

        assert exc_info.value.code == ValidationErrorCode.EXPIRY_MONTH_INVALID

    def test_year_missing(self):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_expiry(12, 0, TODAY)

        assert exc_info.value.code == ValidationErrorCode.EXPIRY_YEAR_REQUIRED

    def test_defaults_to_current_date(self):
        validate_expiry(12, date.today().year + 1)


class TestCVV:
    """Tests for CVV rules."""

    @pytest.mark.parametrize("cvv", ["123", "1234"])
    def test_valid_cvv(self, cvv):
        validate_cvv(cvv)

    def test_cvv_required(self):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_cvv("")

        assert exc_info.value.code == ValidationErrorCode.CVV_REQUIRED

    @pytest.mark.parametrize("cvv", ["12", "12345"])
    def test_cvv_wrong_length(self, cvv):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_cvv(cvv)

        assert exc_info.value.code == ValidationErrorCode.CVV_INVALID

    @pytest.mark.parametrize("cvv", ["12A", "12*", "1 3"])
    def test_cvv_not_numeric(self, cvv):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_cvv(cvv)

        assert exc_info.value.code == ValidationErrorCode.CVV_NOT_NUMERIC


class TestValidateCard:
    """Tests for rule ordering across the whole card."""

    def test_valid_card(self):
        validate_card(_card(), TODAY)

    def test_number_checked_before_expiry_and_cvv(self):
        card = _card(number="123", expiry_month=13, cvv="1")

        with pytest.raises(PaymentValidationError) as exc_info:
            validate_card(card, TODAY)

        assert exc_info.value.code == ValidationErrorCode.CARD_NUMBER_INVALID

    def test_expiry_checked_before_cvv(self):
        card = _card(expiry_month=13, cvv="1")

        with pytest.raises(PaymentValidationError) as exc_info:
            validate_card(card, TODAY)

        assert exc_info.value.code == ValidationErrorCode.EXPIRY_MONTH_INVALID

    def test_invalid_cvv(self):
        with pytest.raises(PaymentValidationError) as exc_info:
            validate_card(_card(cvv="12"), TODAY)

        assert exc_info.value.code == ValidationErrorCode.CVV_INVALID


class TestCardExposure:
    """Only the last four digits of a card may leave the card object."""

    @pytest.mark.parametrize(
        "number, expected",
        [("1234567890123456", "3456"), ("12345678901234", "1234"), ("123", "123")],
    )
    def test_last_four(self, number, expected):
        assert _card(number=number).last_four == expected

    def test_expiry_date_is_zero_padded(self):
        assert _card(expiry_month=4, expiry_year=2030).expiry_date == "04/2030"
        assert _card(expiry_month=11, expiry_year=2030).expiry_date == "11/2030"

    def test_repr_hides_number_and_cvv(self):
        text = repr(_card(number="4111111111111111", cvv="987"))

        assert "4111111111111111" not in text
        assert "987" not in text
