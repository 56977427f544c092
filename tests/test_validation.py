"""Tests for card structural validation."""

import pytest

from smartwallet.validation import (
    ValidationError,
    ValidationRule,
    duplicate_id_error,
    find_violation,
    get_user_friendly_message,
    validate_card,
)


class TestRequiredFields:
    """Required field presence."""

    @pytest.mark.parametrize(
        "field",
        ["id", "name", "number", "expiry", "cvv", "cardholder_name"],
    )
    def test_empty_required_field_rejected(self, card_factory, field):
        """Test that each required field must be non-empty."""
        card = card_factory(**{field: ""})
        with pytest.raises(ValidationError) as exc_info:
            validate_card(card)
        assert exc_info.value.rule == ValidationRule.REQUIRED_FIELD
        assert exc_info.value.field == field

    def test_whitespace_only_name_rejected(self, card_factory):
        card = card_factory(name="   ")
        with pytest.raises(ValidationError, match="Card name is required"):
            validate_card(card)

    def test_required_checked_before_formats(self, card_factory):
        """Test fail-fast order: a missing name wins over a bad number."""
        card = card_factory(name="", number="123")
        issue = find_violation(card)
        assert issue.issue_type == "required_field"
        assert issue.field == "name"


class TestNumberFormat:
    """Card number format."""

    @pytest.mark.parametrize(
        "number",
        ["4111111111111", "4111 1111 1111 1111", "6011000990139424123", "4111\t1111 1111 1111"],
    )
    def test_valid_numbers(self, card_factory, number):
        validate_card(card_factory(number=number))

    @pytest.mark.parametrize(
        "number",
        ["411111111111", "41111111111111111111", "4111-1111-1111-1111", "4111abcd11111111"],
    )
    def test_invalid_numbers(self, card_factory, number):
        """Test 12 and 20 digit numbers and non-digits are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_card(card_factory(number=number))
        assert exc_info.value.rule == ValidationRule.NUMBER_FORMAT

    def test_number_checked_before_expiry(self, card_factory):
        issue = find_violation(card_factory(number="123", expiry="bad"))
        assert issue.issue_type == "number_format"


class TestExpiryFormat:
    """Expiry MM/YY format."""

    @pytest.mark.parametrize("expiry", ["01/25", "12/99", "09/00"])
    def test_valid_expiry(self, card_factory, expiry):
        validate_card(card_factory(expiry=expiry))

    @pytest.mark.parametrize("expiry", ["13/01", "00/25", "1/25", "01/2025", "01-25", "ab/cd"])
    def test_invalid_expiry(self, card_factory, expiry):
        """Test that 13/01 and other malformed dates are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_card(card_factory(expiry=expiry))
        assert exc_info.value.rule == ValidationRule.EXPIRY_FORMAT

    def test_expired_card_is_accepted(self, card_factory):
        """Recency is not checked, only the format."""
        validate_card(card_factory(expiry="01/01"))


class TestCvvFormat:
    """CVV format."""

    @pytest.mark.parametrize("cvv", ["123", "1234"])
    def test_valid_cvv(self, card_factory, cvv):
        validate_card(card_factory(cvv=cvv))

    @pytest.mark.parametrize("cvv", ["12", "12345", "12a"])
    def test_invalid_cvv(self, card_factory, cvv):
        """Test 2 and 5 digit CVVs are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_card(card_factory(cvv=cvv))
        assert exc_info.value.rule == ValidationRule.CVV_FORMAT

    def test_cvv_length_not_tied_to_brand(self, card_factory):
        """A 3-digit CVV on an amex card is still accepted."""
        validate_card(card_factory(type="amex", cvv="123"))


class TestValidationError:
    """Error details."""

    def test_valid_card_has_no_violation(self, card_factory):
        assert find_violation(card_factory()) is None

    def test_error_carries_issue(self, card_factory):
        issue = find_violation(card_factory(expiry="13/01"))
        error = ValidationError(issue)
        assert str(error) == "Invalid expiry date format (should be MM/YY)"
        assert error.issue.suggested_fix

    def test_is_value_error(self, card_factory):
        with pytest.raises(ValueError):
            validate_card(card_factory(cvv="1"))

    def test_duplicate_id_error(self):
        error = duplicate_id_error("card-1")
        assert error.rule == ValidationRule.DUPLICATE_ID
        assert "card-1" in str(error)

    def test_user_friendly_message(self, card_factory):
        issue = find_violation(card_factory(number="123"))
        message = get_user_friendly_message(ValidationError(issue))
        assert "Invalid card number format" in message
        assert "13 to 19 digits" in message
