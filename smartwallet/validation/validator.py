"""
Card Structural Validation

DESIGN DECISION: Validation is a single pure function used by every
store write (add and update), so the two call sites cannot drift apart.

Checks run in a fixed order and stop at the first violation:
1. Required fields present (id, name, number, expiry, cvv, cardholder_name)
2. Card number: 13-19 digits, embedded whitespace ignored
3. Expiry: MM/YY with a month of 01-12
4. CVV: 3-4 digits

Not checked: Luhn checksum, expiry in the past, CVV length per brand.

IMPORTANT: Validation NEVER silently fixes a card. It reports the first
failing rule and the store refuses the write.
"""

import re
from enum import Enum
from typing import Optional

from smartwallet.models.card import Card, ValidationIssue


NUMBER_PATTERN = re.compile(r"[0-9]{13,19}")
EXPIRY_PATTERN = re.compile(r"(0[1-9]|1[0-2])/[0-9]{2}")
CVV_PATTERN = re.compile(r"[0-9]{3,4}")

REQUIRED_FIELDS = (
    ("id", "Card ID"),
    ("name", "Card name"),
    ("number", "Card number"),
    ("expiry", "Card expiry"),
    ("cvv", "Card CVV"),
    ("cardholder_name", "Cardholder name"),
)


class ValidationRule(str, Enum):
    """Rules a card can fail."""
    REQUIRED_FIELD = "required_field"
    NUMBER_FORMAT = "number_format"
    EXPIRY_FORMAT = "expiry_format"
    CVV_FORMAT = "cvv_format"
    DUPLICATE_ID = "duplicate_id"


class ValidationError(ValueError):
    """A card failed structural validation."""

    def __init__(self, issue: ValidationIssue):
        super().__init__(issue.message)
        self.issue = issue

    @property
    def rule(self) -> ValidationRule:
        return ValidationRule(self.issue.issue_type)

    @property
    def field(self) -> str:
        return self.issue.field


def _issue(
    field: str,
    rule: ValidationRule,
    message: str,
    suggested_fix: Optional[str] = None,
) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type=rule.value,
        message=message,
        severity="error",
        suggested_fix=suggested_fix,
    )


def find_violation(card: Card) -> Optional[ValidationIssue]:
    """
    Return the first rule the card violates, or None if it is valid.

    Pure function: no storage access, no clock.
    """
    for field, label in REQUIRED_FIELDS:
        value = getattr(card, field)
        if not value or not value.strip():
            return _issue(
                field,
                ValidationRule.REQUIRED_FIELD,
                f"{label} is required",
            )

    digits = re.sub(r"\s", "", card.number)
    if not NUMBER_PATTERN.fullmatch(digits):
        return _issue(
            "number",
            ValidationRule.NUMBER_FORMAT,
            "Invalid card number format",
            suggested_fix="Card numbers have 13 to 19 digits",
        )

    if not EXPIRY_PATTERN.fullmatch(card.expiry):
        return _issue(
            "expiry",
            ValidationRule.EXPIRY_FORMAT,
            "Invalid expiry date format (should be MM/YY)",
            suggested_fix="Use a two-digit month (01-12) and year, e.g. 04/27",
        )

    if not CVV_PATTERN.fullmatch(card.cvv):
        return _issue(
            "cvv",
            ValidationRule.CVV_FORMAT,
            "Invalid CVV format (should be 3-4 digits)",
        )

    return None


def validate_card(card: Card) -> None:
    """
    Validate a card before it is written.

    Raises:
        ValidationError: carrying the first failing rule
    """
    issue = find_violation(card)
    if issue is not None:
        raise ValidationError(issue)


def duplicate_id_error(card_id: str) -> ValidationError:
    """Error for an add whose ID is already stored."""
    return ValidationError(_issue(
        "id",
        ValidationRule.DUPLICATE_ID,
        f"Card with ID {card_id} already exists",
        suggested_fix="Generate a new card ID or use update instead",
    ))


def get_user_friendly_message(error: ValidationError) -> str:
    """Short message suitable for showing to the user."""
    lines = [f"❌ {error.issue.message}"]
    if error.issue.suggested_fix:
        lines.append(f"   💡 {error.issue.suggested_fix}")
    return "\n".join(lines)
