"""Card validation package."""

from smartwallet.validation.validator import (
    ValidationError,
    ValidationRule,
    duplicate_id_error,
    find_violation,
    get_user_friendly_message,
    validate_card,
)

__all__ = [
    "ValidationError",
    "ValidationRule",
    "duplicate_id_error",
    "find_violation",
    "get_user_friendly_message",
    "validate_card",
]
