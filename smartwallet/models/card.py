"""
Core Data Models for SmartWallet

These models define the schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Stay constructible for malformed card input, so the store can reject it
   with a precise validation error instead of a generic parse failure
3. Be serializable for storage and logging

DESIGN DECISION: Structural card fields (number, expiry, CVV) are plain
strings here. Their formats are checked by the card validator on every
store write, not at construction time.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


def generate_card_id() -> str:
    """Generate a new opaque card identifier."""
    return uuid4().hex


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Read a naive datetime as UTC; aware values pass through."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Category(str, Enum):
    """
    Purchase categories used for cashback, perks and suggestions.

    OTHER doubles as the fallback bucket for cashback lookups.
    """
    DINING = "dining"
    TRAVEL = "travel"
    SHOPPING = "shopping"
    GROCERIES = "groceries"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    HEALTHCARE = "healthcare"
    TRANSPORTATION = "transportation"
    OTHER = "other"


class CardType(str, Enum):
    """Card networks supported by the wallet."""
    VISA = "visa"
    MASTERCARD = "mastercard"
    AMEX = "amex"
    DISCOVER = "discover"
    OTHER = "other"


CashbackRate = Annotated[float, Field(ge=0, le=100)]


# =============================================================================
# CORE CARD MODEL
# =============================================================================

class Card(BaseModel):
    """
    A payment card held in the wallet.

    `cashback` and `perks` are partial mappings: a category missing from
    the mapping has no explicit value, which is not the same as an
    explicit rate of 0.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    # Identity
    id: str = Field(
        default_factory=generate_card_id,
        description="Opaque unique card ID"
    )

    # Labels
    name: str = Field(
        ...,
        description="Display name of the card (e.g., 'Travel Rewards')"
    )
    cardholder_name: str = Field(
        ...,
        description="Name printed on the card"
    )

    # Structural fields (format checked by the validator)
    number: str = Field(
        ...,
        description="Card number, 13-19 digits, whitespace allowed"
    )
    expiry: str = Field(
        ...,
        description="Expiry date as MM/YY"
    )
    cvv: str = Field(
        ...,
        description="Card verification value, 3-4 digits"
    )
    type: CardType = Field(
        default=CardType.OTHER,
        description="Card network"
    )

    # Reward data
    categories: list[Category] = Field(
        default_factory=list,
        description="Categories the cardholder prefers this card for"
    )
    cashback: dict[Category, CashbackRate] = Field(
        default_factory=dict,
        description="Cashback percentage per category (0-100)"
    )
    perks: dict[Category, list[str]] = Field(
        default_factory=dict,
        description="Perk descriptions per category"
    )

    # Presentation hint, never validated or scored
    color: Optional[str] = None

    # Usage tracking (only changed through CardStore.mark_used)
    last_used: Optional[datetime] = Field(
        default=None,
        description="When the card was last chosen for a purchase (UTC)"
    )

    @field_validator('categories')
    @classmethod
    def collapse_duplicate_categories(cls, v: list[Category]) -> list[Category]:
        """Categories behave as a set; keep first occurrence order."""
        return list(dict.fromkeys(v))

    @field_validator('last_used')
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are treated as UTC."""
        return as_utc(v) if v is not None else None

    @property
    def masked_number(self) -> str:
        """Card number for display, e.g. '**** **** **** 1234'."""
        digits = "".join(self.number.split())
        if len(digits) <= 4:
            return digits
        return f"**** **** **** {digits[-4:]}"

    def cashback_rate_for(self, category: Category) -> Optional[float]:
        """Explicit cashback rate for a category, or None if absent."""
        return self.cashback.get(category)

    def perks_for(self, category: Category) -> Optional[list[str]]:
        """Perk list for a category, or None if absent."""
        return self.perks.get(category)


# =============================================================================
# TRANSACTION / SUGGESTION MODELS
# =============================================================================

class Transaction(BaseModel):
    """
    A purchase the user wants a card suggestion for.

    Never persisted - consumed once by the suggestion engine.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    category: Category
    amount: float = Field(
        ...,
        gt=0,
        description="Purchase amount"
    )
    date: Optional[datetime] = None
    description: Optional[str] = Field(
        default=None,
        max_length=500,
    )


class ScoreBreakdown(BaseModel):
    """Individual terms of a card's suggestion score."""

    cashback_rate: float = Field(
        default=0.0,
        description="Effective cashback rate used for scoring"
    )
    used_fallback_rate: bool = Field(
        default=False,
        description="True when the rate came from the OTHER bucket"
    )
    cashback_points: float = 0.0
    perk_points: float = 0.0
    category_points: float = 0.0
    recency_points: float = 0.0

    @property
    def total(self) -> float:
        """Sum of all score terms."""
        return (
            self.cashback_points
            + self.perk_points
            + self.category_points
            + self.recency_points
        )


class ScoredCard(BaseModel):
    """A card together with its score for one transaction."""

    card: Card
    breakdown: ScoreBreakdown

    @property
    def score(self) -> float:
        return self.breakdown.total


class CardSuggestion(BaseModel):
    """
    The recommended card for a transaction.

    Always derived, never persisted.
    """

    card: Card
    reason: str = Field(
        ...,
        description="Human-readable justification"
    )
    cashback_amount: Optional[float] = Field(
        default=None,
        description="Cashback earned on this purchase, if any"
    )
    perks: Optional[list[str]] = Field(
        default=None,
        description="Perks that apply to this purchase"
    )
    score: float = Field(
        default=0.0,
        description="Total score of the suggested card"
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found on a card."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Rule that failed (e.g., 'required_field', 'cvv_format')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )
