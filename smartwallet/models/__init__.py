"""
Data Models Package

This package contains all Pydantic models used in SmartWallet.
All data flowing through the system must conform to these schemas.
"""

from smartwallet.models.card import (
    Card,
    CardSuggestion,
    CardType,
    Category,
    ScoreBreakdown,
    ScoredCard,
    Transaction,
    ValidationIssue,
    as_utc,
    generate_card_id,
    utc_now,
)
from smartwallet.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Card models
    "Card",
    "CardSuggestion",
    "CardType",
    "Category",
    "ScoreBreakdown",
    "ScoredCard",
    "Transaction",
    "ValidationIssue",
    "as_utc",
    "generate_card_id",
    "utc_now",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
