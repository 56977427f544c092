"""
Audit Models for SmartWallet

Every write to the card store and every recommendation is logged for
audit purposes. This provides:
1. Traceability of all card changes
2. Debugging information when a suggestion looks wrong
3. Ability to reconstruct the history of a card

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
Card numbers and CVVs never enter an audit event; only masked numbers do.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Card store
    CARD_ADDED = "card_added"
    CARD_UPDATED = "card_updated"
    CARD_DELETED = "card_deleted"
    CARD_MARKED_USED = "card_marked_used"
    CARD_VALIDATION_FAILED = "card_validation_failed"
    CARD_NOT_FOUND = "card_not_found"

    # Recommendations
    SUGGESTION_GENERATED = "suggestion_generated"
    NO_SUGGESTION = "no_suggestion"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - which card is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'card', 'transaction')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., suggest then mark used)"
    )

    description: str = Field(
        ...,
        max_length=500,
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.card_added(card_id, name, masked_number)
        event = AuditEventBuilder.suggestion_generated(card_id, ...)
    """

    @staticmethod
    def card_added(
        card_id: str,
        name: str,
        masked_number: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CARD_ADDED,
            entity_type="card",
            entity_id=card_id,
            correlation_id=correlation_id,
            description=f"Card added: {name}",
            details={
                "name": name,
                "masked_number": masked_number,
            },
        )

    @staticmethod
    def card_updated(
        card_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CARD_UPDATED,
            entity_type="card",
            entity_id=card_id,
            correlation_id=correlation_id,
            description=f"Card updated: {name}",
            details={"name": name},
        )

    @staticmethod
    def card_deleted(
        card_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CARD_DELETED,
            entity_type="card",
            entity_id=card_id,
            correlation_id=correlation_id,
            description=f"Card deleted: {card_id}",
        )

    @staticmethod
    def card_marked_used(
        card_id: str,
        used_at: datetime,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CARD_MARKED_USED,
            entity_type="card",
            entity_id=card_id,
            correlation_id=correlation_id,
            description=f"Card marked as used: {card_id}",
            details={"used_at": used_at.isoformat()},
        )

    @staticmethod
    def validation_failed(
        card_id: Optional[str],
        operation: str,
        issue: dict,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CARD_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="card",
            entity_id=card_id or None,
            correlation_id=correlation_id,
            description=f"Card rejected on {operation}: {issue.get('issue_type')}",
            details={
                "operation": operation,
                "issue": issue,
            },
        )

    @staticmethod
    def card_not_found(
        card_id: str,
        operation: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CARD_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="card",
            entity_id=card_id,
            correlation_id=correlation_id,
            description=f"Card not found on {operation}: {card_id}",
            details={"operation": operation},
        )

    @staticmethod
    def suggestion_generated(
        card_id: str,
        category: str,
        amount: float,
        score: float,
        candidate_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUGGESTION_GENERATED,
            entity_type="card",
            entity_id=card_id,
            correlation_id=correlation_id,
            description=f"Suggested card {card_id} for {category} purchase",
            details={
                "category": category,
                "amount": amount,
                "score": score,
                "candidate_count": candidate_count,
            },
        )

    @staticmethod
    def no_suggestion(
        category: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NO_SUGGESTION,
            entity_type="transaction",
            correlation_id=correlation_id,
            description="No cards available to suggest",
            details={
                "category": category,
                "amount": amount,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
