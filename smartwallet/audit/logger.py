"""
Audit Logger

DESIGN DECISION: Every write to the card store and every recommendation
is logged. This provides:
1. Traceability of card changes
2. Debugging capability for unexpected suggestions

The audit logger:
- Gracefully handles failures (never breaks a store write if logging fails)
- Supports correlation IDs to trace related events
- Never sees raw card numbers or CVVs
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

import structlog

from smartwallet.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from smartwallet.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at the given level."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("smartwallet").setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage, if configured (for history)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("smartwallet.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_card_added(
        self,
        card_id: str,
        name: str,
        masked_number: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log card creation."""
        self.log(AuditEventBuilder.card_added(
            card_id=card_id,
            name=name,
            masked_number=masked_number,
            correlation_id=correlation_id,
        ))

    def log_card_updated(
        self,
        card_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log card update."""
        self.log(AuditEventBuilder.card_updated(
            card_id=card_id,
            name=name,
            correlation_id=correlation_id,
        ))

    def log_card_deleted(
        self,
        card_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log card deletion."""
        self.log(AuditEventBuilder.card_deleted(
            card_id=card_id,
            correlation_id=correlation_id,
        ))

    def log_card_marked_used(
        self,
        card_id: str,
        used_at: datetime,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.card_marked_used(
            card_id=card_id,
            used_at=used_at,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        card_id: Optional[str],
        operation: str,
        issue: dict,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a rejected write."""
        self.log(AuditEventBuilder.validation_failed(
            card_id=card_id,
            operation=operation,
            issue=issue,
            correlation_id=correlation_id,
        ))

    def log_card_not_found(
        self,
        card_id: str,
        operation: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.card_not_found(
            card_id=card_id,
            operation=operation,
            correlation_id=correlation_id,
        ))

    def log_suggestion_generated(
        self,
        card_id: str,
        category: str,
        amount: float,
        score: float,
        candidate_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a recommendation."""
        self.log(AuditEventBuilder.suggestion_generated(
            card_id=card_id,
            category=category,
            amount=amount,
            score=score,
            candidate_count=candidate_count,
            correlation_id=correlation_id,
        ))

    def log_no_suggestion(
        self,
        category: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.no_suggestion(
            category=category,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., asking for a suggestion)
    and pass it through the follow-up calls.
    """
    return uuid4()
