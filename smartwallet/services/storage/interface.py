"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep cards in memory today and move to encrypted disk or a remote
   store later without touching the card store
2. Use a trivial backend in tests
3. Keep validation and locking out of the backends

The interface is intentionally small - a keyed, insertion-ordered record
set. Validation, locking and auditing live in CardStore, above it.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from smartwallet.models.card import Card
from smartwallet.models.audit import AuditEvent


class CardStorageInterface(ABC):
    """
    Abstract interface for card persistence.

    Any backend (memory, encrypted file, key-value store, ...) must
    implement these methods and keep insertion order for load_all().
    """

    @abstractmethod
    def load_all(self) -> list[Card]:
        """
        Return every stored card in insertion order.

        Returned cards must be copies; mutating them must not change storage.
        """
        pass

    @abstractmethod
    def get(self, card_id: str) -> Optional[Card]:
        """
        Retrieve a card by its ID.

        Returns:
            A copy of the card if found, None otherwise
        """
        pass

    @abstractmethod
    def insert(self, card: Card) -> None:
        """
        Append a new card.

        Raises:
            DuplicateError: If a card with the same ID exists
        """
        pass

    @abstractmethod
    def replace(self, card: Card) -> None:
        """
        Replace an existing card, keeping its position.

        Raises:
            NotFoundError: If no card has this ID
        """
        pass

    @abstractmethod
    def remove(self, card_id: str) -> None:
        """
        Remove a card by ID.

        Raises:
            NotFoundError: If no card has this ID
        """
        pass

    def exists(self, card_id: str) -> bool:
        """Check whether a card with this ID is stored."""
        return self.get(card_id) is not None


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """Get all events for a correlation ID, oldest first."""
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """Get all events for a specific entity, oldest first."""
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """Get the most recent audit events (newest first)."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Card not found in storage."""

    def __init__(self, card_id: str):
        super().__init__(f"Card with ID {card_id} not found")
        self.card_id = card_id


class DuplicateError(StorageError):
    """Attempted to insert a card whose ID is already stored."""

    def __init__(self, card_id: str):
        super().__init__(f"Card with ID {card_id} already exists")
        self.card_id = card_id
