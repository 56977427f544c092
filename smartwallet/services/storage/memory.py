"""
In-Memory Storage Implementation

Cards live in an insertion-ordered dict keyed by card ID. Every read and
write goes through a deep copy, so callers can never reach the stored
objects.

TRADEOFFS:
- Nothing survives a restart
- No locking here; CardStore serializes access

The implementation follows the abstract interface, so an encrypted-disk
or remote backend can replace it without changing business logic.
"""

from typing import Optional
from uuid import UUID

from smartwallet.models.card import Card
from smartwallet.models.audit import AuditEvent
from smartwallet.services.storage.interface import (
    AuditStorageInterface,
    CardStorageInterface,
    DuplicateError,
    NotFoundError,
)


class InMemoryCardStorage(CardStorageInterface):
    """Dict-backed card storage."""

    def __init__(self):
        self._cards: dict[str, Card] = {}

    def load_all(self) -> list[Card]:
        return [card.model_copy(deep=True) for card in self._cards.values()]

    def get(self, card_id: str) -> Optional[Card]:
        card = self._cards.get(card_id)
        return card.model_copy(deep=True) if card is not None else None

    def insert(self, card: Card) -> None:
        if card.id in self._cards:
            raise DuplicateError(card.id)
        self._cards[card.id] = card.model_copy(deep=True)

    def replace(self, card: Card) -> None:
        if card.id not in self._cards:
            raise NotFoundError(card.id)
        # Reassigning an existing key keeps its position in the dict
        self._cards[card.id] = card.model_copy(deep=True)

    def remove(self, card_id: str) -> None:
        if card_id not in self._cards:
            raise NotFoundError(card_id)
        del self._cards[card_id]

    def exists(self, card_id: str) -> bool:
        return card_id in self._cards


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
