"""
Card Store

DESIGN DECISION: CardStore is the single owner of the card collection.
No other component writes cards directly; the storage backend is only
reached through this class.

GUARANTEES:
- Every write is validated first; a rejected write changes nothing
- All operations are serialized on a per-store lock, so read-modify-write
  sequences (mark_used) cannot interleave and lose updates
- Reads return copies; callers cannot mutate the store through them
- last_used is only set by mark_used
"""

import threading
from collections.abc import Callable
from datetime import datetime
from typing import Optional
from uuid import UUID

from smartwallet.audit import AuditLogger
from smartwallet.models.card import Card, as_utc, utc_now
from smartwallet.services.storage import (
    CardStorageInterface,
    InMemoryCardStorage,
    NotFoundError,
)
from smartwallet.validation import (
    ValidationError,
    duplicate_id_error,
    validate_card,
)


class CardStore:
    """
    Validated, thread-safe access to the user's cards.

    Operations:
    - list()          -> snapshot of all cards
    - add(card)       -> validated insert
    - update(card)    -> validated in-place replace
    - delete(card_id) -> remove
    - get_by_id(id)   -> card or None
    - mark_used(id)   -> stamp last_used with the current time
    """

    def __init__(
        self,
        storage: Optional[CardStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the store.

        Args:
            storage: Backend holding the cards. Defaults to in-memory.
            audit_logger: Receives an event for every write and rejection.
            clock: Source of "now" for mark_used.
        """
        self._storage = storage if storage is not None else InMemoryCardStorage()
        self._audit_logger = audit_logger
        self._clock = clock
        self._lock = threading.RLock()

    def list(self) -> list[Card]:
        """Return a snapshot of all cards in insertion order."""
        with self._lock:
            return self._storage.load_all()

    def get_by_id(self, card_id: str) -> Optional[Card]:
        """Return the card with this ID, or None."""
        with self._lock:
            return self._storage.get(card_id)

    def add(
        self,
        card: Card,
        correlation_id: Optional[UUID] = None,
    ) -> Card:
        """
        Validate and insert a new card.

        Raises:
            ValidationError: If the card is malformed or its ID is taken
        """
        with self._lock:
            self._validate(card, "add", correlation_id)
            if self._storage.exists(card.id):
                error = duplicate_id_error(card.id)
                self._audit_rejection(card, "add", error, correlation_id)
                raise error

            self._storage.insert(card)

        if self._audit_logger:
            self._audit_logger.log_card_added(
                card_id=card.id,
                name=card.name,
                masked_number=card.masked_number,
                correlation_id=correlation_id,
            )
        return card

    def update(
        self,
        card: Card,
        correlation_id: Optional[UUID] = None,
    ) -> Card:
        """
        Validate and replace an existing card in place.

        Raises:
            ValidationError: If the card is malformed
            NotFoundError: If no card has this ID
        """
        with self._lock:
            self._validate(card, "update", correlation_id)
            self._require(card.id, "update", correlation_id)
            self._storage.replace(card)

        if self._audit_logger:
            self._audit_logger.log_card_updated(
                card_id=card.id,
                name=card.name,
                correlation_id=correlation_id,
            )
        return card

    def delete(
        self,
        card_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Remove a card.

        Raises:
            NotFoundError: If no card has this ID
        """
        with self._lock:
            self._require(card_id, "delete", correlation_id)
            self._storage.remove(card_id)

        if self._audit_logger:
            self._audit_logger.log_card_deleted(
                card_id=card_id,
                correlation_id=correlation_id,
            )
        return True

    def mark_used(
        self,
        card_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> Card:
        """
        Record that a card was just used.

        The read and the write happen under one lock acquisition.

        Raises:
            NotFoundError: If no card has this ID
        """
        with self._lock:
            card = self._require(card_id, "mark_used", correlation_id)
            used_at = as_utc(self._clock())
            # Never move last_used backwards, even if the clock does
            if card.last_used is not None and used_at < as_utc(card.last_used):
                used_at = as_utc(card.last_used)
            updated = self.update(
                card.model_copy(update={"last_used": used_at}),
                correlation_id=correlation_id,
            )

        if self._audit_logger:
            self._audit_logger.log_card_marked_used(
                card_id=card_id,
                used_at=used_at,
                correlation_id=correlation_id,
            )
        return updated

    def _validate(
        self,
        card: Card,
        operation: str,
        correlation_id: Optional[UUID],
    ) -> None:
        try:
            validate_card(card)
        except ValidationError as e:
            self._audit_rejection(card, operation, e, correlation_id)
            raise

    def _require(
        self,
        card_id: str,
        operation: str,
        correlation_id: Optional[UUID],
    ) -> Card:
        card = self._storage.get(card_id)
        if card is None:
            if self._audit_logger:
                self._audit_logger.log_card_not_found(
                    card_id=card_id,
                    operation=operation,
                    correlation_id=correlation_id,
                )
            raise NotFoundError(card_id)
        return card

    def _audit_rejection(
        self,
        card: Card,
        operation: str,
        error: ValidationError,
        correlation_id: Optional[UUID],
    ) -> None:
        if self._audit_logger:
            self._audit_logger.log_validation_failed(
                card_id=card.id,
                operation=operation,
                issue=error.issue.model_dump(),
                correlation_id=correlation_id,
            )
