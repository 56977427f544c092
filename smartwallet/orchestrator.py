"""
Main Orchestrator for SmartWallet

This module ties the components together and defines the end-to-end
recommendation flow:
1. Read cards from the store
2. Score them against the transaction
3. Return the suggestion to the caller (the UI)
4. If the user picks the suggested card, mark it as used

DESIGN DECISION: The orchestrator enforces the boundaries:
- The suggestion engine only ever sees a snapshot, never the store
- Only the store changes cards (via mark_used)
- Every recommendation is audited

This is the surface the presentation layer calls.
"""

from typing import Optional
from uuid import UUID

from smartwallet.audit import AuditLogger, configure_logging, create_correlation_id
from smartwallet.config import Settings, get_settings
from smartwallet.models.card import Card, CardSuggestion, ScoredCard, Transaction
from smartwallet.services.card_store import CardStore
from smartwallet.services.storage import (
    InMemoryAuditStorage,
    InMemoryCardStorage,
    NotFoundError,
)
from smartwallet.services.suggestion_engine import SuggestionEngine


class WalletAssistant:
    """
    Orchestrates card recommendations.

    Flow:
    1. recommend(transaction) -> suggestion (or None without cards)
    2. User decides
    3. accept(suggestion) -> card stamped as recently used
    """

    def __init__(
        self,
        store: Optional[CardStore] = None,
        engine: Optional[SuggestionEngine] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._audit_logger = audit_logger
        self._store = store or CardStore(audit_logger=audit_logger)
        self._engine = engine or SuggestionEngine()

    @property
    def store(self) -> CardStore:
        return self._store

    @property
    def engine(self) -> SuggestionEngine:
        return self._engine

    def recommend(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[CardSuggestion]:
        """
        Suggest the best stored card for a transaction.

        Returns None when the wallet is empty.
        """
        correlation_id = correlation_id or create_correlation_id()
        cards = self._store.list()
        suggestion = self._engine.suggest(transaction, cards)

        if self._audit_logger:
            if suggestion is None:
                self._audit_logger.log_no_suggestion(
                    category=transaction.category.value,
                    amount=transaction.amount,
                    correlation_id=correlation_id,
                )
            else:
                self._audit_logger.log_suggestion_generated(
                    card_id=suggestion.card.id,
                    category=transaction.category.value,
                    amount=transaction.amount,
                    score=suggestion.score,
                    candidate_count=len(cards),
                    correlation_id=correlation_id,
                )

        return suggestion

    def rank(self, transaction: Transaction) -> list[ScoredCard]:
        """All stored cards ordered best first, with score breakdowns."""
        return self._engine.rank(transaction, self._store.list())

    def record_usage(
        self,
        card_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> Card:
        """
        Mark a card as used for a purchase.

        Raises:
            NotFoundError: If the card was deleted in the meantime
        """
        try:
            return self._store.mark_used(card_id, correlation_id=correlation_id)
        except NotFoundError as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type="usage_for_missing_card",
                    error_message=str(e),
                    details={"card_id": card_id},
                    correlation_id=correlation_id,
                )
            raise

    def accept(
        self,
        suggestion: CardSuggestion,
        correlation_id: Optional[UUID] = None,
    ) -> Card:
        """The user went with the suggested card."""
        return self.record_usage(suggestion.card.id, correlation_id=correlation_id)


def create_assistant(settings: Optional[Settings] = None) -> WalletAssistant:
    """
    Build a WalletAssistant wired from settings.

    Uses the in-memory backends; the only storage backend currently supported.
    """
    settings = settings or get_settings()
    app_settings = settings.app

    configure_logging(app_settings.effective_log_level)

    audit_logger = AuditLogger(storage=InMemoryAuditStorage())
    store = CardStore(
        storage=InMemoryCardStorage(),
        audit_logger=audit_logger,
    )
    engine = SuggestionEngine(settings=settings.scoring)

    return WalletAssistant(
        store=store,
        engine=engine,
        audit_logger=audit_logger,
    )
