"""Integration tests for the WalletAssistant flow."""

import pytest

from smartwallet.audit import create_correlation_id
from smartwallet.models.audit import AuditEventType
from smartwallet.models.card import Category, Transaction
from smartwallet.orchestrator import WalletAssistant, create_assistant
from smartwallet.services.storage import NotFoundError


@pytest.fixture
def assistant(store, engine, audit_logger) -> WalletAssistant:
    return WalletAssistant(store=store, engine=engine, audit_logger=audit_logger)


class TestRecommendFlow:
    """Read cards -> suggest -> mark used."""

    def test_recommend_from_stored_cards(self, assistant, card_factory):
        assistant.store.add(card_factory(id="a", name="A", cashback={Category.DINING: 3}))
        assistant.store.add(card_factory(
            id="b",
            name="B",
            cashback={Category.DINING: 0, Category.OTHER: 1},
        ))

        suggestion = assistant.recommend(Transaction(category=Category.DINING, amount=100))

        assert suggestion.card.id == "a"
        assert suggestion.cashback_amount == pytest.approx(3.0)

    def test_recommend_with_empty_wallet(self, assistant, audit_storage):
        """Test an empty wallet is a normal outcome, audited as such."""
        suggestion = assistant.recommend(Transaction(category=Category.TRAVEL, amount=10))

        assert suggestion is None
        latest = audit_storage.get_recent_events(limit=1)[0]
        assert latest.event_type == AuditEventType.NO_SUGGESTION

    def test_accept_marks_card_used(self, assistant, card_factory, clock, audit_storage):
        assistant.store.add(card_factory(cashback={Category.DINING: 2}))
        correlation_id = create_correlation_id()

        suggestion = assistant.recommend(
            Transaction(category=Category.DINING, amount=20),
            correlation_id=correlation_id,
        )
        card = assistant.accept(suggestion, correlation_id=correlation_id)

        assert card.last_used == clock.now
        assert assistant.store.get_by_id(card.id).last_used == clock.now
        types = [
            e.event_type
            for e in audit_storage.get_events_by_correlation_id(correlation_id)
        ]
        assert types[0] == AuditEventType.SUGGESTION_GENERATED
        assert types[-1] == AuditEventType.CARD_MARKED_USED

    def test_accept_after_delete_raises(self, assistant, card_factory, audit_storage):
        assistant.store.add(card_factory())
        suggestion = assistant.recommend(Transaction(category=Category.DINING, amount=20))
        assistant.store.delete(suggestion.card.id)

        with pytest.raises(NotFoundError):
            assistant.accept(suggestion)

        latest = audit_storage.get_recent_events(limit=1)[0]
        assert latest.event_type == AuditEventType.SYSTEM_ERROR

    def test_recently_used_card_wins_tie(self, assistant, card_factory):
        assistant.store.add(card_factory(id="a", cashback={Category.DINING: 2}))
        assistant.store.add(card_factory(id="b", cashback={Category.DINING: 2}))
        txn = Transaction(category=Category.DINING, amount=20)

        assert assistant.recommend(txn).card.id == "a"
        assistant.record_usage("b")
        assert assistant.recommend(txn).card.id == "b"

    def test_rank_covers_all_cards(self, assistant, card_factory):
        assistant.store.add(card_factory(id="a"))
        assistant.store.add(card_factory(id="b", perks={Category.TRAVEL: ["Lounge access"]}))

        ranked = assistant.rank(Transaction(category=Category.TRAVEL, amount=300))

        assert [r.card.id for r in ranked] == ["b", "a"]
        assert ranked[0].breakdown.perk_points == 5


class TestCreateAssistant:
    """Factory wiring."""

    def test_create_assistant_defaults(self, card_factory):
        assistant = create_assistant()
        assistant.store.add(card_factory(cashback={Category.OTHER: 1}))

        suggestion = assistant.recommend(Transaction(category=Category.SHOPPING, amount=40))

        assert suggestion.reason == "Everyday Card offers 1% cashback on shopping purchases."
        assert assistant.engine.weights.direct_cashback_weight == 10
