"""Shared fixtures for SmartWallet tests."""

from datetime import datetime, timezone

import pytest

from smartwallet.audit import AuditLogger
from smartwallet.config import ScoringSettings
from smartwallet.models.card import Card, CardType
from smartwallet.services.card_store import CardStore
from smartwallet.services.storage import InMemoryAuditStorage, InMemoryCardStorage
from smartwallet.services.suggestion_engine import SuggestionEngine


FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_card(**overrides) -> Card:
    """Build a valid card, overriding any field."""
    fields = {
        "id": "card-1",
        "name": "Everyday Card",
        "number": "4111 1111 1111 1111",
        "expiry": "12/27",
        "cvv": "123",
        "cardholder_name": "Jane Doe",
        "type": CardType.VISA,
    }
    fields.update(overrides)
    return Card(**fields)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def card_factory():
    return make_card


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage) -> AuditLogger:
    return AuditLogger(storage=audit_storage)


@pytest.fixture
def store(audit_logger, clock) -> CardStore:
    return CardStore(
        storage=InMemoryCardStorage(),
        audit_logger=audit_logger,
        clock=clock,
    )


@pytest.fixture
def engine(clock) -> SuggestionEngine:
    return SuggestionEngine(settings=ScoringSettings(), clock=clock)
