"""
Card Suggestion Engine

DESIGN DECISION: Suggestions are DETERMINISTIC and rule-based.
Scoring is a pure function of (card, transaction, now); the engine holds
no mutable state and may be called concurrently without locking.

Score (additive, no normalization):
1. Cashback: the category's own rate if present and > 0, weighted x10;
   otherwise the OTHER rate if present, weighted x5
2. +5 if the card has perks for the category
3. +3 if the cardholder tagged the card with the category
4. +1 if the card was used within the last 7 days

Cashback dominates the ordering; perks, preference and recency only
break near-ties.
"""

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from typing import Optional

from smartwallet.config import ScoringSettings, get_settings
from smartwallet.models.card import (
    Card,
    CardSuggestion,
    Category,
    ScoreBreakdown,
    ScoredCard,
    Transaction,
    as_utc,
    utc_now,
)


def effective_cashback_rate(card: Card, category: Category) -> tuple[float, bool]:
    """
    Cashback rate that applies to a purchase category.

    Returns:
        (rate, used_fallback) - used_fallback is True when the rate came
        from the OTHER bucket rather than the category itself.
    """
    direct = card.cashback_rate_for(category)
    if direct is not None and direct > 0:
        return direct, False

    fallback = card.cashback_rate_for(Category.OTHER)
    if fallback is not None:
        return fallback, True

    return 0.0, False


def has_perks(card: Card, category: Category) -> bool:
    perks = card.perks_for(category)
    return perks is not None and len(perks) > 0


def score_card(
    card: Card,
    transaction: Transaction,
    now: datetime,
    weights: ScoringSettings,
) -> ScoreBreakdown:
    """Score one card for one transaction."""
    category = transaction.category
    rate, used_fallback = effective_cashback_rate(card, category)
    weight = (
        weights.fallback_cashback_weight
        if used_fallback
        else weights.direct_cashback_weight
    )

    breakdown = ScoreBreakdown(
        cashback_rate=rate,
        used_fallback_rate=used_fallback,
        cashback_points=rate * weight,
    )

    if has_perks(card, category):
        breakdown.perk_points = weights.perk_bonus

    if category in card.categories:
        breakdown.category_points = weights.preferred_category_bonus

    if card.last_used is not None:
        # Cards built with model_copy skip validators; last_used may be naive
        age = as_utc(now) - as_utc(card.last_used)
        if age < timedelta(days=weights.recency_window_days):
            breakdown.recency_points = weights.recency_bonus

    return breakdown


def format_rate(rate: float) -> str:
    """Render a percentage without a trailing '.0' (3.0 -> '3', 1.5 -> '1.5')."""
    rate = float(rate)
    if rate.is_integer():
        return str(int(rate))
    return repr(rate)


def build_reason(card: Card, transaction: Transaction) -> str:
    """Human-readable explanation for suggesting this card."""
    category = transaction.category.value
    rate, _ = effective_cashback_rate(card, transaction.category)
    perks = has_perks(card, transaction.category)

    if rate > 0 and perks:
        return (
            f"{card.name} offers {format_rate(rate)}% cashback on {category} "
            f"purchases and has additional perks."
        )
    elif rate > 0:
        return f"{card.name} offers {format_rate(rate)}% cashback on {category} purchases."
    elif perks:
        return f"{card.name} offers special perks for {category} purchases."
    else:
        return f"{card.name} is the best option for this purchase."


class SuggestionEngine:
    """
    Picks the best card for a transaction.

    GUARANTEES:
    - No side effects; inputs are never modified
    - Ties keep input order (stable sort)
    - An empty card list yields None, never an error
    """

    def __init__(
        self,
        settings: Optional[ScoringSettings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._weights = settings or get_settings().scoring
        self._clock = clock

    @property
    def weights(self) -> ScoringSettings:
        return self._weights

    def rank(
        self,
        transaction: Transaction,
        cards: Sequence[Card],
        now: Optional[datetime] = None,
    ) -> list[ScoredCard]:
        """Score every card and order them best first."""
        if now is None:
            now = self._clock()
        else:
            now = as_utc(now)
        scored = [
            ScoredCard(
                card=card,
                breakdown=score_card(card, transaction, now, self._weights),
            )
            for card in cards
        ]
        # sorted() is stable: equal scores keep input order
        return sorted(scored, key=lambda item: item.score, reverse=True)

    def suggest(
        self,
        transaction: Transaction,
        cards: Sequence[Card],
        now: Optional[datetime] = None,
    ) -> Optional[CardSuggestion]:
        """
        Suggest the best card for a transaction.

        Returns None when there are no cards to choose from.
        """
        if not cards:
            return None

        best = self.rank(transaction, cards, now=now)[0]
        card = best.card
        rate = best.breakdown.cashback_rate

        cashback_amount = None
        if rate > 0:
            cashback_amount = transaction.amount * rate / 100

        perks = card.perks_for(transaction.category)

        return CardSuggestion(
            card=card,
            reason=build_reason(card, transaction),
            cashback_amount=cashback_amount,
            perks=list(perks) if perks is not None else None,
            score=best.score,
        )
