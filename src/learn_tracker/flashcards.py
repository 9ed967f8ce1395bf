"""Review queue selection and SM-2 rating application."""
from dataclasses import replace
from datetime import datetime, timedelta

from learn_tracker.models import Flashcard
from learn_tracker.sm2 import next_state


def is_due(card: Flashcard, reference_time: datetime) -> bool:
    # Day-level batching: time of day is ignored on both sides
    return card.next_review.date() <= reference_time.date()


def get_due_cards(cards: list, reference_time: datetime) -> list:
    """Cards due on or before the reference date, in input order."""
    return [card for card in cards if is_due(card, reference_time)]


def cards_for_topic(cards: list, topic_id: str) -> list:
    return [card for card in cards if card.topic_id == topic_id]


def apply_rating(card: Flashcard, quality: int, now: datetime) -> Flashcard:
    """Return a copy of *card* rescheduled for a *quality* rating given at *now*."""
    updated = next_state(card, quality)
    return replace(
        card,
        ease_factor=updated["ease_factor"],
        interval=updated["interval"],
        repetitions=updated["repetitions"],
        next_review=now + timedelta(days=updated["interval"]),
        last_review=now,
    )


def replace_card(cards: list, updated: Flashcard) -> list:
    return [updated if card.id == updated.id else card for card in cards]
