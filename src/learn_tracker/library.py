"""Topic and flashcard collection editing.

Every function takes the caller's lists and returns new ones; inputs are
never modified.
"""
import logging
from typing import Optional

from learn_tracker.errors import UnknownTopicError
from learn_tracker.models import Flashcard, Topic, validate_mastery

logger = logging.getLogger(__name__)


def find_topic(topics: list, topic_id: str) -> Optional[Topic]:
    return next((t for t in topics if t.id == topic_id), None)


def topic_title(topics: list, topic_id: str) -> str:
    topic = find_topic(topics, topic_id)
    return topic.title if topic else "Unknown"


def _require_topic(topics: list, topic_id: str) -> Topic:
    topic = find_topic(topics, topic_id)
    if topic is None:
        logger.warning("Rejected reference to unknown topic %s", topic_id)
        raise UnknownTopicError(topic_id)
    return topic


def add_topic(topics: list, topic: Topic) -> list:
    validate_mastery(topic.mastery)
    return [*topics, topic]


def update_topic(topics: list, topic: Topic) -> list:
    _require_topic(topics, topic.id)
    validate_mastery(topic.mastery)
    return [topic if t.id == topic.id else t for t in topics]


def delete_topic(topics: list, cards: list, topic_id: str) -> tuple[list, list]:
    """Remove a topic and every flashcard it owns.

    Both returned lists must be saved for the delete to stick.
    """
    _require_topic(topics, topic_id)
    remaining_topics = [t for t in topics if t.id != topic_id]
    remaining_cards = [c for c in cards if c.topic_id != topic_id]
    logger.info(
        "Deleted topic %s and %d flashcards",
        topic_id, len(cards) - len(remaining_cards),
    )
    return remaining_topics, remaining_cards


def add_flashcard(topics: list, cards: list, card: Flashcard) -> list:
    _require_topic(topics, card.topic_id)
    return [*cards, card]


def update_flashcard(topics: list, cards: list, card: Flashcard) -> list:
    _require_topic(topics, card.topic_id)
    if not any(c.id == card.id for c in cards):
        raise LookupError(f"Unknown flashcard: {card.id}")
    return [card if c.id == card.id else c for c in cards]
