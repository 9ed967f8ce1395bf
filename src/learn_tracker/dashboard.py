"""Dashboard statistics for topics and flashcards."""
import math
from datetime import datetime

from learn_tracker.flashcards import get_due_cards
from learn_tracker.models import DEFAULT_CATEGORY


def get_mastery_label(score: float) -> str:
    if score >= 80:
        return "MASTERED"
    elif score >= 50:
        return "PROFICIENT"
    elif score >= 20:
        return "LEARNING"
    return "NEW"


def get_mastery_color(score: float) -> str:
    if score >= 80:
        return "green"
    elif score >= 50:
        return "yellow"
    elif score >= 20:
        return "dark_orange"
    return "red"


def summarize(topics: list, cards: list, now: datetime) -> dict:
    if topics:
        mean = sum(t.mastery for t in topics) / len(topics)
        average_mastery = math.floor(mean + 0.5)
    else:
        average_mastery = 0
    return {
        "total_topics": len(topics),
        "total_cards": len(cards),
        "cards_to_review": len(get_due_cards(cards, now)),
        "average_mastery": average_mastery,
        # Streak tracking is not implemented
        "streak_days": 0,
    }


def topics_by_category(topics: list) -> dict:
    """Group topics by category, keeping first-seen category order."""
    groups: dict = {}
    for topic in topics:
        groups.setdefault(topic.category or DEFAULT_CATEGORY, []).append(topic)
    return groups


def flashcard_counts(cards: list) -> dict:
    counts: dict = {}
    for card in cards:
        counts[card.topic_id] = counts.get(card.topic_id, 0) + 1
    return counts
