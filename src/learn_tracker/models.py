"""Data classes for the learning tracker domain model."""
import random
import string
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from learn_tracker.errors import InvalidInputError

DEFAULT_CATEGORY = "Other"

CATEGORIES = [
    "Python",
    "Machine Learning",
    "Deep Learning",
    "NLP",
    "Computer Vision",
    "Math",
    "Data Science",
    "Prompt Engineering",
    "Tools & Libraries",
    DEFAULT_CATEGORY,
]

DEFAULT_EASE_FACTOR = 2.5

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_id() -> str:
    """Return an id unique within one user's data (not cryptographically)."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{millis}-{suffix}"


def validate_mastery(mastery) -> int:
    if isinstance(mastery, bool) or not isinstance(mastery, int) or not 0 <= mastery <= 100:
        raise InvalidInputError(f"Mastery must be an integer from 0 to 100, got {mastery!r}")
    return mastery


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _format_time(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class Topic:
    id: str
    title: str
    date_added: datetime
    description: str = ""
    category: str = DEFAULT_CATEGORY
    mastery: int = 0
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "dateAdded": _format_time(self.date_added),
            "mastery": self.mastery,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Topic":
        return cls(
            id=data["id"],
            title=data["title"],
            date_added=_parse_time(data["dateAdded"]),
            description=data.get("description", ""),
            category=data.get("category") or DEFAULT_CATEGORY,
            mastery=data.get("mastery", 0),
            notes=data.get("notes"),
        )


@dataclass
class Flashcard:
    id: str
    topic_id: str
    question: str
    answer: str
    next_review: datetime
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    repetitions: int = 0
    last_review: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "topicId": self.topic_id,
            "question": self.question,
            "answer": self.answer,
            "easeFactor": self.ease_factor,
            "interval": self.interval,
            "repetitions": self.repetitions,
            "nextReview": _format_time(self.next_review),
        }
        if self.last_review is not None:
            data["lastReview"] = _format_time(self.last_review)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Flashcard":
        return cls(
            id=data["id"],
            topic_id=data["topicId"],
            question=data["question"],
            answer=data["answer"],
            next_review=_parse_time(data["nextReview"]),
            ease_factor=data.get("easeFactor", DEFAULT_EASE_FACTOR),
            interval=data.get("interval", 0),
            repetitions=data.get("repetitions", 0),
            last_review=_parse_time(data.get("lastReview")),
        )


def create_topic(
    title: str,
    description: str = "",
    category: str = DEFAULT_CATEGORY,
    mastery: int = 0,
    notes: Optional[str] = None,
    *,
    now: datetime,
    id_factory: Callable[[], str] = new_id,
) -> Topic:
    return Topic(
        id=id_factory(),
        title=title,
        date_added=now,
        description=description,
        category=category or DEFAULT_CATEGORY,
        mastery=validate_mastery(mastery),
        notes=notes or None,
    )


def create_flashcard(
    topic_id: str,
    question: str,
    answer: str,
    *,
    now: datetime,
    id_factory: Callable[[], str] = new_id,
) -> Flashcard:
    """New card with default scheduling state, due immediately."""
    return Flashcard(
        id=id_factory(),
        topic_id=topic_id,
        question=question,
        answer=answer,
        next_review=now,
    )
