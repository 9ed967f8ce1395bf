"""Tests for data model classes."""
from datetime import datetime

import pytest

from learn_tracker.errors import InvalidInputError
from learn_tracker.models import (
    CATEGORIES, Flashcard, Topic, create_flashcard, create_topic, new_id,
)

NOW = datetime(2024, 1, 10, 23, 0)


def test_create_flashcard_defaults():
    card = create_flashcard("t1", "What is a tensor?", "An n-d array", now=NOW, id_factory=lambda: "c1")
    assert card.id == "c1"
    assert card.topic_id == "t1"
    assert card.ease_factor == 2.5
    assert card.interval == 0
    assert card.repetitions == 0
    assert card.next_review == NOW
    assert card.last_review is None


def test_create_topic_defaults():
    topic = create_topic("Attention", now=NOW, id_factory=lambda: "t1")
    assert topic.id == "t1"
    assert topic.category == "Other"
    assert topic.mastery == 0
    assert topic.description == ""
    assert topic.notes is None
    assert topic.date_added == NOW


def test_create_topic_blank_category_becomes_other():
    topic = create_topic("Attention", category="", now=NOW)
    assert topic.category == "Other"


@pytest.mark.parametrize("mastery", [-1, 101, 50.5, "80"])
def test_create_topic_rejects_bad_mastery(mastery):
    with pytest.raises(InvalidInputError):
        create_topic("Attention", mastery=mastery, now=NOW)


def test_new_id_format_and_uniqueness():
    ids = {new_id() for _ in range(200)}
    assert len(ids) == 200
    millis, suffix = next(iter(ids)).split("-")
    assert millis.isdigit()
    assert len(suffix) == 9


def test_categories_end_with_other():
    assert CATEGORIES[-1] == "Other"
    assert "Python" in CATEGORIES


def test_flashcard_dict_keys():
    card = Flashcard(id="c1", topic_id="t1", question="Q", answer="A", next_review=NOW)
    data = card.to_dict()
    assert data == {
        "id": "c1",
        "topicId": "t1",
        "question": "Q",
        "answer": "A",
        "easeFactor": 2.5,
        "interval": 0,
        "repetitions": 0,
        "nextReview": "2024-01-10T23:00:00",
    }


def test_flashcard_from_dict_with_last_review():
    card = Flashcard.from_dict({
        "id": "c1", "topicId": "t1", "question": "Q", "answer": "A",
        "easeFactor": 2.6, "interval": 6, "repetitions": 2,
        "nextReview": "2024-01-16T09:00:00", "lastReview": "2024-01-10T09:00:00",
    })
    assert card.ease_factor == 2.6
    assert card.next_review == datetime(2024, 1, 16, 9, 0)
    assert card.last_review == datetime(2024, 1, 10, 9, 0)


def test_topic_from_dict_defaults_missing_fields():
    topic = Topic.from_dict({"id": "t1", "title": "RAG", "dateAdded": "2024-01-10T23:00:00"})
    assert topic.category == "Other"
    assert topic.mastery == 0
    assert topic.notes is None


def test_topic_to_dict_omits_missing_notes():
    topic = Topic(id="t1", title="RAG", date_added=NOW)
    assert "notes" not in topic.to_dict()
    topic.notes = "read the paper"
    assert topic.to_dict()["notes"] == "read the paper"
