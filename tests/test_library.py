"""Tests for topic and flashcard collection editing."""
import copy
from dataclasses import replace

import pytest

from learn_tracker.errors import InvalidInputError, UnknownTopicError
from learn_tracker.library import (
    add_flashcard, add_topic, delete_topic, find_topic, topic_title,
    update_flashcard, update_topic,
)
from conftest import make_card, make_topic


@pytest.fixture
def topics():
    return [make_topic("t1", "Transformers"), make_topic("t2", "Pandas")]


@pytest.fixture
def cards():
    return [
        make_card("a", "t1"),
        make_card("b", "t2", repetitions=3, interval=15, ease_factor=2.7),
        make_card("c", "t1"),
        make_card("d", "t2"),
    ]


def test_delete_topic_cascades(topics, cards):
    before = copy.deepcopy(cards)
    new_topics, new_cards = delete_topic(topics, cards, "t1")
    assert [t.id for t in new_topics] == ["t2"]
    assert [c.id for c in new_cards] == ["b", "d"]
    # Surviving cards are untouched
    assert new_cards == [before[1], before[3]]
    # Inputs unchanged
    assert len(topics) == 2
    assert len(cards) == 4


def test_delete_topic_without_cards(topics, cards):
    topics = [*topics, make_topic("t3", "Empty")]
    new_topics, new_cards = delete_topic(topics, cards, "t3")
    assert len(new_topics) == 2
    assert new_cards == cards


def test_delete_unknown_topic_raises(topics, cards):
    with pytest.raises(UnknownTopicError):
        delete_topic(topics, cards, "missing")


def test_add_flashcard_requires_live_topic(topics, cards):
    with pytest.raises(UnknownTopicError) as exc:
        add_flashcard(topics, cards, make_card("z", "ghost"))
    assert exc.value.topic_id == "ghost"


def test_add_flashcard_appends(topics, cards):
    result = add_flashcard(topics, cards, make_card("z", "t2"))
    assert [c.id for c in result] == ["a", "b", "c", "d", "z"]
    assert len(cards) == 4


def test_update_flashcard_to_unknown_topic_raises(topics, cards):
    moved = replace(cards[0], topic_id="ghost")
    with pytest.raises(UnknownTopicError):
        update_flashcard(topics, cards, moved)


def test_update_flashcard_replaces_by_id(topics, cards):
    edited = make_card("c", "t2")
    result = update_flashcard(topics, cards, edited)
    assert result[2] is edited


def test_update_topic(topics):
    edited = make_topic("t2", "Polars", mastery=90)
    result = update_topic(topics, edited)
    assert find_topic(result, "t2").title == "Polars"
    assert find_topic(topics, "t2").title == "Pandas"


def test_update_unknown_topic_raises(topics):
    with pytest.raises(UnknownTopicError):
        update_topic(topics, make_topic("t9"))


def test_update_topic_rejects_bad_mastery(topics):
    with pytest.raises(InvalidInputError):
        update_topic(topics, make_topic("t1", mastery=150))


def test_add_topic(topics):
    result = add_topic(topics, make_topic("t3", "NumPy"))
    assert [t.id for t in result] == ["t1", "t2", "t3"]


def test_topic_title_unknown(topics):
    assert topic_title(topics, "t1") == "Transformers"
    assert topic_title(topics, "nope") == "Unknown"
