from datetime import datetime

import pytest

from learn_tracker.models import Flashcard, Topic
from learn_tracker.store import MemoryStore

NOW = datetime(2024, 1, 10, 9, 30)


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tracker.db")
    return db_path


@pytest.fixture
def store():
    return MemoryStore()


def make_topic(id="t1", title="Transformers", mastery=50, category="Deep Learning"):
    return Topic(id=id, title=title, date_added=NOW, category=category, mastery=mastery)


def make_card(id="c1", topic_id="t1", next_review=NOW, **kwargs):
    return Flashcard(
        id=id, topic_id=topic_id, question=f"Q {id}?", answer=f"A {id}",
        next_review=next_review, **kwargs,
    )
