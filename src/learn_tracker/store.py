"""Persistence for the topic and flashcard collections.

Each collection is a JSON array stored under a fixed key. Saves overwrite the
whole collection; there is no transaction spanning the two keys, so callers
that change both (cascade delete) should use ``save_all``.
"""
import json
import logging
from datetime import datetime

from learn_tracker.config import DEFAULT_DB_PATH
from learn_tracker.db import get_connection, init_db
from learn_tracker.errors import StoreError
from learn_tracker.models import Flashcard, Topic

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "topics": "learn-tracker-topics",
    "flashcards": "learn-tracker-flashcards",
}


class LearningStore:
    """Load/save port. Subclasses provide raw key access."""

    def _read(self, key: str) -> str | None:
        raise NotImplementedError

    def _write(self, key: str, value: str) -> None:
        raise NotImplementedError

    def _load(self, key: str) -> list:
        raw = self._read(key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt data under {key!r}: {e}") from e
        if not isinstance(data, list):
            raise StoreError(f"Expected a list under {key!r}, got {type(data).__name__}")
        return data

    def load_topics(self) -> list:
        return [Topic.from_dict(d) for d in self._load(STORAGE_KEYS["topics"])]

    def load_flashcards(self) -> list:
        return [Flashcard.from_dict(d) for d in self._load(STORAGE_KEYS["flashcards"])]

    def save_topics(self, topics: list) -> None:
        self._write(STORAGE_KEYS["topics"], json.dumps([t.to_dict() for t in topics]))
        logger.info("Saved %d topics", len(topics))

    def save_flashcards(self, cards: list) -> None:
        self._write(STORAGE_KEYS["flashcards"], json.dumps([c.to_dict() for c in cards]))
        logger.info("Saved %d flashcards", len(cards))

    def save_all(self, topics: list, cards: list) -> None:
        self.save_topics(topics)
        self.save_flashcards(cards)


class MemoryStore(LearningStore):
    """In-process store, used by tests."""

    def __init__(self):
        self.data: dict[str, str] = {}

    def _read(self, key: str) -> str | None:
        return self.data.get(key)

    def _write(self, key: str, value: str) -> None:
        self.data[key] = value


class SqliteStore(LearningStore):
    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        init_db(db_path)

    def _read(self, key: str) -> str | None:
        conn = get_connection(self.db_path)
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        conn.close()
        return row["value"] if row else None

    def _write(self, key: str, value: str) -> None:
        now = datetime.now().isoformat()
        conn = get_connection(self.db_path)
        conn.execute(
            "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=?, updated_at=?",
            (key, value, now, value, now),
        )
        conn.commit()
        conn.close()
