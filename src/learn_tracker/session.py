"""Quiz session state machine.

A session walks a snapshot of the deck taken at start/restart time:

    IDLE --start--> PRESENTING(0) --flip--> FLIPPED(i) --rate--> PRESENTING(i+1)
                                                       \\--rate (last)--> COMPLETED

Cards that become due while a session is running are not added to it; they
show up the next time a deck is selected.
"""
import enum
import logging
from datetime import datetime
from typing import Callable, Optional

from learn_tracker.errors import EmptyDeckError, SessionStateError
from learn_tracker.flashcards import apply_rating, get_due_cards
from learn_tracker.models import Flashcard
from learn_tracker.sm2 import validate_quality

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    FLIPPED = "flipped"
    COMPLETED = "completed"


class DeckMode(enum.Enum):
    DUE = "due"
    ALL = "all"


def select_deck(cards: list, mode: DeckMode, reference_time: datetime) -> list:
    if mode is DeckMode.DUE:
        return get_due_cards(cards, reference_time)
    return list(cards)


class QuizSession:
    """One quiz run over a fixed deck.

    ``clock`` supplies the review time for each rating. ``on_rated`` is called
    with every rescheduled card so the caller can persist it.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        on_rated: Optional[Callable[[Flashcard], None]] = None,
        mode: DeckMode = DeckMode.DUE,
    ):
        self._clock = clock
        self._on_rated = on_rated
        self._mode = mode
        self._deck: tuple = ()
        self._index = 0
        self._state = SessionState.IDLE
        self._reviewed_count = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def mode(self) -> DeckMode:
        return self._mode

    @property
    def deck(self) -> tuple:
        return self._deck

    @property
    def index(self) -> int:
        return self._index

    @property
    def flipped(self) -> bool:
        return self._state is SessionState.FLIPPED

    @property
    def reviewed_count(self) -> int:
        return self._reviewed_count

    @property
    def is_complete(self) -> bool:
        return self._state is SessionState.COMPLETED

    @property
    def remaining(self) -> int:
        if self._state in (SessionState.IDLE, SessionState.COMPLETED):
            return 0
        return len(self._deck) - self._index

    @property
    def current_card(self) -> Optional[Flashcard]:
        if self._state in (SessionState.PRESENTING, SessionState.FLIPPED):
            return self._deck[self._index]
        return None

    def start(self, deck: list) -> None:
        """Begin a run over *deck*. Raises EmptyDeckError when there is nothing to review."""
        snapshot = tuple(deck)
        if not snapshot:
            self._deck = ()
            self._index = 0
            self._reviewed_count = 0
            self._state = SessionState.IDLE
            raise EmptyDeckError()
        self._deck = snapshot
        self._index = 0
        self._reviewed_count = 0
        self._state = SessionState.PRESENTING
        logger.debug("Session started with %d cards (%s)", len(snapshot), self._mode.value)

    def restart(self, deck: Optional[list] = None) -> None:
        """Go back to the first card, re-snapshotting from *deck* when given."""
        self.start(self._deck if deck is None else deck)

    def switch_mode(self, mode: DeckMode, cards: list, reference_time: datetime) -> None:
        self._mode = mode
        self.restart(select_deck(cards, mode, reference_time))

    def flip(self) -> None:
        if self._state is SessionState.PRESENTING:
            self._state = SessionState.FLIPPED

    def rate(self, quality: int) -> Flashcard:
        """Reschedule the current card and advance. Only valid after a flip."""
        if self._state is not SessionState.FLIPPED:
            raise SessionStateError(f"Cannot rate a card while {self._state.value}")
        validate_quality(quality)

        card = self._deck[self._index]
        updated = apply_rating(card, quality, self._clock())
        if self._on_rated is not None:
            self._on_rated(updated)
        self._reviewed_count += 1
        logger.debug(
            "Rated card %s quality=%d -> interval=%d ef=%.2f",
            card.id, quality, updated.interval, updated.ease_factor,
        )

        if self._index >= len(self._deck) - 1:
            self._state = SessionState.COMPLETED
            logger.info("Session complete, %d cards reviewed", self._reviewed_count)
        else:
            self._index += 1
            self._state = SessionState.PRESENTING
        return updated
