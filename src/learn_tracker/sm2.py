"""SM-2 spaced repetition algorithm."""
import math

from learn_tracker.errors import InvalidQualityError

PASSING_QUALITY = 3
MIN_EASE_FACTOR = 1.3

# Buttons offered after a card is flipped: (label, quality, description)
RATINGS = [
    ("Again", 0, "Completely forgot"),
    ("Hard", 2, "Remembered with difficulty"),
    ("Good", 4, "Remembered correctly"),
    ("Easy", 5, "Too easy"),
]


def validate_quality(quality) -> int:
    if isinstance(quality, bool) or not isinstance(quality, int) or not 0 <= quality <= 5:
        raise InvalidQualityError(quality)
    return quality


def sm2_update(
    quality: int,
    repetitions: int,
    ease_factor: float,
    interval: int,
) -> dict:
    """Calculate next review parameters using SM-2.

    Args:
        quality: Rating 0-5 (0=complete blackout, 5=perfect)
        repetitions: Number of consecutive correct reviews
        ease_factor: Current ease factor (minimum 1.3)
        interval: Current interval in days

    Returns:
        Dict with updated interval, repetitions, ease_factor.

    Raises:
        InvalidQualityError: quality is not an integer in 0-5.
    """
    validate_quality(quality)

    # Update ease factor
    new_ef = ease_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    new_ef = max(MIN_EASE_FACTOR, new_ef)

    if quality >= PASSING_QUALITY:
        # Correct response
        if repetitions == 0:
            new_interval = 1
        elif repetitions == 1:
            new_interval = 6
        else:
            # Halves round up: 22.5 days -> 23
            new_interval = math.floor(interval * ease_factor + 0.5)
        new_repetitions = repetitions + 1
    else:
        # Lapse
        new_repetitions = 0
        new_interval = 1

    return {
        "interval": new_interval,
        "repetitions": new_repetitions,
        "ease_factor": round(new_ef, 2),
    }


def next_state(card, quality: int) -> dict:
    """SM-2 update for a Flashcard. Does not touch next_review/last_review."""
    return sm2_update(
        quality=quality,
        repetitions=card.repetitions,
        ease_factor=card.ease_factor,
        interval=card.interval,
    )
