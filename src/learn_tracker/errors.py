"""Exceptions raised by the learning tracker core."""


class LearnTrackerError(Exception):
    """Base class for all tracker errors."""


class InvalidInputError(LearnTrackerError, ValueError):
    pass


class InvalidQualityError(InvalidInputError):
    """Quality rating outside the 0-5 range."""

    def __init__(self, quality):
        super().__init__(f"Quality must be an integer from 0 to 5, got {quality!r}")
        self.quality = quality


class UnknownTopicError(LearnTrackerError, LookupError):
    """A flashcard or edit referenced a topic that does not exist."""

    def __init__(self, topic_id: str):
        super().__init__(f"Unknown topic: {topic_id}")
        self.topic_id = topic_id


class EmptyDeckError(LearnTrackerError):
    """Nothing to review."""

    def __init__(self, message: str = "Nothing to review"):
        super().__init__(message)


class SessionStateError(LearnTrackerError):
    pass


class StoreError(LearnTrackerError):
    pass
