"""Exceptions raised by the round engine."""


class TwentyOneError(Exception):
    """Base class for all engine errors."""


class EmptyCardSource(TwentyOneError, IndexError):
    """Raised when drawing from a card source with no cards left."""

    def __init__(self, message: str = "Cannot draw from an empty card source") -> None:
        super().__init__(message)


class RoundInProgressError(TwentyOneError, RuntimeError):
    """Raised when the table is modified while a round is being played."""
