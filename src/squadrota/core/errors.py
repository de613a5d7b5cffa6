"""Common SquadRota-specific exceptions."""


class SquadRotaValueError(ValueError):
    """Raised when SquadRota detects invalid user-provided data."""


class InsufficientParticipantsError(SquadRotaValueError):
    """Raised when a roster is too small to fill every active seat."""

    def __init__(self, count: int, minimum: int) -> None:
        super().__init__(f"Minimum {minimum} players required (got {count})")
        self.count = count
        self.minimum = minimum


class InvalidDurationError(SquadRotaValueError):
    """Raised when a session duration is not strictly positive."""

    def __init__(self, duration: float) -> None:
        super().__init__(f"Session duration must be positive (got {duration})")
        self.duration = duration


class TimelineStateError(RuntimeError):
    """Raised when the timeline is driven outside its preconditions."""


__all__ = [
    "SquadRotaValueError",
    "InsufficientParticipantsError",
    "InvalidDurationError",
    "TimelineStateError",
]
