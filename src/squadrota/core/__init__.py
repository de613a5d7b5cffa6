"""Core utilities shared across SquadRota modules."""

from .errors import (
    InsufficientParticipantsError,
    InvalidDurationError,
    SquadRotaValueError,
    TimelineStateError,
)

__all__ = [
    "SquadRotaValueError",
    "InsufficientParticipantsError",
    "InvalidDurationError",
    "TimelineStateError",
]
