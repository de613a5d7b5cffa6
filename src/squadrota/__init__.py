"""SquadRota: fair rotation schedules and live countdowns for small-sided squads."""

from .core.errors import (
    InsufficientParticipantsError,
    InvalidDurationError,
    SquadRotaValueError,
    TimelineStateError,
)
from .roster import Participant, Role, make_roster, rotate_roster
from .scheduling import SeatBands, Shift, generate_schedule, generate_schedule_minutes
from .timeline import TimelineConfig, TimelineController, TimelinePhase, format_time

__all__ = [
    "Participant",
    "Role",
    "make_roster",
    "rotate_roster",
    "SeatBands",
    "Shift",
    "generate_schedule",
    "generate_schedule_minutes",
    "TimelineController",
    "TimelineConfig",
    "TimelinePhase",
    "format_time",
    "SquadRotaValueError",
    "InsufficientParticipantsError",
    "InvalidDurationError",
    "TimelineStateError",
]

__version__ = "0.1.0"
