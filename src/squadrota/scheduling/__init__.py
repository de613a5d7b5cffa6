"""Scheduling utilities (seat bands, shifts, rotation generator)."""

from .models import FIVE_A_SIDE, SeatBands, Shift
from .rotation import (
    DEFAULT_SESSION_MINUTES,
    generate_schedule,
    generate_schedule_minutes,
    seat_for,
    seat_role,
    shift_boundaries,
)

__all__ = [
    "SeatBands",
    "FIVE_A_SIDE",
    "Shift",
    "DEFAULT_SESSION_MINUTES",
    "generate_schedule",
    "generate_schedule_minutes",
    "seat_for",
    "seat_role",
    "shift_boundaries",
]
