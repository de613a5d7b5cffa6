"""Rotation schedule generator."""

from __future__ import annotations

import math
from collections.abc import Sequence
from fractions import Fraction

from squadrota.core.errors import (
    InsufficientParticipantsError,
    InvalidDurationError,
    SquadRotaValueError,
)
from squadrota.roster.models import Participant, Role
from squadrota.scheduling.models import FIVE_A_SIDE, SeatBands, Shift

__all__ = [
    "DEFAULT_SESSION_MINUTES",
    "generate_schedule",
    "generate_schedule_minutes",
    "seat_for",
    "seat_role",
    "shift_boundaries",
]

DEFAULT_SESSION_MINUTES = 40


def seat_for(index: int, shift_offset: int, participant_count: int) -> int:
    """Seat held by roster position ``index`` during 0-based shift ``shift_offset``."""
    return (index + shift_offset) % participant_count


def seat_role(seat: int, bands: SeatBands = FIVE_A_SIDE) -> Role:
    return bands.role_for_seat(seat)


def shift_boundaries(total_duration_seconds: float, shift_count: int) -> list[tuple[int, int]]:
    """Split ``[0, total)`` into ``shift_count`` floored, gap-free intervals.

    Each boundary is floored from the exact cumulative sum so rounding never
    accumulates across shifts.
    """
    total = Fraction(total_duration_seconds)
    edges = [math.floor(total * s / shift_count) for s in range(shift_count + 1)]
    return [(edges[s], edges[s + 1]) for s in range(shift_count)]


def generate_schedule(
    participants: Sequence[Participant],
    total_duration_seconds: float,
    *,
    bands: SeatBands = FIVE_A_SIDE,
) -> tuple[Shift, ...]:
    """Compute the full rotation for ``participants`` over the session.

    One shift is produced per participant and, in shift ``s``, roster position
    ``i`` sits in seat ``(i + s) mod N``. Every participant therefore visits
    every seat exactly once, which gives each of them one goalkeeper shift,
    ``bands.group_role_slots`` outfield shifts and ``N - bands.active_slots``
    bench shifts.

    Raises
    ------
    InsufficientParticipantsError
        Fewer participants than active seats.
    InvalidDurationError
        ``total_duration_seconds`` is not strictly positive.
    """

    count = len(participants)
    if count < bands.active_slots:
        raise InsufficientParticipantsError(count, bands.active_slots)
    if total_duration_seconds <= 0:
        raise InvalidDurationError(total_duration_seconds)
    ids = [participant.id for participant in participants]
    if len(set(ids)) != count:
        raise SquadRotaValueError("participant ids must be unique within a roster")

    schedule: list[Shift] = []
    for offset, (start, end) in enumerate(shift_boundaries(total_duration_seconds, count)):
        assignments = {
            pid: bands.role_for_seat(seat_for(index, offset, count))
            for index, pid in enumerate(ids)
        }
        schedule.append(
            Shift(index=offset + 1, start_time=start, end_time=end, assignments=assignments)
        )
    return tuple(schedule)


def generate_schedule_minutes(
    participants: Sequence[Participant],
    total_minutes: float = DEFAULT_SESSION_MINUTES,
    *,
    bands: SeatBands = FIVE_A_SIDE,
) -> tuple[Shift, ...]:
    """Minutes-based convenience wrapper around :func:`generate_schedule`."""
    return generate_schedule(participants, total_minutes * 60, bands=bands)
