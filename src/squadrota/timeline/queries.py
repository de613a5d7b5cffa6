"""Pure timeline queries over ``(schedule, elapsed seconds, break state)``.

Nothing here caches derived values: every answer is recomputed from the
schedule and the authoritative elapsed counter.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from squadrota.roster.models import Participant, Role
from squadrota.scheduling.models import Shift

__all__ = [
    "IMMINENT_CHANGE_SECONDS",
    "UpcomingEntry",
    "current_shift",
    "next_shift",
    "time_until_next_change",
    "is_change_imminent",
    "players_with_role",
    "goalkeeper",
    "outfield",
    "bench",
    "upcoming_entry",
    "time_remaining",
    "format_time",
]

IMMINENT_CHANGE_SECONDS = 30


@dataclass(frozen=True, slots=True)
class UpcomingEntry:
    """First future shift in which a participant leaves the bench."""

    shift: Shift
    role: Role
    seconds_until: int


def current_shift(schedule: Sequence[Shift], elapsed_seconds: float) -> Shift | None:
    """Shift whose half-open interval contains ``elapsed_seconds``.

    At the final boundary (``elapsed == total``) nothing matches and the last
    shift is returned.
    """
    if not schedule:
        return None
    for shift in schedule:
        if shift.start_time <= elapsed_seconds < shift.end_time:
            return shift
    return schedule[-1]


def next_shift(schedule: Sequence[Shift], elapsed_seconds: float) -> Shift | None:
    return next((shift for shift in schedule if shift.start_time > elapsed_seconds), None)


def time_until_next_change(schedule: Sequence[Shift], elapsed_seconds: float) -> float:
    shift = current_shift(schedule, elapsed_seconds)
    if shift is None:
        return 0
    return shift.end_time - elapsed_seconds


def is_change_imminent(
    schedule: Sequence[Shift],
    elapsed_seconds: float,
    on_break: bool = False,
    threshold: float = IMMINENT_CHANGE_SECONDS,
) -> bool:
    if on_break:
        return False
    remaining = time_until_next_change(schedule, elapsed_seconds)
    return 0 < remaining <= threshold


def players_with_role(
    shift: Shift | None, participants: Sequence[Participant], role: Role
) -> list[Participant]:
    """Participants holding ``role`` in ``shift``, in roster order."""
    if shift is None:
        return []
    return [p for p in participants if shift.assignments.get(p.id) is role]


def goalkeeper(
    schedule: Sequence[Shift], participants: Sequence[Participant], elapsed_seconds: float
) -> Participant | None:
    keepers = players_with_role(current_shift(schedule, elapsed_seconds), participants, Role.GOALKEEPER)
    return keepers[0] if keepers else None


def outfield(
    schedule: Sequence[Shift], participants: Sequence[Participant], elapsed_seconds: float
) -> list[Participant]:
    return players_with_role(current_shift(schedule, elapsed_seconds), participants, Role.OUTFIELD)


def bench(
    schedule: Sequence[Shift], participants: Sequence[Participant], elapsed_seconds: float
) -> list[Participant]:
    return players_with_role(current_shift(schedule, elapsed_seconds), participants, Role.BENCH)


def upcoming_entry(
    schedule: Sequence[Shift], elapsed_seconds: float, participant_id: str
) -> UpcomingEntry | None:
    """Scan forward from the current shift for the participant's next active role.

    Returns ``None`` when the participant finishes the session on the bench.
    A participant who is already active gets an entry for the current shift
    with ``seconds_until == 0``.
    """
    shift = current_shift(schedule, elapsed_seconds)
    if shift is None:
        return None
    for candidate in schedule[shift.index - 1 :]:
        role = candidate.assignments.get(participant_id)
        if role is None:
            raise KeyError(f"Participant '{participant_id}' is not part of the schedule")
        if role is not Role.BENCH:
            gap = max(0, candidate.start_time - elapsed_seconds)
            return UpcomingEntry(shift=candidate, role=role, seconds_until=int(gap))
    return None


def time_remaining(total_duration_seconds: float, elapsed_seconds: float) -> int:
    """Countdown value shown on the clock."""
    return max(0, int(total_duration_seconds - elapsed_seconds))


def format_time(seconds: float) -> str:
    """Render non-negative seconds as zero-padded ``MM:SS``."""
    seconds = int(seconds)
    if seconds < 0:
        raise ValueError(f"seconds must be non-negative (got {seconds})")
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"
