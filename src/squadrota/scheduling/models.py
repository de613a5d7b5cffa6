"""Shift-level scheduling primitives."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from squadrota.roster.models import Role


@dataclass(frozen=True, slots=True)
class SeatBands:
    """Seat-to-role band boundaries.

    Seats ``[0, special_role_slots)`` keep goal, the next ``group_role_slots``
    seats play outfield and every remaining seat sits on the bench.
    """

    special_role_slots: int = 1
    group_role_slots: int = 4

    def __post_init__(self) -> None:
        if self.special_role_slots < 1:
            raise ValueError("special_role_slots must be >= 1")
        if self.group_role_slots < 0:
            raise ValueError("group_role_slots must be non-negative")

    @property
    def active_slots(self) -> int:
        return self.special_role_slots + self.group_role_slots

    def role_for_seat(self, seat: int) -> Role:
        if seat < self.special_role_slots:
            return Role.GOALKEEPER
        if seat < self.active_slots:
            return Role.OUTFIELD
        return Role.BENCH


FIVE_A_SIDE = SeatBands()


@dataclass(frozen=True, slots=True)
class Shift:
    """One time-bounded assignment of roles to every participant.

    ``start_time``/``end_time`` are whole seconds from kick-off and form the
    half-open interval ``[start_time, end_time)``.
    """

    index: int
    start_time: int
    end_time: int
    assignments: Mapping[str, Role] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "assignments", MappingProxyType(dict(self.assignments)))

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def contains(self, elapsed_seconds: float) -> bool:
        return self.start_time <= elapsed_seconds < self.end_time

    def role_of(self, participant_id: str) -> Role:
        try:
            return self.assignments[participant_id]
        except KeyError:
            raise KeyError(f"Participant '{participant_id}' is not part of shift {self.index}") from None

    def members(self, role: Role) -> tuple[str, ...]:
        """Return participant ids holding ``role``, in roster order."""
        return tuple(pid for pid, assigned in self.assignments.items() if assigned is role)


__all__ = ["SeatBands", "FIVE_A_SIDE", "Shift"]
