"""Fairness audit: does every participant get the same share of each role?"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from squadrota.roster.models import Participant, Role
from squadrota.scheduling.models import FIVE_A_SIDE, SeatBands, Shift

__all__ = ["FairnessViolation", "expected_role_counts", "role_counts", "audit_fairness"]


@dataclass(frozen=True, slots=True)
class FairnessViolation:
    participant_id: str
    name: str
    role: Role
    expected: int
    actual: int

    def describe(self) -> str:
        return (
            f"{self.name} ({self.participant_id}) holds {self.role.label} "
            f"{self.actual}x, expected {self.expected}x"
        )


def expected_role_counts(participant_count: int, bands: SeatBands = FIVE_A_SIDE) -> dict[Role, int]:
    return {
        Role.GOALKEEPER: bands.special_role_slots,
        Role.OUTFIELD: bands.group_role_slots,
        Role.BENCH: max(0, participant_count - bands.active_slots),
    }


def role_counts(schedule: Sequence[Shift]) -> dict[str, Counter[Role]]:
    counts: dict[str, Counter[Role]] = {}
    for shift in schedule:
        for pid, role in shift.assignments.items():
            counts.setdefault(pid, Counter())[role] += 1
    return counts


def audit_fairness(
    schedule: Sequence[Shift],
    participants: Sequence[Participant],
    bands: SeatBands = FIVE_A_SIDE,
) -> list[FairnessViolation]:
    """Return every (participant, role) pair whose count deviates; empty means fair."""
    expected = expected_role_counts(len(participants), bands)
    counts = role_counts(schedule)
    violations: list[FairnessViolation] = []
    for participant in participants:
        actual = counts.get(participant.id, Counter())
        for role in Role:
            if actual[role] != expected[role]:
                violations.append(
                    FairnessViolation(
                        participant_id=participant.id,
                        name=participant.name,
                        role=role,
                        expected=expected[role],
                        actual=actual[role],
                    )
                )
    return violations
