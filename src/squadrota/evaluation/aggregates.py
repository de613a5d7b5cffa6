"""DataFrame views over a rotation schedule."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from squadrota.roster.models import Participant, Role
from squadrota.scheduling.models import Shift
from squadrota.timeline.queries import format_time, players_with_role

__all__ = [
    "ASSIGNMENT_COLUMNS",
    "SHIFT_COLUMNS",
    "ROLE_COUNT_COLUMNS",
    "assignment_dataframe",
    "shift_dataframe",
    "role_count_dataframe",
]

ASSIGNMENT_COLUMNS = [
    "shift_index",
    "start_time",
    "end_time",
    "duration_seconds",
    "roster_position",
    "participant_id",
    "name",
    "role",
]

SHIFT_COLUMNS = [
    "shift_index",
    "start_time",
    "end_time",
    "start_label",
    "end_label",
    "goalkeeper",
    "outfield",
    "bench",
]

ROLE_COUNT_COLUMNS = [
    "participant_id",
    "name",
    *[role.value for role in Role],
    *[f"{role.value}_seconds" for role in Role],
]


def assignment_dataframe(schedule: Sequence[Shift], participants: Sequence[Participant]) -> pd.DataFrame:
    """Long-format table: one row per (shift, participant)."""
    rows = [
        {
            "shift_index": shift.index,
            "start_time": shift.start_time,
            "end_time": shift.end_time,
            "duration_seconds": shift.duration,
            "roster_position": position,
            "participant_id": participant.id,
            "name": participant.name,
            "role": shift.role_of(participant.id).value,
        }
        for shift in schedule
        for position, participant in enumerate(participants)
    ]
    if not rows:
        return pd.DataFrame(columns=ASSIGNMENT_COLUMNS)
    return pd.DataFrame(rows).reindex(columns=ASSIGNMENT_COLUMNS)


def shift_dataframe(schedule: Sequence[Shift], participants: Sequence[Participant]) -> pd.DataFrame:
    """One row per shift with the line-up spelled out by name."""

    def _names(shift: Shift, role: Role) -> str:
        return ", ".join(p.name for p in players_with_role(shift, participants, role))

    rows = [
        {
            "shift_index": shift.index,
            "start_time": shift.start_time,
            "end_time": shift.end_time,
            "start_label": format_time(shift.start_time),
            "end_label": format_time(shift.end_time),
            "goalkeeper": _names(shift, Role.GOALKEEPER),
            "outfield": _names(shift, Role.OUTFIELD),
            "bench": _names(shift, Role.BENCH),
        }
        for shift in schedule
    ]
    if not rows:
        return pd.DataFrame(columns=SHIFT_COLUMNS)
    return pd.DataFrame(rows).reindex(columns=SHIFT_COLUMNS)


def role_count_dataframe(schedule: Sequence[Shift], participants: Sequence[Participant]) -> pd.DataFrame:
    """Per-participant shift counts and seconds spent in each role, in roster order."""
    assignments = assignment_dataframe(schedule, participants)
    if assignments.empty:
        return pd.DataFrame(columns=ROLE_COUNT_COLUMNS)
    grouped = assignments.groupby(["participant_id", "role"])
    counts = grouped["shift_index"].count().to_dict()
    seconds = grouped["duration_seconds"].sum().to_dict()
    rows = []
    for participant in participants:
        row: dict[str, object] = {"participant_id": participant.id, "name": participant.name}
        for role in Role:
            key = (participant.id, role.value)
            row[role.value] = int(counts.get(key, 0))
            row[f"{role.value}_seconds"] = int(seconds.get(key, 0))
        rows.append(row)
    return pd.DataFrame(rows).reindex(columns=ROLE_COUNT_COLUMNS)
