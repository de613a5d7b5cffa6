from __future__ import annotations

from squadrota.evaluation import (
    ASSIGNMENT_COLUMNS,
    ROLE_COUNT_COLUMNS,
    assignment_dataframe,
    audit_fairness,
    expected_role_counts,
    role_count_dataframe,
    shift_dataframe,
)
from squadrota.roster import Role
from squadrota.scheduling import Shift, generate_schedule
from tests.helpers import build_roster


def test_assignment_dataframe_long_format():
    players = build_roster(6)
    df = assignment_dataframe(generate_schedule(players, 360), players)
    assert list(df.columns) == ASSIGNMENT_COLUMNS
    assert len(df) == 36
    first = df.iloc[0]
    assert first["participant_id"] == "p0"
    assert first["role"] == "GK"
    assert set(df["role"]) == {"GK", "Outfield", "Bench"}


def test_shift_dataframe_names_line_up():
    players = build_roster(6)
    df = shift_dataframe(generate_schedule(players, 360), players)
    first = df.iloc[0]
    assert first["goalkeeper"] == "Ana"
    assert first["outfield"] == "Ben, Cleo, Dev, Eli"
    assert first["bench"] == "Fay"
    assert first["end_label"] == "01:00"


def test_role_count_dataframe_is_fair():
    players = build_roster(7)
    df = role_count_dataframe(generate_schedule(players, 420), players)
    assert list(df.columns) == ROLE_COUNT_COLUMNS
    assert list(df["participant_id"]) == [p.id for p in players]
    assert set(df["GK"]) == {1}
    assert set(df["Outfield"]) == {4}
    assert set(df["Bench"]) == {2}
    assert set(df["GK_seconds"]) == {60}
    assert set(df["Outfield_seconds"]) == {240}


def test_empty_schedule_frames():
    assert assignment_dataframe((), []).empty
    assert role_count_dataframe((), []).empty
    assert shift_dataframe((), []).empty


def test_expected_role_counts():
    assert expected_role_counts(8) == {Role.GOALKEEPER: 1, Role.OUTFIELD: 4, Role.BENCH: 3}


def test_audit_accepts_generated_schedules():
    for count in range(5, 11):
        players = build_roster(count)
        assert audit_fairness(generate_schedule(players, 2400), players) == []


def test_audit_flags_tampered_schedule():
    players = build_roster(5)
    schedule = list(generate_schedule(players, 300))
    swapped = dict(schedule[1].assignments)
    swapped["p4"], swapped["p0"] = Role.OUTFIELD, Role.GOALKEEPER
    schedule[1] = Shift(index=2, start_time=60, end_time=120, assignments=swapped)

    violations = audit_fairness(schedule, players)
    flagged = {(v.participant_id, v.role) for v in violations}
    assert flagged == {
        ("p0", Role.GOALKEEPER),
        ("p0", Role.OUTFIELD),
        ("p4", Role.GOALKEEPER),
        ("p4", Role.OUTFIELD),
    }
    assert "expected 1x" in violations[0].describe()
