from __future__ import annotations

from pathlib import Path

import pytest

from squadrota.telemetry import (
    SessionTelemetryLogger,
    SnapshotBus,
    TimelineSnapshot,
    read_jsonl,
    summarize_snapshots,
)
from tests.helpers import build_roster


def _snapshot(**overrides) -> TimelineSnapshot:
    values = dict(
        session="demo#1",
        event="tick",
        phase="Running",
        elapsed_seconds=30,
        total_seconds=300,
        shift_index=1,
        shift_count=5,
        seconds_to_change=30,
        break_seconds_left=60,
        break_taken=False,
    )
    values.update(overrides)
    return TimelineSnapshot(**values)


def test_snapshot_progress_ratio():
    assert _snapshot().progress_ratio == pytest.approx(0.1)
    assert _snapshot(total_seconds=0).progress_ratio is None


def test_snapshotbus_sink_and_drain():
    bus = SnapshotBus()
    sink = bus.sink()
    snaps = [_snapshot(elapsed_seconds=i) for i in range(3)]
    for snap in snaps:
        sink(snap)
    assert list(bus.drain()) == snaps
    assert list(bus.drain()) == []


def test_summarize_snapshots():
    summary = summarize_snapshots(
        [
            _snapshot(elapsed_seconds=10, shift_index=1),
            _snapshot(elapsed_seconds=70, shift_index=2, break_taken=True),
            _snapshot(elapsed_seconds=300, shift_index=5, phase="Finished"),
        ]
    )
    entry = summary["demo#1"]
    assert entry["elapsed_seconds"] == 300
    assert entry["shifts_reached"] == [1, 2, 5]
    assert entry["break_taken"] is True
    assert entry["final_phase"] == "Finished"


def test_session_logger_records_events_and_summary(tmp_path: Path, controller, ticker):
    log_path = tmp_path / "telemetry" / "sessions.jsonl"
    with SessionTelemetryLogger(
        log_path=log_path, session="demo", roster_size=5, total_seconds=300
    ) as run_logger:
        controller.subscribe(run_logger)
        controller.load_session(build_roster(5), 300)
        controller.start()
        ticker.fire(10_000)

    records = list(read_jsonl(log_path))
    events = [r for r in records if r["record_type"] == "event"]
    sessions = [r for r in records if r["record_type"] == "session"]

    assert {r["event"] for r in events} >= {"load", "start", "shift_change", "break_start", "break_end", "finish"}
    assert all(r["event"] not in {"tick", "break_tick"} for r in events)
    assert len(sessions) == 1
    final = sessions[0]
    assert final["status"] == "finished"
    assert final["shifts_reached"] == [1, 2, 3, 4, 5]
    assert final["break_taken"] is True
    assert final["elapsed_seconds"] == 300
    assert final["run_id"] == events[0]["run_id"]


def test_session_logger_marks_errors(tmp_path: Path):
    log_path = tmp_path / "sessions.jsonl"
    with pytest.raises(RuntimeError):
        with SessionTelemetryLogger(log_path=log_path, session="demo"):
            raise RuntimeError("boom")
    (record,) = list(read_jsonl(log_path))
    assert record["status"] == "error"
    assert "boom" in record["error"]


def test_session_logger_can_record_ticks(tmp_path: Path):
    log_path = tmp_path / "sessions.jsonl"
    logger = SessionTelemetryLogger(log_path=log_path, session="demo", record_ticks=True)
    with logger:
        logger(_snapshot())
    kinds = [r["record_type"] for r in read_jsonl(log_path)]
    assert kinds == ["event", "session"]
