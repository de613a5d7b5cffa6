"""Context manager for capturing session timeline telemetry."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from .jsonl import append_jsonl
from .watch import TimelineSnapshot

# Per-second ticks are not worth a line each; everything else is recorded.
QUIET_EVENTS = frozenset({"tick", "break_tick"})


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(slots=True)
class SessionTelemetryLogger(AbstractContextManager["SessionTelemetryLogger"]):
    """Record timeline events and a terminal summary for one session run.

    Parameters
    ----------
    log_path:
        JSONL path where event and session records are appended.
    session:
        Human-readable session name.
    roster_size:
        Number of rostered participants.
    total_seconds:
        Planned session length.
    config:
        Dictionary capturing timeline configuration (break length, speed, ...).
    record_ticks:
        Also record per-second ``tick``/``break_tick`` events.
    """

    log_path: Path
    session: str
    roster_size: int = 0
    total_seconds: int = 0
    config: Mapping[str, Any] | None = None
    record_ticks: bool = False
    schema_version: str = "1.0"
    run_id: str = field(default_factory=lambda: uuid4().hex, init=False)
    _start_time: float = field(default=0.0, init=False)
    _start_timestamp: str | None = field(default=None, init=False)
    _closed: bool = field(default=False, init=False)
    _events: int = field(default=0, init=False)
    _last: TimelineSnapshot | None = field(default=None, init=False)
    _shifts_reached: set[int] = field(default_factory=set, init=False)

    def __post_init__(self) -> None:
        self.log_path = Path(self.log_path)

    def __enter__(self) -> "SessionTelemetryLogger":
        self._start_time = time.perf_counter()
        self._start_timestamp = _iso_now()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type and not issubclass(exc_type, KeyboardInterrupt):
            self._close(status="error", error=repr(exc))
            return False
        status = "interrupted" if exc_type else self._status()
        self._close(status=status, error=None)
        return False

    def __call__(self, snapshot: TimelineSnapshot) -> None:
        """Snapshot sink: persist one event record."""
        self._last = snapshot
        if snapshot.shift_index is not None:
            self._shifts_reached.add(snapshot.shift_index)
        if snapshot.event in QUIET_EVENTS and not self.record_ticks:
            return
        record = {
            "record_type": "event",
            "schema_version": self.schema_version,
            "run_id": self.run_id,
            **snapshot.as_record(),
        }
        append_jsonl(self.log_path, record)
        self._events += 1

    def elapsed(self) -> float:
        """Return the elapsed wall-clock seconds since the run started."""
        return time.perf_counter() - self._start_time

    def finalize(self, *, status: str | None = None, error: str | None = None) -> None:
        """Write the terminal session record."""
        self._close(status=status or self._status(), error=error)

    def _status(self) -> str:
        if self._last is not None and self._last.phase == "Finished":
            return "finished"
        return "stopped"

    def _close(self, *, status: str, error: str | None) -> None:
        if self._closed:
            return
        duration = self.elapsed() if self._start_time else 0.0
        last = self._last
        record = {
            "record_type": "session",
            "schema_version": self.schema_version,
            "run_id": self.run_id,
            "session": self.session,
            "status": status,
            "roster_size": self.roster_size,
            "total_seconds": self.total_seconds,
            "elapsed_seconds": last.elapsed_seconds if last else 0,
            "shifts_reached": sorted(self._shifts_reached),
            "break_taken": bool(last and last.break_taken),
            "events_recorded": self._events,
            "config": dict(self.config or {}),
            "error": error,
            "started_at": self._start_timestamp,
            "finished_at": _iso_now(),
            "duration_seconds": round(duration, 3),
        }
        append_jsonl(self.log_path, record)
        self._closed = True


__all__ = ["SessionTelemetryLogger", "QUIET_EVENTS"]
