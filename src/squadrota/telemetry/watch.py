"""Live watcher API for streaming timeline snapshots."""

from __future__ import annotations

import queue
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Iterator, Protocol


@dataclass(frozen=True, slots=True)
class TimelineSnapshot:
    """Immutable payload emitted by the timeline controller after every change."""

    session: str
    event: str
    phase: str
    elapsed_seconds: int
    total_seconds: int
    shift_index: int | None
    shift_count: int
    seconds_to_change: float
    break_seconds_left: int
    break_taken: bool
    change_imminent: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def progress_ratio(self) -> float | None:
        if self.total_seconds > 0:
            return min(1.0, max(0.0, self.elapsed_seconds / self.total_seconds))
        return None

    def as_record(self) -> dict[str, object]:
        return {
            "session": self.session,
            "event": self.event,
            "phase": self.phase,
            "elapsed_seconds": self.elapsed_seconds,
            "total_seconds": self.total_seconds,
            "shift_index": self.shift_index,
            "shift_count": self.shift_count,
            "seconds_to_change": self.seconds_to_change,
            "break_seconds_left": self.break_seconds_left,
            "break_taken": self.break_taken,
            "change_imminent": self.change_imminent,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
        }


class SnapshotSink(Protocol):
    """Invoked by the controller whenever a new snapshot is available."""

    def __call__(self, snapshot: TimelineSnapshot, /) -> None:  # pragma: no cover - interface only
        ...


# Default no-op sink used when nobody is watching.
def null_sink(snapshot: TimelineSnapshot) -> None:
    return None


class SnapshotBus:
    """Thread-safe queue-based transport for snapshot events."""

    def __init__(self) -> None:
        self._queue: queue.Queue[TimelineSnapshot] = queue.Queue()

    def sink(self) -> SnapshotSink:
        """Return a sink that enqueues snapshots for later consumption."""

        def _enqueue(snapshot: TimelineSnapshot) -> None:
            self._queue.put(snapshot)

        return _enqueue

    def get(self, timeout: float | None = None) -> TimelineSnapshot:
        """Blocking read of the next snapshot."""

        return self._queue.get(timeout=timeout)

    def drain(self) -> Iterator[TimelineSnapshot]:
        """Iterate over available snapshots without blocking."""

        while True:
            try:
                yield self._queue.get_nowait()
            except queue.Empty:
                break


def summarize_snapshots(snapshots: Iterable[TimelineSnapshot]) -> dict[str, dict[str, object]]:
    """Compute furthest progress, shifts reached and breaks per session."""

    summary: dict[str, dict[str, object]] = {}
    for snap in snapshots:
        entry = summary.setdefault(
            snap.session,
            {
                "elapsed_seconds": snap.elapsed_seconds,
                "shifts_reached": set(),
                "break_taken": snap.break_taken,
                "final_phase": snap.phase,
            },
        )
        entry["elapsed_seconds"] = max(int(entry["elapsed_seconds"]), snap.elapsed_seconds)
        if snap.shift_index is not None:
            entry["shifts_reached"].add(snap.shift_index)  # type: ignore[union-attr]
        entry["break_taken"] = bool(entry["break_taken"]) or snap.break_taken
        entry["final_phase"] = snap.phase
    for entry in summary.values():
        entry["shifts_reached"] = sorted(entry["shifts_reached"])  # type: ignore[arg-type]
    return summary


__all__ = [
    "TimelineSnapshot",
    "SnapshotSink",
    "null_sink",
    "SnapshotBus",
    "summarize_snapshots",
]
