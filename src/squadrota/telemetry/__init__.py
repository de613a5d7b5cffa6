"""Telemetry helpers (JSONL records, session logger, live snapshots)."""

from .jsonl import append_jsonl, read_jsonl
from .run_logger import QUIET_EVENTS, SessionTelemetryLogger
from .watch import SnapshotBus, SnapshotSink, TimelineSnapshot, null_sink, summarize_snapshots

__all__ = [
    "append_jsonl",
    "read_jsonl",
    "SessionTelemetryLogger",
    "QUIET_EVENTS",
    "TimelineSnapshot",
    "SnapshotSink",
    "SnapshotBus",
    "null_sink",
    "summarize_snapshots",
]
