"""Live session timeline: pure queries, tick sources and the controller."""

from .clock import ManualTicker, ThreadedTicker, Ticker
from .controller import TimelineController
from .queries import (
    IMMINENT_CHANGE_SECONDS,
    UpcomingEntry,
    bench,
    current_shift,
    format_time,
    goalkeeper,
    is_change_imminent,
    next_shift,
    outfield,
    players_with_role,
    time_remaining,
    time_until_next_change,
    upcoming_entry,
)
from .state import DEFAULT_BREAK_SECONDS, TimelineConfig, TimelinePhase, TimelineState

__all__ = [
    "Ticker",
    "ThreadedTicker",
    "ManualTicker",
    "TimelineController",
    "TimelineConfig",
    "TimelinePhase",
    "TimelineState",
    "DEFAULT_BREAK_SECONDS",
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
