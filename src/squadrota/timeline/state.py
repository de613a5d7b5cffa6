"""Timeline state and configuration containers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from squadrota.timeline.queries import IMMINENT_CHANGE_SECONDS

__all__ = ["DEFAULT_BREAK_SECONDS", "TimelinePhase", "TimelineConfig", "TimelineState"]

DEFAULT_BREAK_SECONDS = 5 * 60


class TimelinePhase(str, Enum):
    IDLE = "Idle"
    RUNNING = "Running"
    PAUSED = "Paused"
    ON_BREAK = "OnBreak"
    FINISHED = "Finished"


@dataclass(slots=True)
class TimelineConfig:
    """Tuning options for the live countdown."""

    break_seconds: int = DEFAULT_BREAK_SECONDS  # 0 disables the half-time break
    imminent_threshold_seconds: int = IMMINENT_CHANGE_SECONDS
    tick_interval: float = 1.0  # seconds of wall clock per simulated second

    def __post_init__(self) -> None:
        if self.break_seconds < 0:
            raise ValueError("break_seconds must be non-negative")
        if self.imminent_threshold_seconds < 0:
            raise ValueError("imminent_threshold_seconds must be non-negative")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")


@dataclass(slots=True)
class TimelineState:
    """Mutable per-session counters owned by the controller.

    ``break_elapsed_seconds`` starts at the break duration and counts down
    while the break is in progress.
    """

    phase: TimelinePhase
    elapsed_seconds: int
    break_elapsed_seconds: int
    break_already_taken: bool = False
    break_in_progress: bool = False

    @classmethod
    def initial(cls, break_seconds: int) -> "TimelineState":
        return cls(
            phase=TimelinePhase.IDLE,
            elapsed_seconds=0,
            break_elapsed_seconds=break_seconds,
        )

    @property
    def is_running(self) -> bool:
        return self.phase in (TimelinePhase.RUNNING, TimelinePhase.ON_BREAK)

    @property
    def is_on_break(self) -> bool:
        return self.break_in_progress
