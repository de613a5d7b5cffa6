"""Session timeline state machine (play/pause/reset/half-time)."""

from __future__ import annotations

import math
import threading
from collections.abc import Iterator, Sequence
from contextlib import AbstractContextManager, contextmanager
from dataclasses import replace

from squadrota.core.errors import TimelineStateError
from squadrota.roster.models import Participant, rotate_roster
from squadrota.scheduling.models import FIVE_A_SIDE, SeatBands, Shift
from squadrota.scheduling.rotation import generate_schedule
from squadrota.telemetry.watch import SnapshotBus, SnapshotSink, TimelineSnapshot
from squadrota.timeline import queries
from squadrota.timeline.clock import ThreadedTicker, Ticker
from squadrota.timeline.state import TimelineConfig, TimelinePhase, TimelineState

__all__ = ["TimelineController"]


class TimelineController(AbstractContextManager["TimelineController"]):
    """Drive one session's countdown from a periodic ticker.

    Commands and ticks are serialised through a single lock. Every time the
    ticker is armed it receives a fresh generation number; disarming bumps the
    generation so a tick that was already in flight is discarded instead of
    mutating state after a pause or reset.

    Snapshots are queued while the lock is held and handed to subscribers
    only after the outermost command releases it, in emission order.

    Parameters
    ----------
    config:
        Break length, imminent-change threshold and tick interval.
    ticker:
        Periodic callback source. Defaults to a :class:`ThreadedTicker` using
        ``config.tick_interval``.
    bands:
        Seat-to-role bands passed to the schedule generator.
    session_name:
        Label attached to emitted snapshots.
    """

    def __init__(
        self,
        config: TimelineConfig | None = None,
        *,
        ticker: Ticker | None = None,
        bands: SeatBands = FIVE_A_SIDE,
        session_name: str = "session",
    ) -> None:
        self.config = config or TimelineConfig()
        self.bands = bands
        self.session_name = session_name
        self.session_number = 0
        self._ticker: Ticker = ticker or ThreadedTicker(self.config.tick_interval)
        self._lock = threading.RLock()
        self._depth = 0
        self._outbox = SnapshotBus()
        self._enqueue = self._outbox.sink()
        self._delivery_lock = threading.RLock()
        self._generation = 0
        self._participants: tuple[Participant, ...] = ()
        self._schedule: tuple[Shift, ...] | None = None
        self._total_duration: float = 0
        self._total_seconds = 0
        self._state = TimelineState.initial(self.config.break_seconds)
        self._sinks: list[SnapshotSink] = []

    # ------------------------------------------------------------------ setup

    def subscribe(self, sink: SnapshotSink) -> None:
        with self._lock:
            self._sinks.append(sink)

    def load_session(
        self, participants: Sequence[Participant], total_duration_seconds: float
    ) -> tuple[Shift, ...]:
        """Replace the roster, regenerate the schedule and return to ``Idle``.

        Generator errors propagate before any state is touched.
        """
        schedule = generate_schedule(participants, total_duration_seconds, bands=self.bands)
        with self._command():
            self._disarm_clock()
            self._participants = tuple(participants)
            self._schedule = schedule
            self._total_duration = total_duration_seconds
            self._total_seconds = math.floor(total_duration_seconds)
            self._state = TimelineState.initial(self.config.break_seconds)
            self.session_number += 1
            self._emit("load")
        return schedule

    def advance_session(self) -> tuple[Shift, ...]:
        """Rotate the roster by one seat and load the next session."""
        with self._command():
            if self._state.phase is not TimelinePhase.FINISHED:
                raise TimelineStateError("advance_session requires a finished session")
            return self.load_session(rotate_roster(self._participants), self._total_duration)

    # --------------------------------------------------------------- commands

    def start(self) -> bool:
        """Start or resume the countdown. Returns ``True`` when the clock started.

        A session with no whole seconds left to play finishes immediately.
        """
        with self._command():
            self._require_schedule()
            state = self._state
            if state.phase not in (TimelinePhase.IDLE, TimelinePhase.PAUSED):
                return False
            if state.elapsed_seconds >= self._total_seconds:
                self._finish()
                return False
            event = "start" if state.phase is TimelinePhase.IDLE else "resume"
            state.phase = TimelinePhase.ON_BREAK if state.break_in_progress else TimelinePhase.RUNNING
            self._arm_clock()
            self._emit(event)
            return True

    resume = start

    def pause(self) -> bool:
        with self._command():
            if not self._state.is_running:
                return False
            self._disarm_clock()
            self._state.phase = TimelinePhase.PAUSED
            self._emit("pause")
            return True

    def toggle(self) -> bool:
        """Play/pause button semantics."""
        with self._command():
            if self._state.is_running:
                return self.pause()
            return self.start()

    def reset(self) -> None:
        with self._command():
            self._disarm_clock()
            self._state = TimelineState.initial(self.config.break_seconds)
            self._emit("reset")

    def skip_break(self) -> bool:
        with self._command():
            state = self._state
            if not state.break_in_progress:
                return False
            state.break_in_progress = False
            if state.phase is TimelinePhase.ON_BREAK:
                state.phase = TimelinePhase.RUNNING
            self._emit("break_skipped")
            return True

    def seek(self, elapsed_seconds: int) -> None:
        """Move the elapsed counter; never re-arms the half-time break."""
        with self._command():
            self._require_schedule()
            state = self._state
            state.elapsed_seconds = min(max(0, int(elapsed_seconds)), self._total_seconds)
            if state.elapsed_seconds >= self._total_seconds:
                self._finish()
                return
            if state.phase is TimelinePhase.FINISHED:
                state.phase = TimelinePhase.PAUSED
            self._emit("seek")

    def close(self) -> None:
        """Stop ticking without touching the counters."""
        with self._command():
            self._disarm_clock()
            if self._state.is_running:
                self._state.phase = TimelinePhase.PAUSED

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------ ticks

    def tick(self) -> None:
        """Advance one second. Ignored unless running or on break."""
        with self._command():
            self._advance()

    def _on_tick(self, generation: int) -> None:
        with self._command():
            if generation != self._generation:
                return
            self._advance()

    def _advance(self) -> None:
        state = self._state
        if state.phase is TimelinePhase.ON_BREAK:
            state.break_elapsed_seconds = max(0, state.break_elapsed_seconds - 1)
            if state.break_elapsed_seconds == 0:
                state.break_in_progress = False
                state.phase = TimelinePhase.RUNNING
                self._emit("break_end")
            else:
                self._emit("break_tick")
            return
        if state.phase is not TimelinePhase.RUNNING:
            return
        if self._break_due():
            state.phase = TimelinePhase.ON_BREAK
            state.break_in_progress = True
            state.break_already_taken = True
            state.break_elapsed_seconds = self.config.break_seconds
            self._emit("break_start")
            return
        before = queries.current_shift(self.schedule, state.elapsed_seconds)
        state.elapsed_seconds = min(state.elapsed_seconds + 1, self._total_seconds)
        if state.elapsed_seconds >= self._total_seconds:
            self._finish()
            return
        after = queries.current_shift(self.schedule, state.elapsed_seconds)
        self._emit("shift_change" if after is not before else "tick")

    def _break_due(self) -> bool:
        midpoint = self.midpoint_seconds
        return (
            self.config.break_seconds > 0
            and midpoint > 0
            and not self._state.break_already_taken
            and self._state.elapsed_seconds >= midpoint
        )

    def _finish(self) -> None:
        self._disarm_clock()
        self._state.phase = TimelinePhase.FINISHED
        self._state.break_in_progress = False
        self._emit("finish")

    def _arm_clock(self) -> None:
        if self._ticker.active:
            return
        self._generation += 1
        generation = self._generation
        self._ticker.start(lambda: self._on_tick(generation))

    def _disarm_clock(self) -> None:
        self._generation += 1
        self._ticker.cancel()

    # ---------------------------------------------------------------- queries

    def _require_schedule(self) -> tuple[Shift, ...]:
        if self._schedule is None:
            raise TimelineStateError("No schedule loaded; call load_session() first")
        return self._schedule

    @property
    def schedule(self) -> tuple[Shift, ...]:
        return self._require_schedule()

    @property
    def participants(self) -> tuple[Participant, ...]:
        with self._lock:
            self._require_schedule()
            return self._participants

    @property
    def state(self) -> TimelineState:
        """Copy of the current counters."""
        with self._lock:
            return replace(self._state)

    @property
    def phase(self) -> TimelinePhase:
        with self._lock:
            return self._state.phase

    @property
    def total_seconds(self) -> int:
        with self._lock:
            self._require_schedule()
            return self._total_seconds

    @property
    def midpoint_seconds(self) -> int:
        return self._total_seconds // 2

    @property
    def elapsed_seconds(self) -> int:
        with self._lock:
            return self._state.elapsed_seconds

    def current_shift(self) -> Shift:
        with self._lock:
            shift = queries.current_shift(self._require_schedule(), self._state.elapsed_seconds)
        assert shift is not None
        return shift

    def next_shift(self) -> Shift | None:
        with self._lock:
            return queries.next_shift(self._require_schedule(), self._state.elapsed_seconds)

    def time_until_next_change(self) -> float:
        with self._lock:
            return queries.time_until_next_change(self._require_schedule(), self._state.elapsed_seconds)

    def is_change_imminent(self) -> bool:
        with self._lock:
            return queries.is_change_imminent(
                self._require_schedule(),
                self._state.elapsed_seconds,
                self._state.is_on_break,
                threshold=self.config.imminent_threshold_seconds,
            )

    def time_remaining(self) -> int:
        with self._lock:
            self._require_schedule()
            return queries.time_remaining(self._total_seconds, self._state.elapsed_seconds)

    def goalkeeper(self) -> Participant | None:
        with self._lock:
            return queries.goalkeeper(self._require_schedule(), self._participants, self._state.elapsed_seconds)

    def outfield(self) -> list[Participant]:
        with self._lock:
            return queries.outfield(self._require_schedule(), self._participants, self._state.elapsed_seconds)

    def bench(self) -> list[Participant]:
        with self._lock:
            return queries.bench(self._require_schedule(), self._participants, self._state.elapsed_seconds)

    def upcoming_entry(self, participant_id: str) -> queries.UpcomingEntry | None:
        with self._lock:
            return queries.upcoming_entry(
                self._require_schedule(), self._state.elapsed_seconds, participant_id
            )

    def snapshot(self, event: str = "status") -> TimelineSnapshot:
        with self._lock:
            schedule = self._require_schedule()
            state = self._state
            shift = queries.current_shift(schedule, state.elapsed_seconds)
            return TimelineSnapshot(
                session=f"{self.session_name}#{self.session_number}",
                event=event,
                phase=state.phase.value,
                elapsed_seconds=state.elapsed_seconds,
                total_seconds=self._total_seconds,
                shift_index=shift.index if shift else None,
                shift_count=len(schedule),
                seconds_to_change=queries.time_until_next_change(schedule, state.elapsed_seconds),
                break_seconds_left=state.break_elapsed_seconds,
                break_taken=state.break_already_taken,
                change_imminent=self.is_change_imminent(),
            )

    # ---------------------------------------------------------------- delivery

    @contextmanager
    def _command(self) -> Iterator[None]:
        """Hold the state lock; deliver queued snapshots once the outermost holder releases it."""
        with self._lock:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
                outermost = self._depth == 0
        if outermost:
            self._deliver()

    def _emit(self, event: str) -> None:
        if not self._sinks or self._schedule is None:
            return
        self._enqueue(self.snapshot(event))

    def _deliver(self) -> None:
        with self._delivery_lock:
            for snap in self._outbox.drain():
                with self._lock:
                    sinks = list(self._sinks)
                for sink in sinks:
                    sink(snap)
