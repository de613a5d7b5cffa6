from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass, field

from rich.console import Console, Group
from rich.live import Live
from rich.table import Table
from rich.text import Text

from squadrota.roster.models import Participant, Role
from squadrota.scheduling.models import Shift
from squadrota.telemetry.watch import SnapshotBus, SnapshotSink, TimelineSnapshot
from squadrota.timeline import queries


@dataclass(slots=True)
class CountdownConfig:
    """Configuration for the live countdown rendering."""

    refresh_interval: float = 0.25  # seconds
    show_forecast: bool = True
    title: str = "SquadRota"


@dataclass
class LiveCountdown:
    schedule: Sequence[Shift]
    participants: Sequence[Participant]
    config: CountdownConfig = field(default_factory=CountdownConfig)
    console: Console = field(default_factory=Console)

    def __post_init__(self) -> None:
        self._bus = SnapshotBus()
        self._latest: TimelineSnapshot | None = None
        self._stop = threading.Event()
        self._finished = threading.Event()
        self._thread: threading.Thread | None = None
        self._live: Live | None = None

    @property
    def sink(self) -> SnapshotSink:
        return self._bus.sink()

    @property
    def latest(self) -> TimelineSnapshot | None:
        return self._latest

    def __enter__(self) -> LiveCountdown:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start(self) -> None:
        if self._live is not None:
            return
        self._stop.clear()
        refresh = max(1, int(1 / max(self.config.refresh_interval, 0.1)))
        self._live = Live(self.render(), refresh_per_second=refresh, console=self.console)
        self._live.__enter__()
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=1)
            self._thread = None
        # Flush remaining snapshots so the final state is what stays on screen.
        self._drain_once()
        if self._live:
            self._live.__exit__(None, None, None)
            self._live = None

    def wait_until_finished(self, poll: float = 0.2) -> None:
        """Block until a ``Finished`` snapshot arrives (Ctrl-C still interrupts)."""
        while not self._finished.wait(poll):
            pass

    def _loop(self) -> None:
        while not self._stop.is_set():
            self._drain_once()
            self._stop.wait(self.config.refresh_interval)
        self._drain_once()

    def _drain_once(self) -> None:
        updated = False
        for snapshot in self._bus.drain():
            self._latest = snapshot
            if snapshot.phase == "Finished":
                self._finished.set()
            updated = True
        if updated and self._live:
            self._live.update(self.render())

    def _forecast(self, participant: Participant, role: Role, elapsed: int, snap: TimelineSnapshot) -> str:
        if role is Role.BENCH:
            entry = queries.upcoming_entry(self.schedule, elapsed, participant.id)
            if entry is None:
                return "no further entry"
            return f"↑ {entry.role.label} in {queries.format_time(entry.seconds_until)}"
        upcoming = queries.next_shift(self.schedule, elapsed)
        if upcoming is None:
            return ""
        next_role = upcoming.assignments.get(participant.id)
        if next_role is None or next_role is role:
            return ""
        return f"→ {next_role.label} in {queries.format_time(snap.seconds_to_change)}"

    def render(self) -> Group:
        snap = self._latest
        elapsed = snap.elapsed_seconds if snap else 0
        total = snap.total_seconds if snap else (self.schedule[-1].end_time if self.schedule else 0)
        shift = queries.current_shift(self.schedule, elapsed)

        header = Table(title=self.config.title, expand=True, show_header=False)
        header.add_column("Label", style="dim")
        header.add_column("Value", justify="right")
        header.add_row("Clock", Text(queries.format_time(queries.time_remaining(total, elapsed)), style="bold"))
        header.add_row("Phase", snap.phase if snap else "Idle")
        if shift is not None:
            header.add_row("Shift", f"{shift.index} / {len(self.schedule)}")
            header.add_row("Shift length", queries.format_time(shift.duration))
        if snap and snap.phase == "OnBreak":
            header.add_row("Half-time", queries.format_time(snap.break_seconds_left))

        parts: list[object] = [header]
        if snap and snap.change_imminent and snap.phase == "Running":
            parts.append(
                Text(
                    f"SUBSTITUTION IN {queries.format_time(snap.seconds_to_change)}",
                    style="bold yellow",
                    justify="center",
                )
            )

        lineup = Table(expand=True)
        lineup.add_column("Role", style="magenta")
        lineup.add_column("Player", style="cyan")
        if self.config.show_forecast:
            lineup.add_column("Next", style="green")
        for role in Role:
            for participant in queries.players_with_role(shift, self.participants, role):
                row = [role.label, participant.name]
                if self.config.show_forecast:
                    row.append(self._forecast(participant, role, elapsed, snap) if snap else "")
                lineup.add_row(*row)
        parts.append(lineup)
        return Group(*parts)


__all__ = ["CountdownConfig", "LiveCountdown"]
