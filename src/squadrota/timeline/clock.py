"""Cancellable periodic tick sources driving the timeline controller."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Protocol

__all__ = ["TickCallback", "Ticker", "ThreadedTicker", "ManualTicker"]

TickCallback = Callable[[], None]


class Ticker(Protocol):
    """A periodic callback source that can be armed and cancelled."""

    def start(self, callback: TickCallback, /) -> None:  # pragma: no cover - interface only
        ...

    def cancel(self) -> None:  # pragma: no cover - interface only
        ...

    @property
    def active(self) -> bool:  # pragma: no cover - interface only
        ...


class ThreadedTicker:
    """Invoke a callback every ``interval`` seconds from a daemon thread."""

    def __init__(self, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def active(self) -> bool:
        return self._thread is not None

    def start(self, callback: TickCallback, /) -> None:
        if self._thread is not None:
            raise RuntimeError("ticker already running")
        stop = threading.Event()
        self._stop = stop
        self._thread = threading.Thread(target=self._loop, args=(callback, stop, self.interval), daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        # No join: the callback may be the one cancelling, or may be blocked on
        # the caller's lock. The thread exits at its next wait.
        self._stop.set()
        self._thread = None

    @staticmethod
    def _loop(callback: TickCallback, stop: threading.Event, interval: float) -> None:
        while not stop.wait(interval):
            callback()


class ManualTicker:
    """Deterministic ticker fired explicitly, for tests and replays."""

    def __init__(self) -> None:
        self._callback: TickCallback | None = None
        self.starts = 0
        self.cancels = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback, /) -> None:
        if self._callback is not None:
            raise RuntimeError("ticker already running")
        self._callback = callback
        self.starts += 1

    def cancel(self) -> None:
        if self._callback is not None:
            self.cancels += 1
        self._callback = None

    def fire(self, times: int = 1) -> int:
        """Deliver up to ``times`` ticks; returns how many were delivered."""
        delivered = 0
        for _ in range(times):
            if self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered
