"""Session contract: roster, duration and break settings."""

from __future__ import annotations

from fractions import Fraction
from typing import Any

from pydantic import BaseModel, Field, field_validator

from squadrota.roster.models import Participant, rotate_roster
from squadrota.scheduling.rotation import DEFAULT_SESSION_MINUTES
from squadrota.timeline.state import DEFAULT_BREAK_SECONDS, TimelineConfig

__all__ = ["MIN_PLAYERS", "MAX_PLAYERS", "SessionConfig"]

MIN_PLAYERS = 5
MAX_PLAYERS = 10


class SessionConfig(BaseModel):
    """A validated session definition.

    This is where the caller-side roster policy lives: 5 to 10 players with
    case-insensitively unique names.
    """

    name: str = "session"
    duration_minutes: float = DEFAULT_SESSION_MINUTES
    break_minutes: float = DEFAULT_BREAK_SECONDS / 60
    players: list[Participant] = Field(default_factory=list)

    @field_validator("players", mode="before")
    @classmethod
    def _coerce_players(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        coerced: list[Any] = []
        for entry in value:
            if isinstance(entry, str):
                coerced.append({"name": entry})
            elif isinstance(entry, dict) and entry.get("id") is not None:
                coerced.append({**entry, "id": str(entry["id"])})
            else:
                coerced.append(entry)
        return coerced

    @field_validator("players")
    @classmethod
    def _roster_policy(cls, value: list[Participant]) -> list[Participant]:
        if len(value) < MIN_PLAYERS:
            raise ValueError(f"Minimum {MIN_PLAYERS} players required (got {len(value)})")
        if len(value) > MAX_PLAYERS:
            raise ValueError(f"Max {MAX_PLAYERS} players allowed (got {len(value)})")
        seen: set[str] = set()
        for player in value:
            key = player.name.lower()
            if key in seen:
                raise ValueError(f"Name already exists: '{player.name}'")
            seen.add(key)
        if len({player.id for player in value}) != len(value):
            raise ValueError("player ids must be unique")
        return value

    @field_validator("duration_minutes")
    @classmethod
    def _duration_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("duration_minutes must be positive")
        return value

    @field_validator("break_minutes")
    @classmethod
    def _break_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("break_minutes must be non-negative")
        return value

    @property
    def total_seconds(self) -> float:
        # Exact decimal conversion: 4.1 min is 246 s.
        return float(Fraction(str(self.duration_minutes)) * 60)

    @property
    def break_seconds(self) -> int:
        return int(round(self.break_minutes * 60))

    def roster(self) -> tuple[Participant, ...]:
        return tuple(self.players)

    def rotated(self) -> "SessionConfig":
        """Configuration for the next session: roster shifted up one seat."""
        return self.model_copy(update={"players": list(rotate_roster(self.players))})

    def timeline_config(self, *, tick_interval: float = 1.0) -> TimelineConfig:
        return TimelineConfig(break_seconds=self.break_seconds, tick_interval=tick_interval)
