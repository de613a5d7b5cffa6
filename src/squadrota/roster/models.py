"""Roster primitives: participants, roles and roster rotation."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["Participant", "Role", "make_roster", "rotate_roster"]


class Role(str, Enum):
    """Duty held by a participant during one shift."""

    GOALKEEPER = "GK"
    OUTFIELD = "Outfield"
    BENCH = "Bench"

    @property
    def label(self) -> str:
        return {
            Role.GOALKEEPER: "Goalkeeper",
            Role.OUTFIELD: "Outfield",
            Role.BENCH: "Bench",
        }[self]


class Participant(BaseModel):
    """A rostered player. Identity is by ``id``; names may repeat."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("participant name must not be blank")
        return value


def make_roster(names: Sequence[str]) -> tuple[Participant, ...]:
    """Build a roster with freshly generated ids, preserving entry order."""
    return tuple(Participant(name=name) for name in names)


def rotate_roster(participants: Sequence[Participant]) -> tuple[Participant, ...]:
    """Shift everyone up one seat for the next session.

    The first participant (goalkeeper of the opening shift) moves to the end.
    """
    if not participants:
        return ()
    return (*participants[1:], participants[0])
