"""Roster builders shared across tests."""

from __future__ import annotations

from squadrota.roster import Participant

NAMES = ["Ana", "Ben", "Cleo", "Dev", "Eli", "Fay", "Gus", "Hal", "Ivy", "Jo", "Kai"]


def build_roster(count: int) -> list[Participant]:
    """Participants ``p0..p{count-1}`` with stable ids."""
    return [Participant(id=f"p{i}", name=NAMES[i]) for i in range(count)]


def build_roster_of(count: int) -> list[Participant]:
    """Like :func:`build_roster` but for any size, with generated names."""
    return [Participant(id=f"p{i}", name=f"Player {i}") for i in range(count)]
