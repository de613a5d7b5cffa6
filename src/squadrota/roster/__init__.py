"""Roster models (participants, roles, rotation between sessions)."""

from .models import Participant, Role, make_roster, rotate_roster

__all__ = ["Participant", "Role", "make_roster", "rotate_roster"]
