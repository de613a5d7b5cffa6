"""Session configuration (contract + YAML/CSV loaders)."""

from .loaders import dump_session, load_session, read_roster_csv, session_from_names
from .models import MAX_PLAYERS, MIN_PLAYERS, SessionConfig

__all__ = [
    "SessionConfig",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "load_session",
    "dump_session",
    "read_roster_csv",
    "session_from_names",
]
