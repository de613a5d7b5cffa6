"""CLI helper utilities for SquadRota."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from squadrota.session import SessionConfig, load_session, session_from_names


def format_validation_error(exc: ValidationError) -> str:
    """Collapse a pydantic error into ``field: message`` lines."""
    lines = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "session"
        message = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
        lines.append(f"{location}: {message}")
    return "; ".join(lines)


def resolve_session(
    session_path: Path | None,
    players: Sequence[str] | None,
    *,
    minutes: float | None = None,
    break_minutes: float | None = None,
) -> SessionConfig:
    """Build a session from a YAML file or from repeated ``--player`` options.

    Explicit ``--minutes``/``--break-minutes`` override the file values.
    """
    if session_path is None and not players:
        raise typer.BadParameter("Provide a session file or at least five --player options.")
    if session_path is not None and players:
        raise typer.BadParameter("Use either a session file or --player options, not both.")
    try:
        if session_path is not None:
            config = load_session(session_path)
            overrides: dict[str, float] = {}
            if minutes is not None:
                overrides["duration_minutes"] = minutes
            if break_minutes is not None:
                overrides["break_minutes"] = break_minutes
            if overrides:
                config = SessionConfig.model_validate({**config.model_dump(), **overrides})
            return config
        return session_from_names(
            list(players or []), duration_minutes=minutes, break_minutes=break_minutes
        )
    except ValidationError as exc:
        raise typer.BadParameter(format_validation_error(exc)) from exc
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(str(exc)) from exc


__all__ = ["format_validation_error", "resolve_session"]
