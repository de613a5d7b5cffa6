"""Session loading utilities (YAML metadata + optional CSV roster)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from squadrota.session.models import SessionConfig

__all__ = ["load_session", "dump_session", "read_roster_csv", "session_from_names"]


def read_roster_csv(path: Path) -> list[dict[str, str]]:
    """Load roster rows (``name`` and optional ``id`` columns) with pandas."""
    frame = pd.read_csv(path, dtype=str)
    if "name" not in frame.columns:
        raise ValueError(f"Roster CSV {path} must have a 'name' column")
    rows: list[dict[str, str]] = []
    for record in frame.to_dict("records"):
        name = record.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        row = {"name": name.strip()}
        identifier = record.get("id")
        if isinstance(identifier, str) and identifier.strip():
            row["id"] = identifier.strip()
        rows.append(row)
    return rows


def load_session(yaml_path: str | Path) -> SessionConfig:
    """Load a :class:`SessionConfig` from YAML.

    Players are listed inline under ``players`` (plain names or ``{id, name}``
    mappings) or read from the CSV named by ``players_file``, resolved
    relative to the YAML file.
    """
    base_path = Path(yaml_path).resolve()
    with base_path.open("r", encoding="utf-8") as handle:
        meta: dict[str, Any] = yaml.safe_load(handle) or {}
    if not isinstance(meta, dict):
        raise ValueError(f"Session file {base_path} must contain a mapping")
    players_file = meta.pop("players_file", None)
    if players_file is not None:
        if meta.get("players"):
            raise ValueError("Specify either 'players' or 'players_file', not both")
        csv_path = Path(players_file)
        if not csv_path.is_absolute():
            csv_path = base_path.parent / csv_path
        if not csv_path.exists():
            raise FileNotFoundError(csv_path)
        meta["players"] = read_roster_csv(csv_path)
    meta.setdefault("name", base_path.stem)
    return SessionConfig.model_validate(meta)


def dump_session(config: SessionConfig, yaml_path: str | Path) -> Path:
    """Write ``config`` as YAML (players inline with their ids)."""
    path = Path(yaml_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(mode="json")
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(payload, handle, sort_keys=False, allow_unicode=True)
    return path


def session_from_names(
    names: list[str],
    *,
    duration_minutes: float | None = None,
    break_minutes: float | None = None,
    name: str = "session",
) -> SessionConfig:
    data: dict[str, Any] = {"name": name, "players": list(names)}
    if duration_minutes is not None:
        data["duration_minutes"] = duration_minutes
    if break_minutes is not None:
        data["break_minutes"] = break_minutes
    return SessionConfig.model_validate(data)
