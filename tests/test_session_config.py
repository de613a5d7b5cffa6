from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from squadrota.session import SessionConfig, dump_session, load_session, session_from_names

PLAYERS = ["Ana", "Ben", "Cleo", "Dev", "Eli", "Fay"]


def _write(path: Path, payload: dict) -> Path:
    path.write_text(yaml.safe_dump(payload))
    return path


def test_load_session_inline_players(tmp_path: Path):
    path = _write(
        tmp_path / "tuesday.yaml",
        {"duration_minutes": 30, "break_minutes": 2, "players": PLAYERS[:5] + [{"id": 7, "name": "Fay"}]},
    )
    config = load_session(path)
    assert config.name == "tuesday"
    assert config.total_seconds == 1800
    assert config.break_seconds == 120
    assert [p.name for p in config.players] == PLAYERS
    assert config.players[-1].id == "7"
    assert len({p.id for p in config.players}) == 6


def test_load_session_defaults(tmp_path: Path):
    config = load_session(_write(tmp_path / "s.yaml", {"name": "Five", "players": PLAYERS[:5]}))
    assert config.name == "Five"
    assert config.duration_minutes == 40
    assert config.break_seconds == 300
    assert config.timeline_config().break_seconds == 300


def test_load_session_players_file(tmp_path: Path):
    (tmp_path / "roster.csv").write_text("id,name\na,Ana\nb,Ben\nc,Cleo\nd,Dev\ne,Eli\n,\n")
    config = load_session(_write(tmp_path / "s.yaml", {"players_file": "roster.csv"}))
    assert [p.id for p in config.players] == ["a", "b", "c", "d", "e"]


def test_players_file_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_session(_write(tmp_path / "s.yaml", {"players_file": "nope.csv"}))


@pytest.mark.parametrize("count", [4, 11])
def test_roster_size_policy(count):
    names = [f"Player {i}" for i in range(count)]
    with pytest.raises(ValidationError):
        session_from_names(names)


def test_names_unique_case_insensitively():
    with pytest.raises(ValidationError, match="Name already exists"):
        session_from_names(["Ana", "ana", "Ben", "Cleo", "Dev"])


def test_blank_names_rejected():
    with pytest.raises(ValidationError):
        session_from_names(["Ana", " ", "Ben", "Cleo", "Dev"])


@pytest.mark.parametrize("field, value", [("duration_minutes", 0), ("break_minutes", -1)])
def test_duration_validation(field, value):
    with pytest.raises(ValidationError):
        SessionConfig.model_validate({"players": PLAYERS, field: value})


def test_rotated_moves_first_player_to_end():
    config = session_from_names(PLAYERS)
    rotated = config.rotated()
    assert [p.name for p in rotated.players] == PLAYERS[1:] + PLAYERS[:1]
    assert [p.id for p in rotated.players] == [p.id for p in config.players[1:] + config.players[:1]]
    assert [p.name for p in config.players] == PLAYERS


def test_dump_and_reload_preserves_ids(tmp_path: Path):
    config = session_from_names(PLAYERS, duration_minutes=20, name="club")
    path = dump_session(config, tmp_path / "out" / "club.yaml")
    reloaded = load_session(path)
    assert reloaded.players == config.players
    assert reloaded.duration_minutes == 20
    assert reloaded.name == "club"


def test_fractional_minutes_convert_exactly():
    assert session_from_names(PLAYERS, duration_minutes=4.1).total_seconds == 246
    assert session_from_names(PLAYERS, duration_minutes=0.1).total_seconds == 6
