from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import yaml

from squadrota.cli.main import app
from squadrota.telemetry import read_jsonl
from tests.cli import CliRunner, cli_text

runner = CliRunner()

PLAYERS = ["Ana", "Ben", "Cleo", "Dev", "Eli", "Fay"]


def _player_args(names: list[str]) -> list[str]:
    args: list[str] = []
    for name in names:
        args.extend(["-p", name])
    return args


def _session_file(tmp_path: Path, **extra) -> Path:
    path = tmp_path / "session.yaml"
    path.write_text(yaml.safe_dump({"name": "club", "players": PLAYERS, **extra}))
    return path


def test_schedule_from_players():
    result = runner.invoke(app, ["schedule", *_player_args(PLAYERS[:5]), "--minutes", "5"])
    assert result.exit_code == 0, cli_text(result)
    output = cli_text(result)
    assert "Fair rotation" in output
    assert "Role distribution" in output
    assert "Ana" in output


def test_schedule_writes_exports(tmp_path: Path):
    out_csv = tmp_path / "assignments.csv"
    out_json = tmp_path / "schedule.json"
    result = runner.invoke(
        app,
        ["schedule", str(_session_file(tmp_path)), "--out-csv", str(out_csv), "--out-json", str(out_json)],
    )
    assert result.exit_code == 0, cli_text(result)

    frame = pd.read_csv(out_csv)
    assert len(frame) == 36
    assert set(frame["role"]) == {"GK", "Outfield", "Bench"}

    payload = json.loads(out_json.read_text())
    assert payload["session"] == "club"
    assert payload["total_seconds"] == 2400
    assert len(payload["shifts"]) == 6
    assert payload["shifts"][-1]["end_time"] == 2400
    first = payload["shifts"][0]
    gk_id = next(pid for pid, role in first["assignments"].items() if role == "GK")
    assert gk_id == payload["players"][0]["id"]


def test_schedule_rejects_small_roster():
    result = runner.invoke(app, ["schedule", *_player_args(PLAYERS[:4])])
    assert result.exit_code == 2
    assert "Minimum 5 players required" in cli_text(result)


def test_schedule_requires_a_source():
    result = runner.invoke(app, ["schedule"])
    assert result.exit_code == 2


def test_schedule_rejects_duplicate_names():
    result = runner.invoke(app, ["schedule", *_player_args(PLAYERS[:4] + ["ana"])])
    assert result.exit_code == 2
    assert "Name already exists" in cli_text(result)


def test_rotate_writes_next_session(tmp_path: Path):
    session = _session_file(tmp_path)
    out = tmp_path / "next.yaml"
    result = runner.invoke(app, ["rotate", str(session), "--out", str(out)])
    assert result.exit_code == 0, cli_text(result)
    assert "Next session order: Ben, Cleo, Dev, Eli, Fay, Ana" in cli_text(result)

    data = yaml.safe_load(out.read_text())
    assert [p["name"] for p in data["players"]] == PLAYERS[1:] + PLAYERS[:1]
    assert yaml.safe_load(session.read_text())["players"] == PLAYERS


def test_run_finishes_and_logs(tmp_path: Path):
    log_path = tmp_path / "events.jsonl"
    result = runner.invoke(
        app,
        [
            "run",
            *_player_args(PLAYERS[:5]),
            "--minutes",
            "0.1",
            "--break-minutes",
            "0",
            "--speed",
            "1000",
            "--telemetry-log",
            str(log_path),
        ],
    )
    assert result.exit_code == 0, cli_text(result)
    assert "Full time." in cli_text(result)

    records = list(read_jsonl(log_path))
    events = [r["event"] for r in records if r["record_type"] == "event"]
    assert events[0] == "load"
    assert "start" in events
    assert events[-1] == "finish"
    assert "break_start" not in events
    summary = records[-1]
    assert summary["record_type"] == "session"
    assert summary["status"] == "finished"
    assert summary["elapsed_seconds"] == 6


def test_run_sub_second_session_exits(tmp_path: Path):
    log_path = tmp_path / "events.jsonl"
    result = runner.invoke(
        app,
        [
            "run",
            *_player_args(PLAYERS[:5]),
            "--minutes",
            "0.01",
            "--speed",
            "1000",
            "--telemetry-log",
            str(log_path),
        ],
    )
    assert result.exit_code == 0, cli_text(result)
    assert "Full time." in cli_text(result)
    summary = list(read_jsonl(log_path))[-1]
    assert summary["status"] == "finished"
    assert summary["elapsed_seconds"] == 0
