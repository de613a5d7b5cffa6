from __future__ import annotations

import json
from contextlib import nullcontext
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from squadrota.cli._utils import resolve_session
from squadrota.cli.countdown_dashboard import CountdownConfig, LiveCountdown
from squadrota.core.errors import SquadRotaValueError
from squadrota.evaluation import (
    assignment_dataframe,
    audit_fairness,
    role_count_dataframe,
    shift_dataframe,
)
from squadrota.roster.models import Role
from squadrota.scheduling import Shift, generate_schedule
from squadrota.session import SessionConfig, dump_session
from squadrota.telemetry import SessionTelemetryLogger
from squadrota.timeline import TimelineController, format_time

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Fair five-a-side rotation planner.")
console = Console()

_SESSION_ARG = typer.Argument(None, help="Session YAML file (players, duration_minutes, break_minutes).")
_PLAYER_OPT = typer.Option(None, "--player", "-p", help="Player name (repeatable, 5-10 players).")
_MINUTES_OPT = typer.Option(None, "--minutes", "-m", help="Session length in minutes (default 40).")


def _enable_rich_tracebacks():
    """Enable rich tracebacks with local variables and customized formatting."""
    try:
        import rich.traceback as _rt

        _rt.install(show_locals=True, width=140, extra_lines=2)
    except Exception:
        pass


def _print_schedule(config: SessionConfig, schedule: tuple[Shift, ...]) -> None:
    roster = config.roster()
    shifts = shift_dataframe(schedule, roster)

    t = Table(title=f"Session: {config.name} ({len(roster)} players, {format_time(int(config.total_seconds))})")
    t.add_column("Shift", justify="right")
    t.add_column("From", justify="right")
    t.add_column("To", justify="right")
    t.add_column(Role.GOALKEEPER.label, style="magenta")
    t.add_column(Role.OUTFIELD.label, style="cyan")
    t.add_column(Role.BENCH.label, style="dim")
    for row in shifts.itertuples(index=False):
        t.add_row(
            str(row.shift_index),
            row.start_label,
            row.end_label,
            row.goalkeeper,
            row.outfield,
            row.bench or "-",
        )
    console.print(t)

    counts = role_count_dataframe(schedule, roster)
    c = Table(title="Role distribution")
    c.add_column("Player")
    for role in Role:
        c.add_column(role.label, justify="right")
        c.add_column(f"{role.label} time", justify="right")
    for record in counts.to_dict("records"):
        cells = [str(record["name"])]
        for role in Role:
            cells.append(str(record[role.value]))
            cells.append(format_time(int(record[f"{role.value}_seconds"])))
        c.add_row(*cells)
    console.print(c)

    violations = audit_fairness(schedule, roster)
    if violations:
        console.print("[red]Unfair rotation:[/]\n- " + "\n- ".join(v.describe() for v in violations))
    else:
        console.print("[bold green]Fair rotation[/]: every player keeps goal once and plays outfield 4x.")


@app.command()
def schedule(
    session: Path | None = _SESSION_ARG,
    player: list[str] | None = _PLAYER_OPT,
    minutes: float | None = _MINUTES_OPT,
    out_csv: Path | None = typer.Option(None, "--out-csv", help="Write per-player assignments CSV."),
    out_json: Path | None = typer.Option(None, "--out-json", help="Write the shift list as JSON."),
):
    """Print the rotation schedule and fairness summary."""
    config = resolve_session(session, player, minutes=minutes)
    roster = config.roster()
    shifts = generate_schedule(roster, config.total_seconds)
    _print_schedule(config, shifts)

    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        assignment_dataframe(shifts, roster).to_csv(out_csv, index=False)
        console.print(f"Wrote assignments to {out_csv}")
    if out_json:
        out_json.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "session": config.name,
            "total_seconds": config.total_seconds,
            "players": [p.model_dump() for p in roster],
            "shifts": [
                {
                    "index": shift.index,
                    "start_time": shift.start_time,
                    "end_time": shift.end_time,
                    "assignments": {pid: role.value for pid, role in shift.assignments.items()},
                }
                for shift in shifts
            ],
        }
        out_json.write_text(json.dumps(payload, indent=2))
        console.print(f"Wrote schedule to {out_json}")


@app.command()
def run(
    session: Path | None = _SESSION_ARG,
    player: list[str] | None = _PLAYER_OPT,
    minutes: float | None = _MINUTES_OPT,
    break_minutes: float | None = typer.Option(
        None, "--break-minutes", "-b", help="Half-time break length in minutes (0 disables)."
    ),
    speed: float = typer.Option(1.0, "--speed", min=0.01, help="Clock speed multiplier."),
    telemetry_log: Path | None = typer.Option(
        None, "--telemetry-log", help="Append session events to this JSONL file."
    ),
    no_forecast: bool = typer.Option(False, "--no-forecast", help="Hide next-role hints."),
    debug: bool = typer.Option(False, "--debug", help="Verbose tracebacks"),
):
    """Run the live countdown. Ctrl-C stops the clock."""
    if debug:
        _enable_rich_tracebacks()
    config = resolve_session(session, player, minutes=minutes, break_minutes=break_minutes)
    roster = config.roster()

    controller = TimelineController(
        config.timeline_config(tick_interval=1.0 / speed), session_name=config.name
    )
    telemetry = (
        SessionTelemetryLogger(
            log_path=telemetry_log,
            session=config.name,
            roster_size=len(roster),
            total_seconds=int(config.total_seconds),
            config={"break_seconds": config.break_seconds, "speed": speed},
        )
        if telemetry_log
        else nullcontext()
    )

    with telemetry as run_logger:
        if run_logger is not None:
            controller.subscribe(run_logger)
        try:
            schedule = controller.load_session(roster, config.total_seconds)
        except SquadRotaValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        dashboard = LiveCountdown(
            schedule,
            roster,
            CountdownConfig(show_forecast=not no_forecast, title=f"SquadRota: {config.name}"),
            console=console,
        )
        controller.subscribe(dashboard.sink)
        with dashboard, controller:
            try:
                # False when there is no whole second to play; the session is already finished.
                if controller.start():
                    dashboard.wait_until_finished()
            except KeyboardInterrupt:
                controller.pause()
                console.print(
                    f"[yellow]Stopped[/] at {format_time(controller.elapsed_seconds)} "
                    f"(shift {controller.current_shift().index}/{len(schedule)})"
                )
                return
    console.print("[bold green]Full time.[/] Run `squadrota rotate` to set up the next session.")
    if telemetry_log:
        console.print(f"[dim]Session events written to {telemetry_log}.[/]")


@app.command()
def rotate(
    session: Path = typer.Argument(..., help="Session YAML file to rotate."),
    out: Path | None = typer.Option(
        None, "--out", help="Where to write the next session (defaults to overwriting SESSION)."
    ),
):
    """Move the first player to the end for the next session."""
    config = resolve_session(session, None)
    rotated = config.rotated()
    target = dump_session(rotated, out or session)
    console.print("Next session order: " + ", ".join(p.name for p in rotated.players))
    console.print(f"Wrote {target}")


if __name__ == "__main__":
    app()
