from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import typer

from ...domain.entities import Rundown, parse_instant
from ...infra.exceptions import RundownError
from ...runtime.clock import RundownClock
from ...runtime.cue_order import get_children_timestamps
from ...runtime.runner_state import determine_group_run_state, get_runner_state
from ...runtime.span import get_timestamp_span_duration
from ...runtime.timestamp_types import StartDuration, Timestamps
from ...runtime.timestamps import create_rundown_timestamps
from ...shared.schemas import GroupTimestampsRead, RunnerStateRead, TimestampRead, TimestampsRead

app = typer.Typer(name="timestamps", help="Compute original and actual timelines of a rundown")


def _load_rundown(path: Path) -> Rundown:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise RundownError(f"Cannot read rundown file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RundownError(f"Rundown file {path} is not valid JSON: {e}") from e
    return Rundown.from_dict(data)


def _parse_now(now: str | None) -> datetime | None:
    return parse_instant(now, field_name="--now") if now else None


def _fail(message: str, json_output: bool, code: str = "RUNDOWN_ERROR") -> None:
    if json_output:
        typer.echo(json.dumps({"status": "error", "code": code, "message": message}, indent=2))
    else:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _format_duration(ms: int) -> str:
    sign = "-" if ms < 0 else ""
    seconds = abs(ms) // 1000
    return f"{sign}{seconds // 3600:02d}:{seconds % 3600 // 60:02d}:{seconds % 60:02d}"


def _format_span(span: StartDuration, clock: RundownClock) -> tuple[str, str, str]:
    start = clock.to_local(span.start).strftime("%H:%M:%S")
    days_plus = f"+{span.days_plus}" if span.days_plus else ""
    return start, _format_duration(span.duration), days_plus


def _print_table(timestamps: Timestamps, clock: RundownClock, title: str) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title=title)
    table.add_column("Cue", style="cyan")
    table.add_column("#", style="white", justify="right")
    table.add_column("State", style="magenta")
    table.add_column("Orig. start", style="green")
    table.add_column("Orig. dur.", style="green")
    table.add_column("Orig. day", style="green")
    table.add_column("Actual start", style="yellow")
    table.add_column("Actual dur.", style="yellow")
    table.add_column("Actual day", style="yellow")

    for cue_id, ts in timestamps.cues.items():
        table.add_row(
            cue_id,
            str(ts.index),
            ts.state.value,
            *_format_span(ts.original, clock),
            *_format_span(ts.actual, clock),
        )
    table.add_section()
    table.add_row("TOTAL", "", "", *_format_span(timestamps.original, clock), *_format_span(timestamps.actual, clock))
    console.print(table)


@app.command("show")
def show_timestamps(
    path: Path = typer.Argument(..., help="Path to a rundown snapshot JSON file"),
    now: str | None = typer.Option(None, "--now", help="Current instant, ISO-8601 (default: system time)"),
    timezone: str | None = typer.Option(None, "--timezone", "--tz", help="IANA timezone (default: rundown's)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show original and actual timestamps of every cue.

    Examples:
        rundown timestamps show show.json
        rundown timestamps show show.json --now 2024-07-26T09:12:00Z --tz Europe/Berlin --json
    """
    try:
        rundown = _load_rundown(path)
        timestamps = create_rundown_timestamps(rundown, now=_parse_now(now), timezone=timezone)
        clock = RundownClock(timezone or rundown.timezone)
    except RundownError as e:
        _fail(str(e), json_output)
        return

    if json_output:
        payload = {
            "status": "ok",
            "timestamps": TimestampsRead.model_validate(timestamps).model_dump(mode="json", by_alias=True),
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        _print_table(timestamps, clock, title=rundown.name or str(path))


@app.command("state")
def show_state(
    path: Path = typer.Argument(..., help="Path to a rundown snapshot JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show the phase of the show (PRESHOW, ONAIR or ENDED)."""
    try:
        rundown = _load_rundown(path)
    except RundownError as e:
        _fail(str(e), json_output)
        return

    state = get_runner_state(rundown.runner)
    if json_output:
        payload = {"status": "ok", **RunnerStateRead(state=state).model_dump(mode="json")}
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(state.value)


@app.command("group")
def show_group(
    path: Path = typer.Argument(..., help="Path to a rundown snapshot JSON file"),
    group_id: str = typer.Argument(..., help="Id of the group cue"),
    now: str | None = typer.Option(None, "--now", help="Current instant, ISO-8601 (default: system time)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show the children of a group, its run state and its span duration."""
    try:
        rundown = _load_rundown(path)
        timestamps = create_rundown_timestamps(rundown, now=_parse_now(now))
    except RundownError as e:
        _fail(str(e), json_output)
        return

    children = get_children_timestamps(group_id, timestamps, rundown.cue_order)
    result = GroupTimestampsRead(
        group_id=group_id,
        state=determine_group_run_state(children),
        span_duration=get_timestamp_span_duration(children),
        children=[TimestampRead.model_validate(child) for child in children],
    )

    if json_output:
        payload = {"status": "ok", "group": result.model_dump(mode="json", by_alias=True)}
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(f"Group {group_id}: {result.state.value}")
    if not children:
        typer.echo("  No timed children")
        return
    clock = RundownClock(rundown.timezone)
    for child in children:
        start, duration, days_plus = _format_span(child.actual, clock)
        typer.echo(f"  {child.id}: {child.state.value} {start} {duration} {days_plus}".rstrip())
    typer.echo(f"  Span: {_format_duration(result.span_duration or 0)}")
