"""CLI entry point for the tracker."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click
from pydantic import ValidationError

from tracker import tracking
from tracker.api import TogglClient, to_rfc3339
from tracker.config import TrackerSettings, get_settings
from tracker.durations import format_duration_human
from tracker.errors import TrackerError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_settings(obj: dict[str, Any]) -> TrackerSettings:
    settings = obj.get("settings")
    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            click.echo(f"Error: invalid configuration: {e}", err=True)
            sys.exit(1)
        obj["settings"] = settings
    return settings


def _open_client(ctx: click.Context) -> TogglClient:
    """Load settings and build the API client, exiting on bad configuration."""
    settings = _load_settings(ctx.obj)
    _configure_logging("DEBUG" if ctx.obj.get("verbose") else settings.log_level)
    try:
        return TogglClient.from_settings(settings, transport=ctx.obj.get("transport"))
    except TrackerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _workspace(ctx: click.Context, workspace_id: int | None) -> int | None:
    """Command option, then group option, then configured workspace."""
    if workspace_id is not None:
        return workspace_id
    if ctx.obj.get("workspace_id") is not None:
        return ctx.obj["workspace_id"]
    return _load_settings(ctx.obj).workspace_id


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("-v", "--verbose", is_flag=True, help="Log API calls to stderr")
@click.option(
    "-w",
    "--workspace",
    "workspace_id",
    type=click.IntRange(min=0),
    default=None,
    help="Workspace to start entries in (default: first workspace)",
)
@click.option("-d", "--description", default=None, help="Description for a new entry")
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    workspace_id: int | None,
    description: str | None,
) -> None:
    """Toggl Track time tracker.

    Without a command, stops the running entry or starts a new one.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["workspace_id"] = workspace_id
    ctx.obj["description"] = description

    if ctx.invoked_subcommand is not None:
        return

    with _open_client(ctx) as client:
        try:
            outcome = tracking.toggle(
                client,
                workspace_id=_workspace(ctx, None),
                description=description,
            )
        except TrackerError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    click.echo(outcome.value)


@main.command("status")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def status_command(ctx: click.Context, output_json: bool) -> None:
    """Show the running entry and today's and this week's totals."""
    with _open_client(ctx) as client:
        try:
            report = tracking.status_report(client)
        except TrackerError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    if output_json:
        _output_json_status(report)
        return

    elapsed = report.current_elapsed
    if elapsed is None:
        click.echo("current: stopped")
    else:
        click.echo(f"current: {format_duration_human(elapsed)}")
    click.echo(f"today: {format_duration_human(report.today)}")
    click.echo(f"week: {format_duration_human(report.week)}")


def _output_json_status(report: tracking.StatusReport) -> None:
    """Output status report as JSON."""
    current = report.current
    elapsed = report.current_elapsed
    output = {
        "generated_at": report.now.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "running": current is not None,
        "current_entry": None
        if current is None
        else {
            "id": current.id,
            "workspace_id": current.workspace_id,
            "start": to_rfc3339(current.start),
            "description": current.description,
        },
        "current_seconds": None if elapsed is None else int(elapsed.total_seconds()),
        "today_seconds": int(report.today.total_seconds()),
        "week_seconds": int(report.week.total_seconds()),
    }
    click.echo(json.dumps(output, indent=2))


@main.command("start")
@click.option(
    "-w",
    "--workspace",
    "workspace_id",
    type=click.IntRange(min=0),
    default=None,
    help="Workspace to start the entry in (default: first workspace)",
)
@click.option("-d", "--description", default=None, help="Description for the entry")
@click.pass_context
def start_command(
    ctx: click.Context, workspace_id: int | None, description: str | None
) -> None:
    """Start a new entry unless one is already running."""
    if description is None:
        description = ctx.obj.get("description")
    with _open_client(ctx) as client:
        try:
            outcome = tracking.start(
                client,
                workspace_id=_workspace(ctx, workspace_id),
                description=description,
            )
        except TrackerError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    click.echo(outcome.value)


@main.command("stop")
@click.pass_context
def stop_command(ctx: click.Context) -> None:
    """Stop the running entry."""
    with _open_client(ctx) as client:
        try:
            outcome = tracking.stop(client)
        except TrackerError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    click.echo(outcome.value)


if __name__ == "__main__":
    main()
