#!/usr/bin/env python3
"""
Command-line interface for the submission registry.

The submission registry (outs/logs/submission_registry.csv) tracks every
application and its lifecycle status. This script provides read-only views of
the registry and the pipeline event log.

Commands:
    list   - List submissions (optionally filter by status)
    stats  - Show registry statistics
    status - Show one submission in detail
    events - Show recent pipeline events
    audit  - Compare registry statuses with the event log
"""

from typing import Optional

import typer
from typing_extensions import Annotated

from dossier.utils.event_logging import deduce_statuses_from_events, get_recent_events
from dossier.utils.submission_registry import (
    SUBMISSION_STATUSES,
    count_submissions,
    get_all_submissions,
    get_submission_record,
    list_submissions_by_status,
)
from dossier.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="Inspect the submission registry (submission_registry.csv)",
    invoke_without_command=True,
)

STATUS_COLORS = {
    "pending": typer.colors.WHITE,
    "processing": typer.colors.YELLOW,
    "completed": typer.colors.GREEN,
    "failed": typer.colors.RED,
}


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("list")
def list_command(
    status: Annotated[
        Optional[str],
        typer.Option("--status", "-s", help=f"Filter by status ({', '.join(SUBMISSION_STATUSES)})"),
    ] = None,
):
    """
    List registered submissions.

    Examples:\n

        $ manage_submissions.py list

        $ manage_submissions.py list --status failed
    """
    if status is not None and status not in SUBMISSION_STATUSES:
        typer.secho(f"Unknown status: {status}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    rows = list_submissions_by_status(status) if status else get_all_submissions()
    if not rows:
        typer.echo("No submissions found.")
        return

    for row in rows:
        name = f"{row['first_name']} {row['last_name']}"
        updated = format_timestamp(row["last_updated"], relative=True)
        typer.secho(
            f"{row['submission_id']}  {row['status']:<10}  {name:<30}  {updated}",
            fg=STATUS_COLORS.get(row["status"]),
        )


@app.command("stats")
def stats_command():
    """Show submission counts by status."""
    counts = count_submissions()
    typer.secho(f"\nTotal submissions: {counts['total']}", bold=True)
    for status in SUBMISSION_STATUSES:
        typer.secho(
            f"  {status:<10} {counts['by_status'].get(status, 0)}", fg=STATUS_COLORS[status]
        )
    typer.echo("")


@app.command("status")
def status_command(
    submission_id: Annotated[str, typer.Argument(help="Submission identifier")],
):
    """Show one submission in detail, with its recent events."""
    record = get_submission_record(submission_id)
    if record is None:
        typer.secho(f"Submission not found: {submission_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n{submission_id}", fg=typer.colors.BLUE, bold=True)
    typer.secho(f"  Status:    {record['status']}", fg=STATUS_COLORS.get(record["status"]))
    typer.echo(f"  Applicant: {record['first_name']} {record['last_name']} <{record['email']}>")
    typer.echo(f"  Upload:    {record['uploaded_file_name'] or 'none'}")
    typer.echo(f"  PDF:       {record['generated_pdf_path'] or 'none'}")
    typer.echo(f"  Created:   {format_timestamp(record['created_at'])}")
    typer.echo(f"  Updated:   {format_timestamp(record['last_updated'], relative=True)}")

    events = get_recent_events(10, submission_id=submission_id)
    if events:
        typer.echo("\n  Recent events:")
        for event in events:
            typer.echo(f"    {format_timestamp(event['timestamp'])}  {event['event_type']}")
    typer.echo("")


@app.command("events")
def events_command(
    n: Annotated[int, typer.Option("--count", "-n", help="Number of events", min=1)] = 10,
    event_type: Annotated[
        Optional[str], typer.Option("--type", "-t", help="Filter by event type")
    ] = None,
):
    """
    Show recent pipeline events.

    Examples:\n

        $ manage_submissions.py events -n 20

        $ manage_submissions.py events --type status_change
    """
    events = get_recent_events(n, event_type=event_type)
    if not events:
        typer.echo("No events found.")
        return

    for event in events:
        detail = ""
        if event["event_type"] == "status_change":
            detail = f"{event['old_status']} -> {event['new_status']}"
        elif event["event_type"] == "registration":
            detail = event["status"]
        typer.echo(
            f"{format_timestamp(event['timestamp'])}  {event['submission_id'][:12]}  "
            f"{event['event_type']:<14} {detail}"
        )


@app.command("audit")
def audit_command():
    """Report submissions whose registry status disagrees with the event log."""
    try:
        deduced = deduce_statuses_from_events()
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    mismatches = 0
    for row in get_all_submissions():
        expected = deduced.get(row["submission_id"])
        if expected is None:
            typer.secho(f"⊘ {row['submission_id']}: no registration event", fg=typer.colors.YELLOW)
            mismatches += 1
        elif expected["status"] != row["status"]:
            typer.secho(
                f"✗ {row['submission_id']}: registry {row['status']}, events {expected['status']}",
                fg=typer.colors.RED,
            )
            mismatches += 1

    if mismatches:
        raise typer.Exit(code=1)
    typer.secho("✓ Registry matches the event log", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
