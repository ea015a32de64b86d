"""
Pipeline event logging utilities for DOSSIER (Tier 2 logging).

Provides uniform interfaces for logging submission events to the pipeline
event log. This is for cross-context coordination via a JSON Lines event log.

For detailed within-context logging (Tier 1), use dossier.utils.logger instead.

Usage:
    from dossier.utils.event_logging import log_status_change, log_pipeline_event

    log_status_change(
        submission_id="4f1c9e...",
        old_status="processing",
        new_status="completed",
        source="intake",
    )

    log_pipeline_event(
        event_type="upload_stored",
        submission_id="4f1c9e...",
        source="intake",
        checksum="ab12...",
    )
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from dossier.utils.timestamp import now_exact

load_dotenv()
PIPELINE_EVENTS_FILE = Path(
    os.getenv("PIPELINE_EVENTS_FILE", "outs/logs/submission_pipeline_events.log")
)

# Event types that mutate registry state
MUTATIVE_EVENTS = {"registration", "status_change"}

# Map event types to their status field names
STATUS_FIELD_BY_EVENT_TYPE = {
    "status_change": "new_status",
    "registration": "status",
}


def log_pipeline_event(event_type: str, submission_id: str, source: str, **extra_fields) -> None:
    """
    Log an event to the master pipeline event log.

    Events are appended in JSON Lines format (one JSON object per line),
    which keeps the log streamable and easy to filter by event_type,
    submission_id, or source.

    Args:
        event_type: Type of event (e.g., "registration", "status_change", "pdf_generated")
        submission_id: Submission identifier
        source: Event source (e.g., "intake", "rendering", "cli")
        **extra_fields: Additional event-specific fields
    """
    PIPELINE_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "submission_id": submission_id,
        "source": source,
        **extra_fields,
    }

    with open(PIPELINE_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, default=str) + "\n")


def log_status_change(
    submission_id: str, old_status: str, new_status: str, source: str, **extra_fields
) -> None:
    """
    Log status change event.

    Pure logging function - does NOT update the registry.
    Called by registry functions after they rewrite the CSV.
    """
    log_pipeline_event(
        event_type="status_change",
        submission_id=submission_id,
        old_status=old_status,
        new_status=new_status,
        source=source,
        **extra_fields,
    )


def _read_events() -> List[Dict]:
    """Load every well-formed event from the log, in file order."""
    if not PIPELINE_EVENTS_FILE.exists():
        return []

    events = []
    with open(PIPELINE_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue
    return events


def get_recent_events(
    n: int = 10, submission_id: Optional[str] = None, event_type: Optional[str] = None
) -> List[Dict]:
    """
    Get the last n events from the pipeline log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        submission_id: Filter to only events for this submission (optional)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)
    """
    events = _read_events()

    if submission_id:
        events = [e for e in events if e.get("submission_id") == submission_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events


def get_status_from_event(event: Dict) -> str:
    """Extract status from event based on event type."""
    status_field = STATUS_FIELD_BY_EVENT_TYPE[event["event_type"]]
    return event[status_field]


def deduce_statuses_from_events() -> Dict[str, Dict[str, str]]:
    """
    Rebuild the latest status of every registered submission from the event log.

    Useful for auditing the registry CSV: for each submission with a
    registration event, the most recent mutative event determines the status.

    Returns:
        Dict mapping submission_id -> {"status": ..., "last_updated": ...},
        in registration order.

    Raises:
        ValueError: If events for a submission are not in chronological order
    """
    events = _read_events()

    statuses: Dict[str, Dict[str, str]] = {}
    for event in events:
        if event.get("event_type") == "registration":
            statuses[event["submission_id"]] = {}

    for submission_id in statuses:
        mutative = [
            event
            for event in events
            if event.get("submission_id") == submission_id
            and event.get("event_type") in MUTATIVE_EVENTS
        ]

        timestamps = [event["timestamp"] for event in mutative]
        if timestamps != sorted(timestamps):
            raise ValueError(
                f"Events are not in chronological order for submission: {submission_id}. "
                "This indicates corruption in the pipeline events log."
            )

        most_recent = mutative[-1]
        statuses[submission_id] = {
            "status": get_status_from_event(most_recent),
            "last_updated": most_recent["timestamp"],
        }

    return statuses
