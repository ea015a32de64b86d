"""
Submission Registry Management

Provides the authoritative record of submissions and their lifecycle status.
Registry stored as CSV at outs/logs/submission_registry.csv.

Schema:
    submission_id (str): Unique identifier (PRIMARY KEY)
    first_name, last_name, email, phone (str): Applicant identity
    job_description (str): Applicant-supplied job description
    uploaded_file_path, uploaded_file_name (str): Stored upload, empty if none
    generated_pdf_path (str): Summary PDF, empty until generation completes
    status (str): Lifecycle status ("pending", "processing", "completed", "failed")
    created_at (str): ISO 8601 timestamp of registration
    last_updated (str): ISO 8601 timestamp of last modification

Usage:
    from dossier.utils.submission_registry import register_submission, update_submission_status

    register_submission(row, source="intake")
    update_submission_status({"4f1c9e...": "completed"}, source="intake")
"""

import csv
import os
import shutil
import tempfile
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from dossier.utils.event_logging import log_pipeline_event, log_status_change
from dossier.utils.timestamp import now_exact

load_dotenv()
REGISTRY_FILE = Path(os.getenv("SUBMISSION_REGISTRY", "outs/logs/submission_registry.csv"))
REGISTRY_COLUMNS = [
    "submission_id",
    "first_name",
    "last_name",
    "email",
    "phone",
    "job_description",
    "uploaded_file_path",
    "uploaded_file_name",
    "generated_pdf_path",
    "status",
    "created_at",
    "last_updated",
]
SUBMISSION_STATUSES = ("pending", "processing", "completed", "failed")


def ensure_registry_exists() -> None:
    """Create registry file with header if it doesn't exist."""
    if not REGISTRY_FILE.exists():
        REGISTRY_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(REGISTRY_FILE, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(REGISTRY_COLUMNS)


def _read_rows() -> List[Dict[str, str]]:
    ensure_registry_exists()
    with open(REGISTRY_FILE, "r", newline="", encoding="utf-8") as f:
        return [dict(row) for row in csv.DictReader(f)]


def _write_rows(rows: List[Dict[str, str]]) -> None:
    """Rewrite the registry through a temp file so a failed write never truncates it."""
    temp_fd, temp_path = tempfile.mkstemp(suffix=".csv", text=True)
    try:
        with os.fdopen(temp_fd, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=REGISTRY_COLUMNS)
            writer.writeheader()
            writer.writerows(rows)

        shutil.move(temp_path, REGISTRY_FILE)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def submission_is_registered(submission_id: str) -> bool:
    """Check if a submission is already registered."""
    return any(row["submission_id"] == submission_id for row in _read_rows())


def register_submission(record: Dict[str, str], source: str) -> None:
    """
    Register a new submission in the registry and log the event.

    Args:
        record: Registry row; must contain submission_id and status.
                Missing columns are stored empty, unknown keys are ignored.
        source: Event source (e.g., "intake", "cli")

    Raises:
        ValueError: If the submission is already registered or the status is unknown
    """
    submission_id = record["submission_id"]
    status = record["status"]

    if status not in SUBMISSION_STATUSES:
        raise ValueError(f"Unknown submission status: {status}")
    if submission_is_registered(submission_id):
        raise ValueError(f"Submission '{submission_id}' already registered")

    timestamp = now_exact()
    row = {column: record.get(column) or "" for column in REGISTRY_COLUMNS}
    row["created_at"] = row["created_at"] or timestamp
    row["last_updated"] = timestamp

    with open(REGISTRY_FILE, "a", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=REGISTRY_COLUMNS)
        writer.writerow(row)

    log_pipeline_event(
        event_type="registration",
        submission_id=submission_id,
        source=source,
        status=status,
    )


def update_submission_status(
    updates: Dict[str, str], source: str, **extra_fields
) -> Dict[str, bool]:
    """
    Update status for one or more submissions and log events.

    Reads once, updates in memory, writes once.
    Logs a status_change event for each successful update.

    Args:
        updates: Dict mapping submission_id -> new status
        source: Event source (e.g., "intake", "cli")
        **extra_fields: Additional fields to include in status_change events

    Returns:
        Dict mapping submission_id -> success (True if updated, False if not found)

    Raises:
        ValueError: If any requested status is unknown
    """
    for new_status in updates.values():
        if new_status not in SUBMISSION_STATUSES:
            raise ValueError(f"Unknown submission status: {new_status}")

    timestamp = now_exact()
    updated = {submission_id: False for submission_id in updates}
    old_statuses = {}

    rows = _read_rows()
    for row in rows:
        submission_id = row["submission_id"]
        if submission_id in updates:
            old_statuses[submission_id] = row["status"]
            row["status"] = updates[submission_id]
            row["last_updated"] = timestamp
            updated[submission_id] = True

    _write_rows(rows)

    for submission_id, was_updated in updated.items():
        if was_updated:
            log_status_change(
                submission_id=submission_id,
                old_status=old_statuses[submission_id],
                new_status=updates[submission_id],
                source=source,
                **extra_fields,
            )

    return updated


def set_generated_pdf_path(submission_id: str, pdf_path: Path) -> bool:
    """Record the generated PDF location. Returns False if the submission is unknown."""
    found = False
    rows = _read_rows()
    for row in rows:
        if row["submission_id"] == submission_id:
            row["generated_pdf_path"] = str(pdf_path)
            row["last_updated"] = now_exact()
            found = True

    if found:
        _write_rows(rows)
    return found


def get_submission_record(submission_id: str) -> Optional[Dict[str, str]]:
    """
    Get the full registry entry for a submission.

    Returns:
        Dict with submission fields, or None if not found
    """
    for row in _read_rows():
        if row["submission_id"] == submission_id:
            return row
    return None


def list_submissions_by_status(status: str) -> List[Dict[str, str]]:
    """Get all submissions with a specific status."""
    return [row for row in _read_rows() if row["status"] == status]


def get_all_submissions() -> List[Dict[str, str]]:
    """Get all registered submissions."""
    return _read_rows()


def count_submissions() -> Dict[str, object]:
    """
    Get counts of submissions by status.

    Returns:
        Dict with total count and counts by status
    """
    all_submissions = _read_rows()
    by_status = Counter(row["status"] for row in all_submissions)

    return {
        "total": len(all_submissions),
        "by_status": by_status,
    }
