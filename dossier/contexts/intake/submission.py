"""
Submission data structure for the Intake context.

Provides the Submission record read by the rendering context, plus the text
blocks derived from it that appear in the generated summary.
"""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from dossier.utils.timestamp import format_application_date


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


def new_submission_id() -> str:
    """Random 32-character hex identifier."""
    return uuid.uuid4().hex


@dataclass
class Submission:
    """
    One applicant's form data plus optional uploaded resume and lifecycle status.

    Read-only to the rendering context; status transitions are recorded in the
    submission registry by the intake pipeline.
    """

    submission_id: str
    first_name: str
    last_name: str
    email: str
    job_description: str
    phone: Optional[str] = None
    uploaded_file_path: Optional[str] = None
    uploaded_file_name: Optional[str] = None
    generated_pdf_path: Optional[str] = None
    status: SubmissionStatus = SubmissionStatus.PENDING
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    # =========================================================================
    # REGISTRY CONVERSION
    # =========================================================================

    def to_registry_row(self) -> Dict[str, str]:
        """Flatten to the string columns of the submission registry."""
        return {
            "submission_id": self.submission_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone or "",
            "job_description": self.job_description,
            "uploaded_file_path": self.uploaded_file_path or "",
            "uploaded_file_name": self.uploaded_file_name or "",
            "generated_pdf_path": self.generated_pdf_path or "",
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_registry_row(cls, row: Dict[str, str]) -> "Submission":
        """Rebuild a Submission from a registry row (empty strings become None)."""
        last_updated = row.get("last_updated")
        return cls(
            submission_id=row["submission_id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            job_description=row["job_description"],
            phone=row.get("phone") or None,
            uploaded_file_path=row.get("uploaded_file_path") or None,
            uploaded_file_name=row.get("uploaded_file_name") or None,
            generated_pdf_path=row.get("generated_pdf_path") or None,
            status=SubmissionStatus(row["status"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(last_updated) if last_updated else None,
        )


def format_applicant_info(submission: Submission) -> str:
    """
    Identity block for the "Applicant Information" section.

    Example:
        Name: Ada Lovelace
        Email: ada@example.com
        Phone: Not provided
        Application Date: October 9, 2026 at 03:45 PM
        Status: processing
    """
    info = [
        f"Name: {submission.first_name} {submission.last_name}",
        f"Email: {submission.email}",
        f"Phone: {submission.phone or 'Not provided'}",
        f"Application Date: {format_application_date(submission.created_at)}",
        f"Status: {submission.status.value}",
    ]
    return "\n".join(info)


def format_document_info(submission: Submission) -> str:
    """Body of the "Uploaded Document" section."""
    if not submission.uploaded_file_name:
        return "No document uploaded"

    return (
        f"Uploaded File: {submission.uploaded_file_name}\n"
        "File processed and attached to this PDF."
    )


def download_filename(submission: Submission) -> str:
    """Attachment name offered when the summary is downloaded."""
    first = re.sub(r"[^a-zA-Z0-9]", "_", submission.first_name)
    last = re.sub(r"[^a-zA-Z0-9]", "_", submission.last_name)
    return f"application-{first}-{last}.pdf"
