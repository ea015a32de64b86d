"""
Submission pipeline: form + upload in, verified summary PDF out.

Orchestrates the intake side of an application. The rendering context only
reads the Submission; every status transition is recorded here, in the
submission registry (Tier 2 events) and the session log (Tier 1).

Lifecycle:
    processing -> completed   summary written and verified
    processing -> failed      GenerationError (re-raised to the caller)
"""

import os
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from dossier.contexts.intake.exceptions import (
    PDFUnavailableError,
    SubmissionNotFoundError,
    SubmissionNotReadyError,
)
from dossier.contexts.intake.form import validate_application_form
from dossier.contexts.intake.logger import (
    _log_info,
    log_submission_completed,
    log_submission_failed,
    log_submission_received,
    intake_logging_session,
    log_upload_stored,
)
from dossier.contexts.intake.submission import Submission, SubmissionStatus, new_submission_id
from dossier.contexts.intake.uploads import store_upload
from dossier.contexts.rendering.defaults import PDFLayout
from dossier.contexts.rendering.exceptions import GenerationError
from dossier.contexts.rendering.generator import generate_pdf
from dossier.utils.event_logging import log_pipeline_event
from dossier.utils.pdf_processing import page_count
from dossier.utils.submission_registry import (
    get_submission_record,
    register_submission,
    set_generated_pdf_path,
    update_submission_status,
)
from dossier.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

# Shortest identifier accepted when fetching a summary
MIN_SUBMISSION_ID_LENGTH = 10


@dataclass
class SubmissionResult:
    """
    Outcome of a successful submission or regeneration.

    Attributes:
        submission: Registry state after completion
        pdf_path: Verified summary PDF
        page_count: Pages in the summary (None if it could not be counted)
        log_dir: Session log directory (None if session logging was skipped)
    """

    submission: Submission
    pdf_path: Path
    page_count: Optional[int] = None
    log_dir: Optional[Path] = None


def get_submission(submission_id: str) -> Submission:
    """
    Load a registered submission.

    Raises:
        SubmissionNotFoundError: If the id is not registered
    """
    record = get_submission_record(submission_id)
    if record is None:
        raise SubmissionNotFoundError(f"Submission not found: {submission_id}")
    return Submission.from_registry_row(record)


def _start_session(submission_id: str, setup_logging: bool) -> AbstractContextManager:
    """Logging session for one submission; yields the log file, or None when disabled."""
    if not setup_logging:
        return nullcontext(None)
    return intake_logging_session(LOGS_PATH / f"intake_{now()}_{submission_id[:8]}", submission_id)


def _generate_and_record(
    submission: Submission,
    output_dir: Optional[Path],
    layout: Optional[PDFLayout],
    log_dir: Optional[Path],
) -> SubmissionResult:
    """Run generation for a submission already marked processing and record the outcome."""
    submission_id = submission.submission_id

    try:
        pdf_path = generate_pdf(submission, output_dir=output_dir, layout=layout)
    except GenerationError as e:
        update_submission_status({submission_id: "failed"}, source="intake", error=e.message)
        log_submission_failed(submission_id, e)
        raise

    pages = page_count(pdf_path)
    set_generated_pdf_path(submission_id, pdf_path)
    update_submission_status(
        {submission_id: "completed"},
        source="intake",
        pdf_path=str(pdf_path),
        page_count=pages,
    )
    log_submission_completed(submission_id, pdf_path, pages)

    return SubmissionResult(
        submission=get_submission(submission_id),
        pdf_path=pdf_path,
        page_count=pages,
        log_dir=log_dir,
    )


def submit_application(
    raw_form: Mapping[str, Optional[str]],
    upload_path: Optional[Path] = None,
    content_type: Optional[str] = None,
    output_dir: Optional[Path] = None,
    layout: Optional[PDFLayout] = None,
    setup_logging: bool = True,
) -> SubmissionResult:
    """
    Validate, store, register and summarize one application.

    Args:
        raw_form: Form fields (first_name, last_name, email, phone, job_description)
        upload_path: Applicant's resume PDF (optional)
        content_type: MIME type reported for the upload (guessed if None)
        output_dir: Directory for generated PDFs (default: GENERATED_PATH env)
        layout: Typography and spacing for the summary
        setup_logging: Configure a session log under LOGS_PATH

    Returns:
        SubmissionResult for the completed submission

    Raises:
        FormValidationError: If the form is invalid (nothing is stored)
        UploadValidationError: If the upload is rejected (nothing is registered)
        GenerationError: If the summary could not be produced (status set to failed)
    """
    form = validate_application_form(raw_form)
    submission_id = new_submission_id()
    with _start_session(submission_id, setup_logging) as log_file:
        log_dir = log_file.parent if log_file else None

        stored = None
        if upload_path is not None:
            stored = store_upload(Path(upload_path), content_type=content_type)
            log_upload_stored(stored)

        submission = Submission(
            submission_id=submission_id,
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            phone=form.phone,
            job_description=form.job_description,
            uploaded_file_path=str(stored.path) if stored else None,
            uploaded_file_name=stored.original_name if stored else None,
            status=SubmissionStatus.PROCESSING,
        )
        register_submission(submission.to_registry_row(), source="intake")
        if stored:
            log_pipeline_event(
                event_type="upload_stored",
                submission_id=submission_id,
                source="intake",
                stored_path=str(stored.path),
                size=stored.size,
                checksum=stored.checksum,
            )
        log_submission_received(submission)

        return _generate_and_record(submission, output_dir, layout, log_dir)


def regenerate_submission(
    submission_id: str,
    output_dir: Optional[Path] = None,
    layout: Optional[PDFLayout] = None,
    setup_logging: bool = True,
) -> SubmissionResult:
    """
    Produce a fresh summary for a registered submission.

    Safe to repeat: each run composes a new document and overwrites the
    previous summary only after it has been written and verified.

    Raises:
        SubmissionNotFoundError: If the id is not registered
        GenerationError: If the summary could not be produced (status set to failed)
    """
    submission = get_submission(submission_id)
    with _start_session(submission_id, setup_logging) as log_file:
        _log_info(f"Regenerating summary for {submission_id} (was {submission.status.value})")

        update_submission_status({submission_id: "processing"}, source="intake")
        submission.status = SubmissionStatus.PROCESSING

        log_dir = log_file.parent if log_file else None
        return _generate_and_record(submission, output_dir, layout, log_dir)


def fetch_generated_pdf(submission_id: str) -> bytes:
    """
    Return the bytes of a submission's generated summary.

    Args:
        submission_id: Submission identifier

    Returns:
        PDF bytes (never empty)

    Raises:
        SubmissionNotFoundError: If the id is malformed or not registered
        SubmissionNotReadyError: If the summary is still being generated
        PDFUnavailableError: If generation failed or the file is missing or empty
    """
    if not submission_id or len(submission_id) < MIN_SUBMISSION_ID_LENGTH:
        raise SubmissionNotFoundError("Invalid submission ID")

    submission = get_submission(submission_id)

    if submission.status is SubmissionStatus.PROCESSING:
        raise SubmissionNotReadyError(
            "PDF is still being generated. Please try again in a moment."
        )
    if submission.status is SubmissionStatus.FAILED:
        raise PDFUnavailableError(
            "PDF generation failed. Please contact support.", submission_id, "generation failed"
        )
    if not submission.generated_pdf_path:
        raise PDFUnavailableError("PDF not available", submission_id, "no generated PDF")

    pdf_path = Path(submission.generated_pdf_path)
    if not pdf_path.is_file():
        raise PDFUnavailableError("PDF file not found on server", submission_id, "file missing")

    pdf_bytes = pdf_path.read_bytes()
    if len(pdf_bytes) == 0:
        raise PDFUnavailableError("PDF file is empty", submission_id, "file is empty")

    return pdf_bytes
