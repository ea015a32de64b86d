"""
Summary PDF generation.

Composes the application summary for one submission, merges the uploaded
resume, writes the result to the generated-documents directory and verifies
the write by reading it back.

Document content, in order:
    1. Title "Application Summary"
    2. Section "Applicant Information"
    3. Section "Current Job Description"
    4. Section "Uploaded Document"
    5. Section about the attached document, then its pages (only with an upload)
"""

import os
import tempfile
import time
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from dossier.contexts.intake.submission import (
    Submission,
    format_applicant_info,
    format_document_info,
)
from dossier.contexts.rendering.composer import add_section, add_title
from dossier.contexts.rendering.defaults import DOCUMENT_TITLE, PDFLayout
from dossier.contexts.rendering.exceptions import GenerationError
from dossier.contexts.rendering.logger import (
    _log_debug,
    log_generation_failure,
    log_generation_result,
    log_generation_start,
)
from dossier.contexts.rendering.merger import embed_uploaded_pdf
from dossier.contexts.rendering.render_context import create_render_context
from dossier.utils.pdf_processing import page_count

load_dotenv()
GENERATED_PATH = Path(os.getenv("GENERATED_PATH", "uploads/generated"))


def generated_pdf_name(submission_id: str) -> str:
    """File name of the summary PDF for a submission."""
    return f"application-{submission_id}.pdf"


def compose_summary(submission: Submission, layout: Optional[PDFLayout] = None) -> bytes:
    """
    Compose the summary document in memory and return its bytes.

    Args:
        submission: Submission to summarize (not modified)
        layout: Typography and spacing (default: PDFLayout())

    Returns:
        Serialized PDF bytes
    """
    context = create_render_context(layout, title=DOCUMENT_TITLE)

    add_title(context, DOCUMENT_TITLE)
    add_section(context, "Applicant Information", format_applicant_info(submission))
    add_section(context, "Current Job Description", submission.job_description)
    add_section(context, "Uploaded Document", format_document_info(submission))

    if submission.uploaded_file_path:
        embed_uploaded_pdf(context, submission.uploaded_file_path)

    _log_debug(
        f"Composed {context.document.composed_page_count} page(s) "
        f"+ {context.document.attached_page_count} attached"
    )
    return context.document.serialize()


def verify_written_pdf(
    pdf_path: Path, expected_size: int, submission_id: Optional[str] = None
) -> None:
    """
    Read a written PDF back and make sure it is complete.

    Raises:
        GenerationError: If the file is missing, empty, or shorter than expected
    """
    try:
        written = pdf_path.read_bytes()
    except OSError as e:
        raise GenerationError(
            f"PDF file verification failed: {e}", submission_id, original_error=e
        ) from e

    if len(written) == 0:
        raise GenerationError("Saved PDF file is empty", submission_id)
    if len(written) != expected_size:
        raise GenerationError(
            f"PDF file verification failed: wrote {expected_size} bytes, read back {len(written)}",
            submission_id,
        )


def write_verified_pdf(
    pdf_path: Path, pdf_bytes: bytes, submission_id: Optional[str] = None
) -> None:
    """
    Write PDF bytes next to pdf_path, verify them, then move them into place.

    The file at pdf_path is only replaced by a copy that passed verification.
    The staged file is removed whatever the outcome.

    Raises:
        GenerationError: If the staged copy fails verification
    """
    temp_fd, temp_path = tempfile.mkstemp(
        dir=pdf_path.parent, prefix=f".{pdf_path.stem}-", suffix=".tmp"
    )
    staged_path = Path(temp_path)
    try:
        with os.fdopen(temp_fd, "wb") as f:
            f.write(pdf_bytes)

        verify_written_pdf(staged_path, len(pdf_bytes), submission_id)
        os.replace(staged_path, pdf_path)
    finally:
        staged_path.unlink(missing_ok=True)


def generate_pdf(
    submission: Submission,
    output_dir: Optional[Path] = None,
    layout: Optional[PDFLayout] = None,
) -> Path:
    """
    Generate, store and verify the summary PDF for a submission.

    Problems with the uploaded document are rendered into the summary and do
    not fail generation. Everything else is fatal and raised as a single
    GenerationError; the returned path always points at a verified file. A
    failed run leaves any previous summary at that path untouched.

    Args:
        submission: Submission to summarize (not modified)
        output_dir: Directory for generated PDFs (default: GENERATED_PATH env)
        layout: Typography and spacing (default: PDFLayout())

    Returns:
        Path to the written PDF (application-<submission_id>.pdf)

    Raises:
        GenerationError: If composition, serialization, writing or verification fails

    Example:
        >>> pdf_path = generate_pdf(submission)
        >>> pdf_path.name
        'application-4f1c9e2b7a0d4c1e.pdf'
    """
    output_dir = Path(output_dir) if output_dir is not None else GENERATED_PATH
    pdf_path = output_dir / generated_pdf_name(submission.submission_id)

    log_generation_start(submission.submission_id, submission.uploaded_file_path, pdf_path)
    start_time = time.time()

    try:
        pdf_bytes = compose_summary(submission, layout)
        if len(pdf_bytes) == 0:
            raise GenerationError("Generated PDF is empty", submission.submission_id)

        output_dir.mkdir(parents=True, exist_ok=True)
        write_verified_pdf(pdf_path, pdf_bytes, submission.submission_id)

    except GenerationError as e:
        log_generation_failure(submission.submission_id, e, time.time() - start_time)
        raise
    except Exception as e:
        log_generation_failure(submission.submission_id, e, time.time() - start_time)
        raise GenerationError(
            f"PDF generation failed: {e}", submission.submission_id, original_error=e
        ) from e

    log_generation_result(
        submission.submission_id,
        pdf_path,
        byte_count=len(pdf_bytes),
        page_count=page_count(pdf_bytes) or 0,
        elapsed_time=time.time() - start_time,
    )
    return pdf_path
