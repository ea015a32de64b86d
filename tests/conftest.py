"""Shared fixtures: isolated storage paths, sample submissions and PDF factories."""

from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Callable, List, Optional

import pytest
from PyPDF2 import PdfWriter
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from dossier.contexts.intake.submission import Submission, SubmissionStatus


def make_pdf(page_texts: List[str], user_password: Optional[str] = None) -> bytes:
    """Build a PDF with one page per entry, each showing its text."""
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter, encrypt=user_password)
    for text in page_texts:
        pdf.setFont("Helvetica", 14)
        pdf.drawString(72, 700, text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_empty_pdf() -> bytes:
    """A structurally valid PDF with no pages."""
    buffer = BytesIO()
    PdfWriter().write(buffer)
    return buffer.getvalue()


@pytest.fixture
def isolated_storage(tmp_path, monkeypatch) -> Path:
    """Point the registry, event log, session logs, uploads and outputs at tmp_path."""
    logs = tmp_path / "logs"
    monkeypatch.setattr(
        "dossier.utils.submission_registry.REGISTRY_FILE", logs / "submission_registry.csv"
    )
    monkeypatch.setattr(
        "dossier.utils.event_logging.PIPELINE_EVENTS_FILE",
        logs / "submission_pipeline_events.log",
    )
    monkeypatch.setattr("dossier.contexts.intake.pipeline.LOGS_PATH", logs)
    monkeypatch.setattr("dossier.contexts.intake.uploads.UPLOADS_PATH", tmp_path / "uploads")
    monkeypatch.setattr(
        "dossier.contexts.rendering.generator.GENERATED_PATH", tmp_path / "generated"
    )
    return tmp_path


@pytest.fixture
def pdf_factory() -> Callable[..., bytes]:
    """make_pdf(["page 1 text", ...], user_password=None) -> bytes."""
    return make_pdf


@pytest.fixture
def empty_pdf() -> bytes:
    return make_empty_pdf()


@pytest.fixture
def source_pdf(tmp_path) -> Callable[[int], Path]:
    """Write an n-page upload ("Source page 1" ... "Source page n") and return its path."""

    def _write(n_pages: int, name: str = "resume.pdf") -> Path:
        path = tmp_path / name
        path.write_bytes(make_pdf([f"Source page {i}" for i in range(1, n_pages + 1)]))
        return path

    return _write


@pytest.fixture
def sample_submission() -> Submission:
    return Submission(
        submission_id="4f1c9e2b7a0d4c1e8f5a6b3c2d1e0f9a",
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        job_description="Senior engineer with 5 years experience",
        status=SubmissionStatus.PROCESSING,
        created_at=datetime(2026, 10, 9, 15, 45),
    )


@pytest.fixture
def valid_form() -> dict:
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "Ada@Example.com",
        "phone": "+1 (555) 123-4567",
        "job_description": "Senior engineer with 5 years experience",
    }
