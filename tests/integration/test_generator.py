"""
Integration tests for summary generation.
Tests: Submission (+ optional upload) → written PDF → text and page order read back.
"""

from pathlib import Path

import pytest

from dossier.contexts.rendering import generator
from dossier.contexts.rendering.exceptions import GenerationError
from dossier.contexts.rendering.generator import compose_summary, generate_pdf
from dossier.utils.pdf_processing import PDFDocument


@pytest.mark.integration
def test_summary_without_upload(sample_submission, tmp_path):
    pdf_path = generate_pdf(sample_submission, output_dir=tmp_path)

    assert pdf_path == tmp_path / f"application-{sample_submission.submission_id}.pdf"
    pdf = PDFDocument(pdf_path)
    lines = pdf.get_lines(1)

    assert pdf.page_count == 1
    assert lines[0] == "Application Summary"
    assert "Applicant Information" in lines
    assert "Name: Ada Lovelace" in lines
    assert "Application Date: October 9, 2026 at 03:45 PM" in lines
    assert "Senior engineer with 5 years experience" in lines
    assert "No document uploaded" in lines

    order = [
        pdf.find(text, whole_line=True)
        for text in (
            "Application Summary",
            "Applicant Information",
            "Current Job Description",
            "Uploaded Document",
        )
    ]
    assert order == sorted(order)


@pytest.mark.integration
def test_uploaded_pages_follow_composed_pages(sample_submission, source_pdf, tmp_path):
    upload = source_pdf(3)
    sample_submission.uploaded_file_path = str(upload)
    sample_submission.uploaded_file_name = "resume.pdf"

    pdf = PDFDocument(generate_pdf(sample_submission, output_dir=tmp_path))

    assert pdf.page_count == 4
    assert pdf.find("Uploaded File: resume.pdf")[0] == 1
    assert pdf.find("Attached Resume/Document", whole_line=True)[0] == 1
    assert [pdf.get_lines(page) for page in (2, 3, 4)] == [
        ["Source page 1"],
        ["Source page 2"],
        ["Source page 3"],
    ]


@pytest.mark.integration
def test_long_description_paginates_before_upload(sample_submission, source_pdf, tmp_path):
    sample_submission.job_description = "\n".join(
        f"Responsibility {i}: kept the lights on" for i in range(100)
    )
    sample_submission.uploaded_file_path = str(source_pdf(1))
    sample_submission.uploaded_file_name = "resume.pdf"

    pdf = PDFDocument(generate_pdf(sample_submission, output_dir=tmp_path))
    last = pdf.page_count

    assert last >= 4
    assert pdf.get_lines(last) == ["Source page 1"]
    assert pdf.find("Attached Resume/Document")[0] == last - 1


@pytest.mark.integration
def test_corrupt_upload_still_produces_summary(sample_submission, tmp_path):
    upload = tmp_path / "broken.pdf"
    upload.write_bytes(b"%PDF-1.4\n garbage without a trailer")
    sample_submission.uploaded_file_path = str(upload)
    sample_submission.uploaded_file_name = "broken.pdf"

    pdf_path = generate_pdf(sample_submission, output_dir=tmp_path / "out")
    pdf = PDFDocument(pdf_path)

    assert pdf_path.stat().st_size > 0
    assert pdf.page_count == 1
    assert pdf.find("Attached Document", whole_line=True)
    assert pdf.find('Document "broken.pdf" was uploaded but could not be processed.')


@pytest.mark.integration
def test_regeneration_is_independent(sample_submission, tmp_path):
    first = compose_summary(sample_submission)
    second = compose_summary(sample_submission)
    assert len(first) > 0 and len(second) > 0

    path_a = generate_pdf(sample_submission, output_dir=tmp_path / "a")
    path_b = generate_pdf(sample_submission, output_dir=tmp_path / "b")
    again = generate_pdf(sample_submission, output_dir=tmp_path / "a")

    assert again == path_a
    for path in (path_a, path_b):
        assert PDFDocument(path).get_lines(1)[0] == "Application Summary"


@pytest.mark.integration
def test_empty_output_raises(sample_submission, tmp_path, monkeypatch):
    monkeypatch.setattr(generator, "compose_summary", lambda submission, layout=None: b"")

    with pytest.raises(GenerationError, match="Generated PDF is empty") as exc_info:
        generate_pdf(sample_submission, output_dir=tmp_path)

    assert exc_info.value.submission_id == sample_submission.submission_id
    assert not any(tmp_path.iterdir())


@pytest.mark.integration
def test_failed_read_back_removes_file(sample_submission, tmp_path, monkeypatch):
    monkeypatch.setattr(Path, "read_bytes", lambda self: b"")

    with pytest.raises(GenerationError, match="Saved PDF file is empty"):
        generate_pdf(sample_submission, output_dir=tmp_path)

    assert list(tmp_path.iterdir()) == []


@pytest.mark.integration
def test_failed_regeneration_keeps_previous_summary(sample_submission, tmp_path, monkeypatch):
    pdf_path = generate_pdf(sample_submission, output_dir=tmp_path)
    previous = pdf_path.read_bytes()

    sample_submission.job_description = "Principal engineer with 9 years experience"
    with monkeypatch.context() as m:
        m.setattr(Path, "read_bytes", lambda self: b"")
        with pytest.raises(GenerationError):
            generate_pdf(sample_submission, output_dir=tmp_path)

    assert list(tmp_path.iterdir()) == [pdf_path]
    assert pdf_path.read_bytes() == previous
    assert PDFDocument(pdf_path).find("Senior engineer with 5 years experience")


@pytest.mark.integration
def test_unexpected_errors_are_wrapped(sample_submission, tmp_path, monkeypatch):
    def explode(submission, layout=None):
        raise RuntimeError("font cache corrupted")

    monkeypatch.setattr(generator, "compose_summary", explode)

    with pytest.raises(GenerationError, match="PDF generation failed: font cache corrupted") as e:
        generate_pdf(sample_submission, output_dir=tmp_path)

    assert isinstance(e.value.original_error, RuntimeError)
