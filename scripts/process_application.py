#!/usr/bin/env python3
"""
Application Processing CLI

Submits job applications and produces their summary PDFs using the intake and
rendering contexts.

Commands:
    submit     - Validate a form, store the resume and generate the summary
    regenerate - Generate a fresh summary for a registered submission
    fetch      - Copy a submission's summary PDF to a local file
    inspect    - Show the page count and text lines of a PDF

Examples:\n

    process_application.py submit --first-name Ada --last-name Lovelace \\
        --email ada@example.com --job-description "Senior engineer with 5 years experience" \\
        --resume resume.pdf

    process_application.py regenerate 4f1c9e2b7a0d4c1e8f5a6b3c2d1e0f9a

    process_application.py fetch 4f1c9e2b7a0d4c1e8f5a6b3c2d1e0f9a --output summary.pdf

    process_application.py inspect uploads/generated/application-4f1c9e2b.pdf
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from dossier.contexts.intake.exceptions import (
    FormValidationError,
    PDFUnavailableError,
    SubmissionNotFoundError,
    SubmissionNotReadyError,
    UploadValidationError,
)
from dossier.contexts.intake.pipeline import (
    fetch_generated_pdf,
    get_submission,
    regenerate_submission,
    submit_application,
)
from dossier.contexts.intake.submission import download_filename
from dossier.contexts.rendering import GenerationError, load_pdf_layout
from dossier.utils.pdf_processing import PDFDocument

app = typer.Typer(
    help="Submit job applications and generate their summary PDFs",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _report_success(result) -> None:
    typer.secho("\n✓ Summary generated", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Submission: {result.submission.submission_id}")
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  PDF: {result.pdf_path}")
    if result.log_dir:
        typer.echo(f"  Log: {result.log_dir / 'intake.log'}")
    typer.echo("")


@app.command("submit")
def submit_command(
    first_name: Annotated[str, typer.Option("--first-name", help="Applicant first name")],
    last_name: Annotated[str, typer.Option("--last-name", help="Applicant last name")],
    email: Annotated[str, typer.Option("--email", help="Applicant email address")],
    job_description: Annotated[
        Optional[str],
        typer.Option("--job-description", "-j", help="Current job description text"),
    ] = None,
    job_description_file: Annotated[
        Optional[Path],
        typer.Option(
            "--job-description-file",
            "-f",
            help="Read the job description from a text file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    phone: Annotated[Optional[str], typer.Option("--phone", help="Phone number")] = None,
    resume: Annotated[
        Optional[Path],
        typer.Option("--resume", "-r", help="Resume PDF to attach to the summary"),
    ] = None,
    layout_config: Annotated[
        Optional[Path],
        typer.Option("--layout", "-l", help="YAML file with typography overrides"),
    ] = None,
):
    """
    Submit an application and generate its summary PDF.

    Examples:\n

        $ process_application.py submit --first-name Ada --last-name Lovelace \\
            --email ada@example.com -j "Senior engineer with 5 years experience"

        $ process_application.py submit ... --resume resume.pdf --layout configs/pdf_layout.yaml
    """
    if job_description_file is not None:
        job_description = job_description_file.read_text(encoding="utf-8")
    if job_description is None:
        _fail("Provide --job-description or --job-description-file")

    typer.secho(f"\nSubmitting: {first_name} {last_name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Resume: {resume or 'none'}")

    form = {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone": phone,
        "job_description": job_description,
    }

    try:
        result = submit_application(
            form, upload_path=resume, layout=load_pdf_layout(layout_config)
        )
    except (FormValidationError, UploadValidationError, GenerationError, ValueError) as e:
        _fail(str(e))

    _report_success(result)


@app.command("regenerate")
def regenerate_command(
    submission_id: Annotated[str, typer.Argument(help="Submission identifier")],
    layout_config: Annotated[
        Optional[Path],
        typer.Option("--layout", "-l", help="YAML file with typography overrides"),
    ] = None,
):
    """
    Generate a fresh summary for a registered submission.

    Examples:\n

        $ process_application.py regenerate 4f1c9e2b7a0d4c1e8f5a6b3c2d1e0f9a
    """
    typer.secho(f"\nRegenerating: {submission_id}", fg=typer.colors.BLUE, bold=True)

    try:
        result = regenerate_submission(submission_id, layout=load_pdf_layout(layout_config))
    except (SubmissionNotFoundError, GenerationError, ValueError) as e:
        _fail(str(e))

    _report_success(result)


@app.command("fetch")
def fetch_command(
    submission_id: Annotated[str, typer.Argument(help="Submission identifier")],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Destination file (default: application-<First>-<Last>.pdf)",
        ),
    ] = None,
):
    """
    Copy a submission's summary PDF to a local file.

    Examples:\n

        $ process_application.py fetch 4f1c9e2b7a0d4c1e8f5a6b3c2d1e0f9a

        $ process_application.py fetch 4f1c9e2b7a0d4c1e8f5a6b3c2d1e0f9a -o summary.pdf
    """
    try:
        pdf_bytes = fetch_generated_pdf(submission_id)
        if output is None:
            output = Path(download_filename(get_submission(submission_id)))
    except SubmissionNotReadyError as e:
        typer.secho(f"{e}\n", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    except (SubmissionNotFoundError, PDFUnavailableError) as e:
        _fail(str(e))

    output.write_bytes(pdf_bytes)
    typer.secho(f"✓ Saved {len(pdf_bytes)} bytes to {output}", fg=typer.colors.GREEN)


@app.command("inspect")
def inspect_command(
    pdf_path: Annotated[
        Path, typer.Argument(help="PDF to inspect", exists=True, dir_okay=False)
    ],
    max_lines: Annotated[
        int, typer.Option("--max-lines", "-n", help="Lines to show per page", min=1)
    ] = 20,
):
    """
    Show the page count and text lines of a PDF.

    Examples:\n

        $ process_application.py inspect uploads/generated/application-4f1c9e2b.pdf
    """
    pdf = PDFDocument(pdf_path)
    typer.secho(f"\n{pdf_path}: {pdf.page_count} page(s)", fg=typer.colors.BLUE, bold=True)

    for page_num in pdf.iter_pages():
        lines = pdf.get_lines(page_num)
        typer.secho(f"\nPage {page_num} ({len(lines)} lines)", bold=True)
        for line in lines[:max_lines]:
            typer.echo(f"  {line}")
        if len(lines) > max_lines:
            typer.echo(f"  ... and {len(lines) - max_lines} more")
    typer.echo("")


if __name__ == "__main__":
    app()
