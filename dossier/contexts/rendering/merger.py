"""
Merging of uploaded (untrusted) PDFs into a generated summary.

The uploaded document is parsed leniently and its pages are appended after
every composed page. Nothing in this module raises: each way the upload can
fail ends in an explanatory "Attached Document" section rendered into the
summary, so a reviewer always sees why a document is missing.

Outcomes (mutually exclusive):
    UNREADABLE   - file could not be read (or an unexpected error occurred)
    EMPTY        - file has zero bytes
    PARSE_FAILED - not a readable PDF (corrupt, or encrypted with a password)
    NO_PAGES     - parsed, but contains no pages
    COPY_FAILED  - pages could not be copied into the summary
    EMBEDDED     - informational section rendered and all pages appended

Page copies are staged into a scratch document and only attached once every
page has been copied and written out, so a failed copy leaves no partial pages.
"""

from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import List, Tuple, Union

from PyPDF2 import PageObject, PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError

from dossier.contexts.rendering.composer import add_section
from dossier.contexts.rendering.logger import log_merge_outcome
from dossier.contexts.rendering.render_context import RenderContext

EOF_MARKER = b"%%EOF"

ATTACHED_HEADING = "Attached Document"
EMBEDDED_HEADING = "Attached Resume/Document"


class MergeOutcome(str, Enum):
    """Result of merging an uploaded document into the summary."""

    EMBEDDED = "embedded"
    UNREADABLE = "unreadable"
    EMPTY = "empty"
    PARSE_FAILED = "parse_failed"
    NO_PAGES = "no_pages"
    COPY_FAILED = "copy_failed"

    @property
    def is_degraded(self) -> bool:
        return self is not MergeOutcome.EMBEDDED


class MergeMessages:
    """Explanatory section bodies (f-string style)."""

    UNREADABLE = "Document was uploaded but could not be embedded in this PDF. Error: {error}"
    EMPTY = "Document file was empty and could not be processed."
    PARSE_FAILED = (
        'Document "{name}" was uploaded but could not be processed. '
        "The file may be corrupted or encrypted."
    )
    NO_PAGES = "Document file contains no pages and could not be processed."
    COPY_FAILED = (
        'Document "{name}" was uploaded but pages could not be copied. '
        "The file may have restrictions or be corrupted."
    )
    EMBEDDED = "The following {count} page(s) contain the uploaded document:"


def open_foreign_pdf(pdf_bytes: bytes) -> Tuple[PdfReader, int]:
    """
    Parse an untrusted PDF as leniently as PyPDF2 allows.

    Structural irregularities are tolerated (strict=False). A file whose only
    defect is a missing %%EOF marker is parsed again with the marker appended.
    Encrypted files are opened with an empty user password when the owner only
    restricted permissions; otherwise reading the pages fails and the error
    propagates.

    Returns:
        Tuple of (reader, page_count)
    """
    try:
        reader = PdfReader(BytesIO(pdf_bytes), strict=False)
    except PdfReadError:
        if EOF_MARKER in pdf_bytes:
            raise
        reader = PdfReader(BytesIO(pdf_bytes + b"\n" + EOF_MARKER + b"\n"), strict=False)

    if reader.is_encrypted:
        reader.decrypt("")
    return reader, len(reader.pages)


def copy_pages(reader: PdfReader) -> List[PageObject]:
    """
    Copy every page of reader, in order, into a self-contained page list.

    The pages are written through a scratch PdfWriter and read back, which
    resolves every object they reference. Broken references fail here rather
    than when the summary is serialized.
    """
    staging = PdfWriter()
    for page in reader.pages:
        staging.add_page(page)

    buffer = BytesIO()
    staging.write(buffer)
    return list(PdfReader(BytesIO(buffer.getvalue())).pages)


def embed_pdf_bytes(context: RenderContext, pdf_bytes: bytes, source_name: str) -> MergeOutcome:
    """
    Append the pages of an uploaded PDF to the summary, or explain why not.

    Args:
        context: Render context of the current generation
        pdf_bytes: Raw contents of the uploaded file
        source_name: File name shown in explanatory sections

    Returns:
        MergeOutcome describing what was rendered
    """
    if len(pdf_bytes) == 0:
        add_section(context, ATTACHED_HEADING, MergeMessages.EMPTY)
        log_merge_outcome(source_name, MergeOutcome.EMPTY)
        return MergeOutcome.EMPTY

    try:
        reader, page_count = open_foreign_pdf(pdf_bytes)
    except Exception as e:
        add_section(context, ATTACHED_HEADING, MergeMessages.PARSE_FAILED.format(name=source_name))
        log_merge_outcome(source_name, MergeOutcome.PARSE_FAILED, str(e))
        return MergeOutcome.PARSE_FAILED

    if page_count == 0:
        add_section(context, ATTACHED_HEADING, MergeMessages.NO_PAGES)
        log_merge_outcome(source_name, MergeOutcome.NO_PAGES)
        return MergeOutcome.NO_PAGES

    try:
        pages = copy_pages(reader)
    except Exception as e:
        add_section(context, ATTACHED_HEADING, MergeMessages.COPY_FAILED.format(name=source_name))
        log_merge_outcome(source_name, MergeOutcome.COPY_FAILED, str(e))
        return MergeOutcome.COPY_FAILED

    add_section(context, EMBEDDED_HEADING, MergeMessages.EMBEDDED.format(count=page_count))
    context.document.attach_pages(pages)
    log_merge_outcome(source_name, MergeOutcome.EMBEDDED)
    return MergeOutcome.EMBEDDED


def embed_uploaded_pdf(context: RenderContext, source_path: Union[str, Path]) -> MergeOutcome:
    """
    Read an uploaded PDF from storage and merge it into the summary.

    Never raises. Read errors, and any error not handled by embed_pdf_bytes,
    are rendered as an explanatory section quoting the error.

    Args:
        context: Render context of the current generation
        source_path: Location of the stored upload

    Returns:
        MergeOutcome describing what was rendered
    """
    source_path = Path(source_path)
    try:
        pdf_bytes = source_path.read_bytes()
        return embed_pdf_bytes(context, pdf_bytes, source_path.name)
    except Exception as e:
        add_section(context, ATTACHED_HEADING, MergeMessages.UNREADABLE.format(error=e))
        log_merge_outcome(source_path.name, MergeOutcome.UNREADABLE, str(e))
        return MergeOutcome.UNREADABLE
