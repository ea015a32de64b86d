"""
Render state for a single document generation.

A RenderContext is created per generation and passed explicitly to every layout
and drawing call. It owns the GeneratedDocument (composed pages on a reportlab
canvas plus any attached foreign pages) and the write cursor. Nothing here is
shared between generations.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Sequence

from PyPDF2 import PageObject, PdfReader, PdfWriter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from dossier.contexts.rendering.defaults import (
    DOCUMENT_TITLE,
    FONT_BOLD,
    FONT_REGULAR,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    PDFLayout,
)


@dataclass
class FontSet:
    """Resolved font names for headings (bold) and body text (regular)."""

    bold: str
    regular: str


def resolve_font(font_name: str) -> str:
    """
    Make sure reportlab can render the named font.

    Raises:
        KeyError: If the font is not a standard face and was never registered
    """
    pdfmetrics.getFont(font_name)
    return font_name


class GeneratedDocument:
    """
    Output page sequence: composed pages first, then attached pages.

    Composed pages are drawn on a reportlab canvas. Attached pages (copied from
    an uploaded PDF) are held as PyPDF2 page objects and appended after every
    composed page when the document is serialized. The document can be
    serialized once; it is immutable afterwards.
    """

    def __init__(self, page_width: float, page_height: float, title: str = DOCUMENT_TITLE):
        self.page_width = page_width
        self.page_height = page_height
        self.title = title
        self.composed_page_count = 1
        self._buffer = BytesIO()
        self._attachments: List[PageObject] = []
        self._serialized = False

        self.canvas = canvas.Canvas(self._buffer, pagesize=(page_width, page_height))
        self.canvas.setTitle(title)
        self._open_page()

    def _open_page(self) -> None:
        # canvas.save() only emits the final page if it holds content
        self.canvas.saveState()
        self.canvas.restoreState()

    def start_page(self) -> None:
        """Close the current composed page and begin a new one of the same size."""
        self._check_writable()
        self.canvas.showPage()
        self.composed_page_count += 1
        self._open_page()

    def attach_pages(self, pages: Sequence[PageObject]) -> None:
        """Queue foreign pages to follow the composed pages, preserving their order."""
        self._check_writable()
        self._attachments.extend(pages)

    @property
    def attached_page_count(self) -> int:
        return len(self._attachments)

    @property
    def page_count(self) -> int:
        return self.composed_page_count + self.attached_page_count

    def _check_writable(self) -> None:
        if self._serialized:
            raise RuntimeError("Document has already been serialized")

    def serialize(self) -> bytes:
        """
        Finalize the document and return the PDF bytes.

        Raises:
            RuntimeError: If called more than once
        """
        self._check_writable()
        self._serialized = True
        self.canvas.save()

        composed = PdfReader(BytesIO(self._buffer.getvalue()))
        writer = PdfWriter()
        for page in composed.pages:
            writer.add_page(page)
        for page in self._attachments:
            writer.add_page(page)
        writer.add_metadata({"/Title": self.title})

        output = BytesIO()
        writer.write(output)
        return output.getvalue()


@dataclass
class RenderContext:
    """
    Mutable cursor, page and font state threaded through one generation.

    Attributes:
        document: Output document being composed
        fonts: Bold and regular font names
        layout: Typography and spacing
        cursor_y: Baseline of the next draw, measured from the page bottom
        page_width: Width of every page
        page_height: Height of every page
    """

    document: GeneratedDocument
    fonts: FontSet
    layout: PDFLayout
    cursor_y: float
    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT

    @property
    def margin(self) -> float:
        return self.layout.margin

    @property
    def top(self) -> float:
        """Cursor position at the top of a fresh page."""
        return self.page_height - self.margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def page_number(self) -> int:
        """1-indexed number of the composed page currently being written."""
        return self.document.composed_page_count


def create_render_context(
    layout: Optional[PDFLayout] = None, title: str = DOCUMENT_TITLE
) -> RenderContext:
    """
    Start a new document with one page and both fonts resolved.

    Args:
        layout: Typography and spacing (default: PDFLayout())
        title: Document title stored in the PDF metadata

    Returns:
        RenderContext with the cursor at the top margin of page 1

    Raises:
        KeyError: If either font cannot be resolved
    """
    layout = layout or PDFLayout()
    fonts = FontSet(bold=resolve_font(FONT_BOLD), regular=resolve_font(FONT_REGULAR))
    document = GeneratedDocument(PAGE_WIDTH, PAGE_HEIGHT, title=title)

    return RenderContext(
        document=document,
        fonts=fonts,
        layout=layout,
        cursor_y=PAGE_HEIGHT - layout.margin,
    )


def new_page(context: RenderContext) -> None:
    """Allocate a new page and move the cursor back to the top margin."""
    context.document.start_page()
    context.cursor_y = context.top
