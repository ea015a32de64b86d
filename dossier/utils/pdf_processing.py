"""
PDF processing utilities for inspecting generated documents.

Main class:
    PDFDocument: Parsed PDF with per-page text lines and search.

Helper functions:
    page_count: Quick page count without full extraction.
    normalize_for_matching: Text normalization for fuzzy matching.
"""

from io import BytesIO
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

import pdfplumber
from PyPDF2 import PdfReader


def page_count(source: Union[Path, bytes]) -> Optional[int]:
    """Get page count from a PDF path or byte string, or None if unreadable."""
    try:
        stream = BytesIO(source) if isinstance(source, bytes) else str(source)
        reader = PdfReader(stream, strict=False)
        return len(reader.pages)
    except Exception:
        return None


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


class PDFDocument:
    """
    Parsed PDF with per-page text lines.

    Page text is extracted with pdfplumber on first access and cached.

    Args:
        source: Path to a PDF file, or the PDF bytes themselves

    Example:
        >>> pdf = PDFDocument(Path("application-4f1c.pdf"))
        >>> pdf.get_lines(page=1)[0]
        'Application Summary'
    """

    def __init__(self, source: Union[str, Path, bytes]):
        if isinstance(source, bytes):
            self._source: Union[Path, bytes] = source
        else:
            source = Path(source)
            if not source.exists():
                raise FileNotFoundError(f"PDF not found: {source}")
            self._source = source
        self._pages_cache: Optional[Dict[int, List[str]]] = None

    def _open(self):
        if isinstance(self._source, bytes):
            return pdfplumber.open(BytesIO(self._source))
        return pdfplumber.open(self._source)

    def _extract_pages(self) -> Dict[int, List[str]]:
        """Extract text lines for every page, keyed by 1-indexed page number."""
        pages_data: Dict[int, List[str]] = {}
        with self._open() as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                text = page.extract_text() or ""
                pages_data[page_num] = [line for line in text.splitlines() if line.strip()]
        return pages_data

    def _ensure_loaded(self) -> Dict[int, List[str]]:
        if self._pages_cache is None:
            self._pages_cache = self._extract_pages()
        return self._pages_cache

    @property
    def page_count(self) -> int:
        return len(self._ensure_loaded())

    def get_lines(self, page: int) -> List[str]:
        """
        Get text lines for a page (1-indexed), top-to-bottom.

        Returns an empty list if the page doesn't exist.
        """
        return self._ensure_loaded().get(page, [])

    def find(self, text: str, whole_line: bool = False) -> Optional[Tuple[int, int]]:
        """Find first occurrence of text, as (page, line_index), or None."""
        result = self.find_all(text, whole_line=whole_line, limit=1)
        return result[0] if result else None

    def find_all(
        self, text: str, whole_line: bool = False, limit: Optional[int] = None
    ) -> List[Tuple[int, int]]:
        """
        Find all occurrences of text in the document.

        Args:
            text: Text to search for (normalized: lowercase, alphanumeric only)
            whole_line: If True, text must match entire line. If False, substring match.
            limit: Maximum number of results to return (None = all)

        Returns:
            List of (page, line_index) tuples in document order.
        """
        results: List[Tuple[int, int]] = []
        text_norm = normalize_for_matching(text)
        pages = self._ensure_loaded()

        for page_num in sorted(pages):
            for line_idx, line in enumerate(pages[page_num]):
                line_norm = normalize_for_matching(line)
                match = (text_norm == line_norm) if whole_line else (text_norm in line_norm)
                if match:
                    results.append((page_num, line_idx))
                    if limit and len(results) >= limit:
                        return results

        return results

    def iter_pages(self) -> Iterator[int]:
        """Iterate over page numbers (1-indexed)."""
        return iter(sorted(self._ensure_loaded()))
