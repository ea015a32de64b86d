"""
Shared utilities for DOSSIER.

Common functionality used across contexts:
- Session logging and pipeline events
- Submission registry
- PDF inspection
- Timestamps
"""

from dossier.utils.pdf_processing import PDFDocument, page_count
from dossier.utils.timestamp import now, now_exact

__all__ = ["PDFDocument", "page_count", "now", "now_exact"]
