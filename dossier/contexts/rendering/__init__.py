"""
Rendering Context

Responsibilities:
- Lays out applicant text into fixed-size pages (wrapping, pagination)
- Composes the application summary (title, sections)
- Merges uploaded PDFs, degrading to explanatory text when they are unusable
- Writes and verifies the generated PDF

Owns: PDF composition, uploaded-document merging, generated output files
Never: Changes submission records or their status
"""

from dossier.contexts.rendering.defaults import PDFLayout, load_pdf_layout
from dossier.contexts.rendering.exceptions import GenerationError
from dossier.contexts.rendering.generator import compose_summary, generate_pdf
from dossier.contexts.rendering.merger import MergeOutcome, embed_pdf_bytes, embed_uploaded_pdf

__all__ = [
    # Orchestration
    "generate_pdf",
    "compose_summary",
    "GenerationError",
    # Uploaded document merging
    "embed_uploaded_pdf",
    "embed_pdf_bytes",
    "MergeOutcome",
    # Configuration
    "PDFLayout",
    "load_pdf_layout",
]
