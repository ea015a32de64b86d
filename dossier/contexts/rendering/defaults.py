"""
Page geometry and typography defaults for generated summaries.

The page size and the two font faces are fixed. Spacing and type sizes live in
PDFLayout and can be overridden from a YAML file (see load_pdf_layout), e.g.:

    # configs/pdf_layout.yaml
    margin: 60
    text_size: 11
    line_height: 16
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
PDF_LAYOUT_CONFIG = os.getenv("PDF_LAYOUT_CONFIG")

# A4 portrait, in points
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89

# Standard Type 1 faces; no font files are embedded
FONT_BOLD = "Helvetica-Bold"
FONT_REGULAR = "Helvetica"

DOCUMENT_TITLE = "Application Summary"


@dataclass
class PDFLayout:
    """
    Typography and spacing for one generated document (all values in points).

    Attributes:
        margin: Distance from every page edge to the content area
        title_size: Font size of the document title
        heading_size: Font size of section headings
        text_size: Font size of body text
        line_height: Vertical advance per body line (blank lines included)
        title_gap: Extra space below the title
        heading_gap: Extra space below a section heading
        section_gap: Trailing space after each section body
        heading_reserve: Minimum space above the bottom margin needed to start a section
        line_reserve: Minimum space above the bottom margin needed to draw a body line
    """

    margin: float = 50.0
    title_size: float = 24.0
    heading_size: float = 16.0
    text_size: float = 12.0
    line_height: float = 18.0
    title_gap: float = 20.0
    heading_gap: float = 10.0
    section_gap: float = 20.0
    heading_reserve: float = 100.0
    line_reserve: float = 20.0

    def __post_init__(self):
        for name in ("margin", "title_size", "heading_size", "text_size", "line_height"):
            if getattr(self, name) <= 0:
                raise ValueError(f"PDF layout '{name}' must be positive, got {getattr(self, name)}")

        if 2 * self.margin >= PAGE_WIDTH:
            raise ValueError(f"Margin {self.margin} leaves no content width")
        if self.margin + self.heading_reserve >= PAGE_HEIGHT - self.margin:
            raise ValueError(
                f"Margin {self.margin} with heading reserve {self.heading_reserve} "
                "leaves no room for a section on a fresh page"
            )
        if not 0 <= self.line_reserve <= self.heading_reserve:
            raise ValueError(
                f"Line reserve {self.line_reserve} must be between 0 and "
                f"heading reserve {self.heading_reserve}"
            )

    @property
    def content_width(self) -> float:
        return PAGE_WIDTH - 2 * self.margin


def load_pdf_layout(config_path: Optional[Path] = None) -> PDFLayout:
    """
    Load the PDF layout, applying YAML overrides on top of the defaults.

    Only PDFLayout fields may appear in the file; anything else (page size,
    fonts, typos) is rejected by OmegaConf's structured merge.

    Args:
        config_path: YAML file with overrides (defaults to PDF_LAYOUT_CONFIG env
                     variable; with neither set, the defaults are returned)

    Returns:
        Validated PDFLayout

    Raises:
        omegaconf.errors.ConfigKeyError: If the file contains unknown keys
        ValueError: If the resulting values are inconsistent
    """
    if config_path is None and PDF_LAYOUT_CONFIG:
        config_path = Path(PDF_LAYOUT_CONFIG)

    if config_path is None:
        return PDFLayout()

    schema = OmegaConf.structured(PDFLayout)
    merged = OmegaConf.merge(schema, OmegaConf.load(config_path))
    return OmegaConf.to_object(merged)
