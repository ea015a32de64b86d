"""
Text layout for generated summaries.

Wraps free text into lines that fit the content width of a page at the body
font and size. Measurement is best-effort: text the standard fonts cannot
encode is reported as unmeasurable (None) and the caller skips it.

Helper functions:
    sanitize_text: Strip control and high-byte characters.
    measure_text: Rendered width of a string, or None if it cannot be rendered.
    wrap_text: Split text into lines for one RenderContext.
"""

import re
from typing import List, Optional

from reportlab.pdfbase import pdfmetrics

from dossier.contexts.rendering.render_context import RenderContext

# Characters the standard fonts cannot render reliably (tab, LF and CR are kept)
UNSAFE_CHARACTERS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\xFF]")

# Paragraph separator for user text
LINE_BREAK = re.compile(r"\r?\n")

# Encoding of reportlab's standard Type 1 fonts (WinAnsiEncoding)
STANDARD_FONT_ENCODING = "cp1252"


def sanitize_text(text: str) -> str:
    """Remove control characters and bytes 0x7F-0xFF from text."""
    return UNSAFE_CHARACTERS.sub("", text)


def can_encode(text: str) -> bool:
    """Check whether every character has a glyph in the standard font encoding."""
    try:
        text.encode(STANDARD_FONT_ENCODING)
    except UnicodeEncodeError:
        return False
    return True


def measure_text(text: str, font_name: str, font_size: float) -> Optional[float]:
    """
    Rendered width of text in points, or None if the text cannot be rendered.

    Args:
        text: Text to measure
        font_name: Registered reportlab font name
        font_size: Font size in points

    Returns:
        Width in points, or None for unsupported glyphs
    """
    if not can_encode(text):
        return None
    return pdfmetrics.stringWidth(text, font_name, font_size)


def wrap_paragraph(paragraph: str, max_width: float, font_name: str, font_size: float) -> List[str]:
    """
    Greedily fill lines with the words of a single paragraph.

    Words are split on single spaces. A word that would push a non-empty line
    past max_width starts the next line; a word wider than max_width on its own
    still gets its own (overlong) line. Unmeasurable words are dropped.
    """
    lines: List[str] = []
    current_line = ""

    for word in paragraph.split(" "):
        clean_word = sanitize_text(word)
        test_line = f"{current_line} {clean_word}" if current_line else clean_word

        width = measure_text(test_line, font_name, font_size)
        if width is None:
            continue

        if width > max_width and current_line:
            lines.append(current_line)
            current_line = clean_word
        else:
            current_line = test_line

    if current_line:
        lines.append(current_line)

    return lines


def wrap_text(text: str, context: RenderContext) -> List[str]:
    """
    Wrap text into lines that fit the context's content width.

    Explicit line breaks (\\n or \\r\\n) split paragraphs first. Each empty or
    whitespace-only paragraph becomes one empty line, so paragraph spacing
    survives layout. Pure function of its inputs; the context is only read.

    Args:
        text: Text to wrap
        context: Render context supplying content width and body font

    Returns:
        Lines in reading order; "" marks a blank line

    Example:
        >>> wrap_text("First paragraph\\n\\nSecond", context)
        ['First paragraph', '', 'Second']
    """
    font_name = context.fonts.regular
    font_size = context.layout.text_size
    max_width = context.content_width

    all_lines: List[str] = []
    for paragraph in LINE_BREAK.split(text):
        if not paragraph.strip():
            all_lines.append("")
            continue
        all_lines.extend(wrap_paragraph(paragraph, max_width, font_name, font_size))

    return all_lines
