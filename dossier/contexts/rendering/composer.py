"""
Document composition: title, headed sections and wrapped body text.

Every function takes the RenderContext of the generation in progress and moves
its cursor down the page. A new page is allocated whenever the cursor would
drop into the bottom reserve, so text is always drawn inside the margins.

Pagination rules:
- A section starts on a new page when less than margin + heading_reserve is
  left, so its heading is never stranded at the bottom of a page.
- A body line starts a new page when less than margin + line_reserve is left.
- Blank body lines draw nothing but still advance the cursor.

Drawing is best-effort: text that cannot be rendered is skipped and the cursor
advances anyway, keeping the vertical rhythm of the page.
"""

from dossier.contexts.rendering.layout import can_encode, sanitize_text, wrap_text
from dossier.contexts.rendering.logger import _log_debug
from dossier.contexts.rendering.render_context import RenderContext, new_page


def draw_text(context: RenderContext, text: str, font_name: str, font_size: float) -> bool:
    """
    Draw one line of text at the left margin and the current cursor.

    Does not move the cursor.

    Returns:
        True if the text was drawn, False if it was skipped
    """
    if not can_encode(text):
        _log_debug(f"Skipped undrawable text on page {context.page_number}: {text!r}")
        return False

    pdf = context.document.canvas
    pdf.setFont(font_name, font_size)
    pdf.setFillColorRGB(0, 0, 0)
    pdf.drawString(context.margin, context.cursor_y, text)
    return True


def ensure_space(context: RenderContext, reserve: float) -> bool:
    """
    Start a new page if less than `reserve` points remain above the bottom margin.

    Returns:
        True if a page was allocated
    """
    if context.cursor_y < context.margin + reserve:
        new_page(context)
        return True
    return False


def add_title(context: RenderContext, title: str) -> None:
    """Draw the document title at the cursor. No overflow check."""
    layout = context.layout
    draw_text(context, sanitize_text(title), context.fonts.bold, layout.title_size)
    context.cursor_y -= layout.title_size + layout.title_gap


def add_section(context: RenderContext, heading: str, body: str) -> None:
    """
    Draw a bold heading followed by the wrapped body text.

    Args:
        context: Render context of the current generation
        heading: Section heading (single line)
        body: Free text; explicit line breaks and blank lines are preserved
    """
    layout = context.layout

    ensure_space(context, layout.heading_reserve)

    draw_text(context, sanitize_text(heading), context.fonts.bold, layout.heading_size)
    context.cursor_y -= layout.heading_size + layout.heading_gap

    for line in wrap_text(sanitize_text(body), context):
        ensure_space(context, layout.line_reserve)

        if line.strip():
            draw_text(context, line, context.fonts.regular, layout.text_size)
        context.cursor_y -= layout.line_height

    context.cursor_y -= layout.section_gap
