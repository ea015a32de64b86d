"""Unit tests for text sanitizing, measurement and wrapping."""

import pytest

from dossier.contexts.rendering.layout import (
    can_encode,
    measure_text,
    sanitize_text,
    wrap_paragraph,
    wrap_text,
)
from dossier.contexts.rendering.render_context import create_render_context

LOREM = (
    "Led the migration of a monolithic billing platform to event driven services, "
    "coordinating four teams across two time zones while keeping the release cadence "
    "steady and the on call rotation humane. Introduced contract tests, trimmed the "
    "build from forty minutes to nine, and mentored three junior engineers."
)


@pytest.fixture
def context():
    return create_render_context()


@pytest.mark.unit
def test_sanitize_removes_control_and_high_bytes():
    assert sanitize_text("caf\xe9 \x07bell\x00") == "caf bell"


@pytest.mark.unit
def test_sanitize_keeps_tab_and_line_breaks():
    assert sanitize_text("a\tb\r\nc\nd") == "a\tb\r\nc\nd"


@pytest.mark.unit
def test_measure_text_unencodable_returns_none():
    assert measure_text("中文", "Helvetica", 12) is None
    assert not can_encode("中文")


@pytest.mark.unit
def test_measure_text_scales_with_size():
    small = measure_text("Application", "Helvetica", 10)
    large = measure_text("Application", "Helvetica", 20)
    assert small > 0
    assert large == pytest.approx(2 * small)


@pytest.mark.unit
def test_wrap_respects_content_width(context):
    lines = wrap_text(LOREM, context)

    assert len(lines) > 1
    for line in lines:
        width = measure_text(line, context.fonts.regular, context.layout.text_size)
        assert width <= context.content_width


@pytest.mark.unit
def test_wrap_preserves_every_word_in_order(context):
    lines = wrap_text(LOREM, context)
    assert " ".join(lines).split() == LOREM.split()


@pytest.mark.unit
def test_overlong_word_gets_its_own_line(context):
    long_word = "x" * 200
    lines = wrap_text(f"before {long_word} after", context)

    assert lines == ["before", long_word, "after"]
    width = measure_text(long_word, context.fonts.regular, context.layout.text_size)
    assert width > context.content_width


@pytest.mark.unit
def test_blank_paragraphs_become_empty_lines(context):
    lines = wrap_text("First paragraph\n\nSecond\r\n\r\n\r\nThird", context)
    assert lines == ["First paragraph", "", "Second", "", "", "Third"]


@pytest.mark.unit
def test_whitespace_only_paragraph_is_blank(context):
    assert wrap_text("One\n   \nTwo", context) == ["One", "", "Two"]


@pytest.mark.unit
def test_unencodable_words_are_skipped(context):
    assert wrap_text("hello 中文 world", context) == ["hello world"]


@pytest.mark.unit
def test_wrap_paragraph_narrow_width_one_word_per_line():
    assert wrap_paragraph("alpha beta gamma", 1, "Helvetica", 12) == ["alpha", "beta", "gamma"]
