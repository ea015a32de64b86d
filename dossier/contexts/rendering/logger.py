"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_generation_start(submission_id: str, uploaded_file_path, output_path: Path) -> None:
    """Log start of PDF generation with context."""
    _log_info(f"Generating summary PDF: {submission_id}")
    _log_debug(f"  Upload: {uploaded_file_path or 'none'}")
    _log_debug(f"  Output: {output_path}")


def log_generation_result(
    submission_id: str, pdf_path: Path, byte_count: int, page_count: int, elapsed_time: float
) -> None:
    """Log a verified, written PDF."""
    _log_success(f"{submission_id}: {page_count} page(s), {byte_count} bytes ({elapsed_time:.2f}s)")
    _log_debug(f"  PDF: {pdf_path}")


def log_generation_failure(submission_id: str, error: Exception, elapsed_time: float) -> None:
    """Log a fatal generation failure."""
    _log_error(f"Generation failed for {submission_id} ({elapsed_time:.2f}s)")
    _log_error(f"  {error}")


def log_merge_outcome(source_name: str, outcome, detail: str = "") -> None:
    """
    Log the result of merging an uploaded document.

    Args:
        source_name: File name of the uploaded document
        outcome: MergeOutcome from the merger
        detail: Underlying error text for degraded outcomes
    """
    if outcome.is_degraded:
        _log_warning(f"Uploaded document '{source_name}' not embedded: {outcome.value}")
        if detail:
            _log_debug(f"  Cause: {detail}")
    else:
        _log_info(f"Uploaded document '{source_name}' embedded")
