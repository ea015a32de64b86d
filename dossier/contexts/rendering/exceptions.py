"""Custom exceptions for the rendering context."""

from typing import Optional


class GenerationError(Exception):
    """
    Exception raised when a summary PDF cannot be produced or verified.

    The only error the generator lets escape. Problems with an uploaded
    document never raise; they are rendered into the summary instead.

    Attributes:
        message: Error description
        submission_id: Submission whose generation failed
        original_error: The underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        submission_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.submission_id = submission_id
        self.original_error = original_error

        parts = [message]
        if submission_id:
            parts.append(f"Submission: {submission_id}")

        super().__init__("\n".join(parts))
