"""Custom exceptions for the intake context."""

from typing import Dict, Optional


class FormValidationError(ValueError):
    """
    Exception raised when an application form has invalid fields.

    Attributes:
        errors: Mapping of field name -> first error message for that field
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        lines = ["Invalid form data"]
        lines.extend(f"  {field}: {message}" for field, message in errors.items())
        super().__init__("\n".join(lines))


class UploadValidationError(ValueError):
    """Exception raised when an uploaded file is too large or not a PDF."""

    pass


class SubmissionNotFoundError(LookupError):
    """Exception raised when a submission id is malformed or not registered."""

    pass


class SubmissionNotReadyError(RuntimeError):
    """Exception raised when a summary is requested while it is still being generated."""

    pass


class PDFUnavailableError(RuntimeError):
    """
    Exception raised when a submission has no usable generated PDF.

    Attributes:
        submission_id: Submission whose PDF was requested
        reason: Short description (e.g., "generation failed", "file is empty")
    """

    def __init__(self, message: str, submission_id: Optional[str] = None, reason: str = ""):
        self.submission_id = submission_id
        self.reason = reason
        super().__init__(message)
