"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from contextlib import AbstractContextManager
from pathlib import Path

from loguru import logger

from dossier.utils.logger import logging_session

CONTEXT_PREFIX = "[intake]"


def intake_logging_session(log_dir: Path, submission_id: str) -> AbstractContextManager:
    """
    Open the logging session of one submission.

    Records logged inside the block go to <log_dir>/intake.log and to no other
    session's file.

    Args:
        log_dir: Directory for this session
        submission_id: Submission being processed (recorded in the provenance header)

    Returns:
        Context manager yielding the path to the log file
    """
    return logging_session(
        context_name="intake",
        log_dir=log_dir,
        session_id=submission_id,
        extra_provenance={"Submission": submission_id},
    )
