"""
Generic logger setup utilities for Tier 1 (detailed) logging.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers should be defined in contexts/{context}/logger.py.

Each logging session owns one file sink. The sink only accepts records logged
inside its session (loguru ``contextualize``), so concurrent sessions never
write into or remove each other's files. The console sink is shared.
"""

import sys
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
)

_console_lock = threading.Lock()
_console_handler_id: Optional[int] = None


def configure_console(level_colors: Optional[Dict] = None) -> None:
    """
    Replace loguru's default handler with the colorized INFO console sink.

    Only the first call has an effect.

    Args:
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
    """
    global _console_handler_id

    with _console_lock:
        if _console_handler_id is not None:
            return

        # Remove default logger
        logger.remove()

        colors = {**LEVEL_COLORS, **(level_colors or {})}
        for level_name, color in colors.items():
            logger.level(level_name, color=color)

        _console_handler_id = logger.add(
            sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True
        )


@contextmanager
def logging_session(
    context_name: str,
    log_dir: Path,
    session_id: str,
    extra_provenance: Optional[Dict] = None,
) -> Iterator[Path]:
    """
    Log everything inside the block to its own file, with a provenance header.

    Args:
        context_name: Context identifier (e.g., "render", "intake")
        log_dir: Directory for this logging session
        session_id: Key that scopes records to this session's file
        extra_provenance: Additional key-value pairs for provenance header

    Yields:
        Path to log file

    Example:
        from dossier.utils.logger import logging_session

        with logging_session(
            context_name="intake",
            log_dir=Path("outs/logs/intake_20251114_123456_4f1c9e2b"),
            session_id="4f1c9e...",
            extra_provenance={"Submission": "4f1c9e..."},
        ) as log_file:
            ...
    """
    configure_console()

    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    # File handler captures everything (DEBUG level) from this session only
    handler_id = logger.add(
        log_file,
        format=FILE_FORMAT,
        level="DEBUG",
        filter=lambda record: record["extra"].get("session") == session_id,
    )

    try:
        with logger.contextualize(session=session_id):
            log_provenance(extra_provenance)
            yield log_file
    finally:
        logger.remove(handler_id)


def log_provenance(extra_context: Optional[Dict] = None) -> None:
    """
    Log execution provenance to current logger.

    Logs standard context (script, command, working directory, Python version)
    plus any additional context provided.
    """
    logger.info("=" * 80)
    logger.info(f"Script: {sys.argv[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.info(f"{key}: {value}")

    logger.info("=" * 80)
