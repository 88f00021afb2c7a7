"""
Structured logging utilities for Tartil library.

Provides a configured logger and helper functions for consistent logging.
"""

import logging
import sys
from typing import Optional


# Default format for Tartil logs
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "tartil") -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (default: "tartil")

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure logging for the Tartil library.

    Args:
        level: Logging level (default: INFO)
        format_string: Log format string (default: DEFAULT_FORMAT)
        date_format: Date format string (default: DEFAULT_DATE_FORMAT)
        stream: Output stream (default: sys.stderr)

    Returns:
        Configured root logger for tartil
    """
    logger = logging.getLogger("tartil")
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def enable_debug_logging() -> None:
    """Enable debug-level logging for the Tartil library."""
    configure_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Disable all Tartil logging."""
    logger = logging.getLogger("tartil")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())


_logger = get_logger()


def log_surah_loaded(surah_number: int, verse_count: int, reciter_id: str) -> None:
    """Log that a surah's verse set was loaded into the player."""
    _logger.info(f"Loaded Surah {surah_number} ({verse_count} verses, reciter={reciter_id})")


def log_verse_started(surah_number: int, number_in_surah: int, url: str) -> None:
    """Log the start of a verse's audio."""
    _logger.debug(f"Playing Surah {surah_number} Verse {number_in_surah}: {url}")


def log_surah_finished(surah_number: int) -> None:
    """Log that the last verse of a surah completed."""
    _logger.info(f"Reached end of Surah {surah_number}")


def log_playback_error(message: str, **context) -> None:
    """Log a playback failure reported by the engine or locator."""
    log_warning(f"Playback failed: {message}", **context)


def log_warning(message: str, **context) -> None:
    """Log a warning with optional context."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.warning(f"{message} ({ctx_str})")
    else:
        _logger.warning(message)


def log_error(message: str, exc_info: bool = False, **context) -> None:
    """Log an error with optional context and exception info."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.error(f"{message} ({ctx_str})", exc_info=exc_info)
    else:
        _logger.error(message, exc_info=exc_info)
