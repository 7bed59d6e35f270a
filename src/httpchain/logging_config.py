import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _handler(handler: logging.Handler, level: int, format_string: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Set up logging for httpchain.

    Logs go to stderr by default so they never mix with response bodies
    written to stdout.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, replace existing handlers
        stream: Console stream (defaults to sys.stderr)

    Returns:
        Configured "httpchain" logger. Every module logger lives under it,
        so the returned logger can also be injected into clients directly.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger("httpchain")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        logger.handlers.clear()
        format_string = format_string or DEFAULT_FORMAT

        logger.addHandler(_handler(logging.StreamHandler(stream or sys.stderr), numeric_level, format_string))
        if log_file:
            logger.addHandler(_handler(logging.FileHandler(log_file), numeric_level, format_string))
    else:
        # Keep existing handlers, but let a new level through them
        for handler in logger.handlers:
            handler.setLevel(numeric_level)

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False

    return logger
