"""Logging configuration for the schema intelligence engine."""

import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Libraries that log parser/loader internals at DEBUG
QUIET_LOGGERS = ('yaml', 'dotenv')


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure logging for schema analysis.

    Console output goes to stderr unless another stream is given; the CLI
    prints JSON reports on stdout.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number
        log_file: Optional log file path
        format_string: Optional custom format string
        stream: Console stream (default: sys.stderr)
    """
    if isinstance(level, int):
        numeric_level = level
    else:
        numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    handlers = [logging.StreamHandler(stream if stream is not None else sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=numeric_level,
        format=format_string or DEFAULT_FORMAT,
        handlers=handlers,
        force=True
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured at {logging.getLevelName(numeric_level)}"
        + (f", file {log_file}" if log_file else "")
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
