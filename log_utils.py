"""Utilities for KV shell logging and terminal messages."""

import logging
import sys
from typing import TextIO

LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'
LOG_DATEFMT = '%H:%M:%S'

logger = logging.getLogger(__name__)


class Colors:
    """ANSI color codes for terminal output."""
    FAIL = "\033[91m"
    ENDC = "\033[0m"


def configure_logging(level: str = "WARNING", stream: TextIO = None) -> None:
    """Send log records to stderr so they never mix with command output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=stream or sys.stderr,
        force=True,
    )


def print_colored(text: str, color: str, stream: TextIO = None) -> None:
    """Print colored text to terminal (plain text when not a tty)."""
    stream = stream or sys.stdout
    if hasattr(stream, "isatty") and stream.isatty():
        print(f"{color}{text}{Colors.ENDC}", file=stream)
    else:
        print(text, file=stream)


def print_error(text: str) -> None:
    """Print a fatal message on stderr"""
    print_colored(f"[ERROR] {text}", Colors.FAIL, sys.stderr)


def log_event(event: str, level: str = "INFO") -> None:
    """Log an event with timestamp"""
    if level == "DEBUG":
        logger.debug(event)
    elif level == "INFO":
        logger.info(event)
    elif level == "WARNING":
        logger.warning(event)
    elif level == "ERROR":
        logger.error(event)
