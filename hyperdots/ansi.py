"""ANSI terminal color utilities.

Honours the NO_COLOR and FORCE_COLOR environment variables and disables
colors when the output stream is not a terminal.
"""

import os
import sys
from typing import TextIO

__all__ = [
    "BLUE",
    "BOLD",
    "GREEN",
    "RED",
    "RESET",
    "YELLOW",
    "LevelStyles",
    "colorize",
    "make_style",
    "should_colorize",
]

_ESC = "\x1b["

RESET = f"{_ESC}0m"

BOLD = "1"

RED = "31"
GREEN = "32"
YELLOW = "33"
BLUE = "34"


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell if ANSI colors should be written to `stream` (stderr by default)."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, *codes: str) -> str:
    """Wrap text in ANSI color codes.

    Args:
        text: The text to colorize.
        *codes: ANSI codes to apply (e.g., RED, BOLD).
    """
    if not codes:
        return text
    prefix, suffix = make_style(*codes)
    return f"{prefix}{text}{suffix}"


def make_style(*codes: str) -> tuple[str, str]:
    """Return the (prefix, suffix) escape pair for the given codes."""
    if not codes:
        return ("", RESET)
    return (f"{_ESC}{';'.join(codes)}m", RESET)


class LevelStyles:
    """Colors of the level tags printed in front of log lines."""

    INFO = (BLUE,)
    SUCCESS = (GREEN,)
    WARNING = (YELLOW, BOLD)
    ERROR = (RED,)
    CRITICAL = (RED, BOLD)
