"""Terminal styling for diagnostics.

Only stderr is ever styled: stdout may carry a command for the caller's
shell to evaluate and must stay byte-exact.
"""

import logging
import os
import sys
from typing import TextIO

__all__ = [
    "BOLD",
    "DIM",
    "LEVEL_STYLES",
    "RED",
    "RESET",
    "YELLOW",
    "error_label",
    "make_style",
    "style",
    "wants_color",
]

_ESC = "\x1b["

RESET = f"{_ESC}0m"

BOLD = "1"
DIM = "2"
RED = "31"
YELLOW = "33"

LEVEL_STYLES: dict[int, tuple[str, ...]] = {
    logging.WARNING: (YELLOW, DIM),
    logging.ERROR: (RED, DIM),
    logging.CRITICAL: (RED, BOLD),
}


def wants_color(stream: TextIO | None = None) -> bool:
    """Tell if ANSI sequences may be written to `stream` (stderr by default).

    NO_COLOR wins over FORCE_COLOR, which wins over TTY detection.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def make_style(*codes: str) -> tuple[str, str]:
    """Return the (prefix, suffix) pair wrapping text in `codes`."""
    if not codes:
        return ("", "")
    return (f"{_ESC}{';'.join(codes)}m", RESET)


def style(text: str, *codes: str) -> str:
    """Wrap `text` in the given ANSI codes."""
    prefix, suffix = make_style(*codes)
    return f"{prefix}{text}{suffix}"


def error_label(stream: TextIO | None = None) -> str:
    """Return the "Error:" label, highlighted when `stream` supports it."""
    if wants_color(stream):
        return style("Error:", RED, BOLD)
    return "Error:"
