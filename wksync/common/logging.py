"""Logging utilities.

Log lines are printed with bracketed tags, e.g. "[wanikani] [fetch] study_materials page 2/3".
Normal output is gated by a verbose flag, debug output by a debug flag.
"""

import sys


def log_debug(enabled: bool, message: str) -> None:
    """Print a debug message if debugging is enabled."""
    if enabled:
        print(f"[debug] {message}")


def log_error(message: str) -> None:
    """Print an error message to stderr."""
    print(f"[error] {message}", file=sys.stderr)
