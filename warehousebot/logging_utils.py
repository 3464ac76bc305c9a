"""Logging utilities for warehousebot.

Provides color-coded console output so map updates, bot traffic and failures
are easy to tell apart in an interactive session.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    YELLOW = "\033[93m"    # Bot traffic (moves, scans)
    RED = "\033[91m"       # Errors and retries
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata
    GREY = "\033[90m"      # Debug detail (map bookkeeping)

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if WAREHOUSEBOT_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("WAREHOUSEBOT_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def debug_enabled() -> bool:
    """Return True when LOG_LEVEL asks for debug output (read on every call)."""
    return os.getenv("LOG_LEVEL", "INFO").strip().upper() == "DEBUG"


def log_debug(message: str) -> None:
    """Log map bookkeeping detail (grey), only when LOG_LEVEL=DEBUG."""
    if debug_enabled():
        print(colored(f"{LOG_TAG_DEBUG} {message}", Color.GREY))


def log_bot(message: str) -> None:
    """Log a bot command or scan (yellow)."""
    print(colored(f"{LOG_TAG_BOT} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error or retry (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


# Markers for message types (color-blind accessible)
LOG_TAG_DEBUG = "[•]"
LOG_TAG_BOT = "[bot]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
