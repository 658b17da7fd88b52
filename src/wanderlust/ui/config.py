"""UI configuration constants.

Centralizes magic numbers and display strings for the UI module.
"""

import logging

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

LOG_LEVEL_COLORS = {
    logging.DEBUG: "dim white",
    logging.INFO: "cyan",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold red",
}

# Chat display configuration
TYPING_INDICATOR = "● ● ●"
FOOTER_NOTE = "Powered by Google Gemini • AI can make mistakes. Verify important info."
CLEAR_CONFIRMATION_PROMPT = "Are you sure you want to clear the chat history?"


def parse_log_level(level: str | None, default: int = logging.WARNING) -> int:
    """Convert a level name to a logging level. Unknown names give ``default``."""
    if not level:
        return default
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else default
