"""UI configuration constants.

Centralizes labels and configuration values for the UI module.
"""

import logging


class LogLevel:
    """Log level constants with numeric values for comparison.

    Values match the standard logging module so records can be
    filtered without translation. Lower value = more verbose.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
        CRITICAL: "CRITICAL",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
        "critical": CRITICAL,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Labels
APP_TITLE = "AVA"
GREETING = "Hi there, I am AVA"
PROMPT_LABEL = "Please type your prompt"
INPUT_PLACEHOLDER = "Type here"
RESET_BUTTON_LABEL = "Start New Conversation"
USER_LABEL = "User"
ASSISTANT_LABEL = "AVA"

# Status shown in the header while a request is outstanding
THINKING_SUBTITLE = "Thinking..."

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Notification timeouts (seconds)
NOTIFY_TIMEOUT = 2
NOTIFY_ERROR_TIMEOUT = 5
