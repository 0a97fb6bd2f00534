"""Logging from config and env.

Levels (inclusive):
- ERROR: fatal errors only
- WARNING: non-fatal issues (e.g. PR kept open) and ERROR
- INFO: workflow progress, WARNING, and ERROR
- DEBUG: git commands, best-effort cleanup failures and all levels above

Configure via the override file (LOGGING_LEVEL, LOGGING_FORMAT), env, or --log-level.
"""

import logging

from prmerge.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(levelname)s: %(message)s"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class MergeLogging:
    """Configures root logger from LoggingConfig."""

    def __init__(self, config: LoggingConfig, level: str | None = None) -> None:
        """Store level (explicit level wins over config) and format."""
        self._level = _resolve_level(level or config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        """Apply level and format to the root logger (handler writes to
        stderr)."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )
