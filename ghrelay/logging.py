"""Root logger setup for the relay process.

What each level shows:
- ERROR: failed send, fetch, translation or state save; bad config
- WARNING: partial Misskey config, unreadable state file, overrun cycle
- INFO: cycle start and end, per-repository counts, each notification sent
- DEBUG: candidate counts per fetch, state saves, urllib3 connection logs

Set with LOGGING_LEVEL / LOGGING_FORMAT or the ``logging`` YAML section.
"""

import logging

from ghrelay.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP client loggers held at WARNING unless running at DEBUG
QUIET_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    """Level constant for ``level``; unknown names mean INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


class RelayLogging:
    """Applies a LoggingConfig to the root logger."""

    def __init__(self, config: LoggingConfig) -> None:
        self.level = _resolve_level(config.level)
        self.format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        logging.basicConfig(level=self.level, format=self.format, force=True)
        if self.level > logging.DEBUG:
            for name in QUIET_LOGGERS:
                logging.getLogger(name).setLevel(logging.WARNING)
