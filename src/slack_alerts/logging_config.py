"""Optional logging setup for host applications.

The library itself only emits records through module loggers; call
:func:`configure_logging` from an application that has no logging
configuration of its own.
"""

from __future__ import annotations

import logging.config

from slack_alerts.config import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure console logging.

    Args:
        level: Logging level string (DEBUG, INFO, etc.). Defaults to the
            ``LOG_LEVEL`` setting.
    """
    level = level or get_settings().log_level
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        # Quieter logging for the HTTP stack
        "loggers": {
            "slack_alerts": {"level": level},
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)
