"""Logging setup for the Traceflow plugin."""

import logging
import logging.config
from typing import Optional

from .settings import settings

# The dashboard host prefixes plugin output with its own timestamps.
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(log_level: Optional[str] = None) -> None:
    """
    Configure console logging for the plugin process.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
                   Defaults to settings.LOG_LEVEL.
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": log_level.upper(),
            "handlers": ["console"],
        },
        "loggers": {
            # werkzeug logs every request line at INFO
            "werkzeug": {"level": "WARNING"},
        },
    })
