"""Application-wide logging from LOG_LEVEL / LOG_FILE settings."""
from __future__ import annotations

import logging
import os

from speakerscribe.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_LOGGING_CONFIGURED = False


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Set up the package logger once: console always, file when LOG_FILE is set."""
    global _LOGGING_CONFIGURED

    logger = logging.getLogger("speakerscribe")
    if _LOGGING_CONFIGURED:
        return logger

    settings = settings or get_settings()
    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        try:
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
        except OSError as e:
            logger.warning("Could not open log file %s: %s", settings.LOG_FILE, e)
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    _LOGGING_CONFIGURED = True
    return logger
