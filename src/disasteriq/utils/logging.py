"""Logging helpers shared by every module."""

import logging
import os

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once. Later calls only adjust the level."""
    global _configured
    level_name = (level or os.environ.get("DISASTERIQ_LOG_LEVEL") or "INFO").upper()
    if not _configured:
        logging.basicConfig(level=level_name, format=DEFAULT_FORMAT)
        _configured = True
    else:
        logging.getLogger().setLevel(level_name)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
