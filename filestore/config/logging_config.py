# filestore/config/logging_config.py
import logging
import sys

from filestore.config.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: str | None = None) -> logging.Logger:
    """Configura o logger do pacote uma única vez (handler em stdout)."""
    global _configured

    logger = logging.getLogger("filestore")
    logger.setLevel((level or settings.log_level or "INFO").upper())

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        _configured = True

    return logger
