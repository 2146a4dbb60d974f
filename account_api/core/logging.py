"""Logging configuration."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Attach a console handler to the package loggers once per process."""

    global _configured
    for name in ("account_api", "account_client"):
        logging.getLogger(name).setLevel(level)
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    for name in ("account_api", "account_client"):
        logger = logging.getLogger(name)
        logger.addHandler(handler)
        logger.propagate = False
    _configured = True


__all__ = ["LOG_DATE_FORMAT", "LOG_FORMAT", "configure_logging"]
