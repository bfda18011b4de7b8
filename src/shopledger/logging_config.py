"""Logging setup for the shopledger command line."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty at INFO/DEBUG
NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "urllib3",
    "grpc",
]


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Configure the shopledger logger to write to stderr.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level

    Returns:
        The configured "shopledger" logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger("shopledger")
    logger.setLevel(level)

    # Replace our handler so it always writes to the current sys.stderr
    for existing in [h for h in logger.handlers if getattr(h, "_shopledger", False)]:
        logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    handler._shopledger = True
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger
