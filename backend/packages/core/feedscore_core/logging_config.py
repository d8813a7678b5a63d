"""
Logging configuration.

Every module obtains its logger through ``get_logger(__name__)`` so the
whole package logs under the ``feedscore`` hierarchy configured here.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_initialized = False


def init_logging(level: str = "INFO") -> None:
    """
    Configure root logging for worker and script entry points.

    Safe to call more than once; only the first call installs a handler.

    Args:
        level: Log level name (e.g., 'DEBUG', 'INFO').
    """
    global _initialized

    log_level = getattr(logging, level.upper(), logging.INFO)
    if not _initialized:
        logging.basicConfig(
            level=log_level,
            format=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            stream=sys.stdout,
        )
        _initialized = True
    logging.getLogger().setLevel(log_level)

    # arq logs every job start/finish at INFO
    logging.getLogger("arq.worker").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)
