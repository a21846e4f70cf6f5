"""Logging configuration for the search registry."""

import logging
import sys

from search_registry.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str | None = None) -> None:
    """Configure logging for the search_registry package.

    Level is the explicit level if given, else settings.log_level, else DEBUG
    when settings.debug is True and INFO otherwise. SQLAlchemy engine logs stay
    at WARNING unless DATABASE_ECHO is on (echo configures its own handler).
    """
    settings = get_settings()
    if level is None:
        level = settings.log_level or (logging.DEBUG if settings.debug else logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("search_registry").setLevel(level)
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
