"""Logging setup for the API process."""

import logging

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once for the whole application.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # SQL statements are only interesting with DATABASE_ECHO enabled
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
