"""Process-wide logging setup."""

from __future__ import annotations

import logging

from mingle.core.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level and format to the root logger."""
    resolved = (level or settings.log_level).upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("mingle").setLevel(resolved)
    if settings.sql_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
