"""Logging setup shared by the CLI and any embedding host."""

import logging
import sys
from functools import lru_cache

from .settings import get_settings


@lru_cache(maxsize=1)
def configure_logging() -> None:
    """Send portal logs to stderr at ``settings.log_level``.

    HTTP and SQL client chatter is held at WARNING. Safe to call repeatedly.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    logging.getLogger("medportal").setLevel(log_level)
    logging.getLogger("medportal_identity").setLevel(log_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
