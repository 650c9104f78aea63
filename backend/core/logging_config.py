# backend/core/logging_config.py

import logging
from typing import Optional

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings"""
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
    )

    # SQL echo stays off unless explicitly requested
    sql_level = logging.INFO if settings.LOG_SQL_QUERIES else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
