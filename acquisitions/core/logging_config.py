"""Process-wide logging setup shared by the API and CLI entrypoints."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: "Settings") -> None:
    """Configure the root logger from LOG_LEVEL. Safe to call more than once."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    # SQL echo is controlled by DEBUG on the engine; keep the library logger quiet otherwise.
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
