from __future__ import annotations
import logging
from typing import Optional

DEFAULT_LOG_LEVEL = logging.WARNING
LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def resolve_level(level: Optional[str | int]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        numeric = getattr(logging, level.upper(), None)
        if isinstance(numeric, int):
            return numeric
    return DEFAULT_LOG_LEVEL


def configure_logging(level: Optional[str | int] = None) -> logging.Logger:
    """Configure root logging for the drawing store tools.

    Unknown level names fall back to WARNING. Existing root handlers are
    replaced so repeated calls do not duplicate output. Returns a module
    logger for the caller.
    """
    numeric = resolve_level(level)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logger = logging.getLogger(__name__)
    logger.debug("Log level set to %s", logging.getLevelName(numeric))
    return logger
