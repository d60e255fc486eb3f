import logging
from typing import Optional

from keccak_const.config import Config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "keccak_const"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach the console handler to the package logger.

    Only the command line tool calls this; library modules just use
    ``logging.getLogger(__name__)`` and leave handlers to the application.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if level is None:
        level = str(Config().get("logging.level", "WARNING"))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    set_level(level)
    return logger


def set_level(level: str) -> None:
    """Change the level of the package logger, which every module inherits."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric)
