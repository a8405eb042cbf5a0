"""
Logging setup for the editor.

curses owns the terminal while the editor runs, so records go to a file when
one is configured and are dropped otherwise.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Configure the package logger once on startup."""

    logger = logging.getLogger("asmedit")
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False
