"""
Provides support for logging
"""

import logging
import time
from typing import Any


def log_level(name: str) -> int:
    """
    Converts a log level name, e.g. 'INFO', into its numeric logging level.

    :exception ValueError: if the name is not a registered log level
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"invalid log level: {name}")
    return level


def configure_logging(
    level: int | str = logging.WARNING,
    handlers: list[logging.Handler] | None = None,
):
    """
    Configures logging format and log level.

    :param level: either the numeric level or its name, default = logging.WARNING
    :return: None

    - log format: %(asctime)s [%(levelname)s] [%(name)s] %(message)s
    - timestamps are UTC

    >>> configure_logging(level='DEBUG')
    >>> logger = logging.getLogger('TokenIssuer')
    >>> logger.info('ASA created: GOLD (GLD) [asset_id=1001]') # doctest: +SKIP
    2023-01-09 14:48:20,594 [INFO] [TokenIssuer] ASA created: GOLD (GLD) [asset_id=1001]

    """
    if isinstance(level, str):
        level = log_level(level)

    logging.Formatter.converter = time.gmtime
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
        level=level,
        handlers=handlers,
        force=True,
    )
    logging.captureWarnings(True)


def get_logger(obj: Any, name: str | None = None) -> logging.Logger:
    """
    Returns a logger using the class name as the logger name.
    If `name` is specifed, then it is appended to the class name: `{self.__class__.__name__}.{name}`
    """
    logger = logging.getLogger(obj.__class__.__name__)
    if name is None:
        return logger

    return logger.getChild(name)
