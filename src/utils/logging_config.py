"""Logging setup shared by command-line entry points."""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure the root logger with a timestamped format.

    Args:
        level: Logging level as an int or a name such as "DEBUG".
    """
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
