# SPDX-License-Identifier: MIT

import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def setup_logger(level: str = "WARNING") -> logging.Logger:
    """
    Configure the package logger with a single stderr handler.

    Calling it again only updates the level.
    """
    package_logger = logging.getLogger("kioskcal")
    package_logger.setLevel(level.upper())

    if not package_logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(console_handler)

    return package_logger
