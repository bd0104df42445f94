"""Logging configuration for the command-line entry point."""

import logging
import sys

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int | str = logging.WARNING) -> None:
    """
    Send ``tasktracker`` logs to stderr at ``level``.

    Safe to call more than once; earlier handlers are replaced.
    """
    package_logger = logging.getLogger("tasktracker")
    package_logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    package_logger.addHandler(handler)
    package_logger.propagate = False
