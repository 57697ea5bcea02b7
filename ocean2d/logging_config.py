"""
Logging Configuration
Routes the records of ocean2d and of the Dedalus solver it drives
to the console and, optionally, to a run log file.
"""
import logging
import sys
from typing import Iterable, Optional

LOGGERS = ("ocean2d", "dedalus")
FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    names: Iterable[str] = LOGGERS,
) -> None:
    """
    Attach one console handler (and a file handler if log_file is
    given) to each logger in names. Calling it again replaces the
    handlers, records are not passed on to the root logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path of the run log, truncated on setup.
        names: Loggers to configure.
    """
    names = tuple(names)
    formatter = logging.Formatter(FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("ocean2d").info(
        "Logging initialized for %s.", ", ".join(names)
    )
