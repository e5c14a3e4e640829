"""
Opt-in log output for applications using ndpolytope.

The package only emits DEBUG records (generator sizes, de-duplication
results) and installs a NullHandler; call :func:`setup_logging` to see them.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "ndpolytope"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def _replace_handlers(logger: logging.Logger, handlers: list[logging.Handler]) -> None:
    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Route ndpolytope records to stdout and, optionally, a file.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: Threshold for the package logger and its handlers
        log_file: Path of a log file to (over)write

    Returns:
        The package logger
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    _replace_handlers(logger, handlers)
    logger.debug("Logging to %s", log_file or "stdout")
    return logger
