"""
Log setup for command-line use.

Library modules only create ``logging.getLogger(__name__)`` loggers; scripts
call :func:`setup_logging` once to decide where the 'card_fold_analyzer'
records end up.
"""
import logging
import sys
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route 'card_fold_analyzer' records to stderr and, optionally, a file.

    Args:
        level: Threshold applied to the package logger and its handlers.
        log_file: Path of a log file, truncated on every call.

    Returns:
        The package logger. Calling again replaces its handlers.
    """
    logger = logging.getLogger("card_fold_analyzer")
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    # stdout is reserved for the report itself
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("log level %s, file: %s", logging.getLevelName(level), log_file or "-")
    return logger
