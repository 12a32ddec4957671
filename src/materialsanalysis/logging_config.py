"""
Logging Configuration
Sets up the package logger used by the calculators and the demo entry point.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "materialsanalysis"

# Third-party loggers that flood DEBUG output (numba compiler passes, font cache)
NOISY_LOGGERS = ("numba", "matplotlib")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the 'materialsanalysis' logger.

    Args:
        level: Logging level for the package (e.g. logging.DEBUG).
        log_file: Optional path of a log file, overwritten on each call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Calling twice must not duplicate every line
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug(f"Logging initialized at level {logging.getLevelName(level)}.")
    if log_file:
        logger.info(f"Writing log to {log_file}")
