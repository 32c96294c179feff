"""
Logging Configuration
Sets up the package logger for the application.
"""
import logging
import sys
from typing import Optional, Union

# Client libraries that log every HTTP round trip at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "anthropic")


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the 'linearlab' logger.

    Args:
        level: Logging level, as a number (logging.DEBUG) or a name ("debug").
        log_file: Optional path; the file is overwritten on each start.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    logger = logging.getLogger("linearlab")
    logger.setLevel(level)

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
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
