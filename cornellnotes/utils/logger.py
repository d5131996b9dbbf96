"""
Logging bootstrap shared by every module.
"""
import logging
import sys

ROOT_LOGGER_NAME = "cornellnotes"


def init_logger(level: int = logging.INFO) -> logging.Logger:
    """
    Configure the application root logger once.

    Args:
        level: Log level for the root application logger

    Returns:
        The configured root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger under the application root, e.g. ``cornellnotes.core.export``."""
    init_logger()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
