"""
Centralized Logging Configuration for Sidekick

Usage:
    from logging_config import setup_logging
    setup_logging()

    # Then in any module:
    import logging
    logger = logging.getLogger("sidekick.<area>")
    logger.info("Your message here")
"""

import logging
import os
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "sidekick"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_file="logs/sidekick.log", console_level=logging.INFO, file_level=logging.DEBUG):
    """
    Configure logging for every sidekick.* logger.

    Args:
        log_file: Path to the log file, or None/"" for console only
        console_level: Log level for console output (default: INFO)
        file_level: Log level for file output (default: DEBUG)

    Returns:
        logging.Logger: The sidekick root logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers to avoid duplicates on re-init
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    log_format = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # File Handler: rotates at 10MB, keeps 5 backups
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(log_format)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(log_format)
    root_logger.addHandler(console_handler)

    root_logger.debug("Sidekick logging initialized (file=%s, console=%s)",
                      os.path.abspath(log_file) if log_file else None,
                      logging.getLevelName(console_level))

    return root_logger


def get_logger(name):
    """
    Get a logger under the sidekick hierarchy.

    Args:
        name: Module or area name (typically __name__)

    Returns:
        logging.Logger
    """
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
