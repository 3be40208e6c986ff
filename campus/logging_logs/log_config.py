"""
Logging configuration for the campus API.
Centralizes all logging setup so every module logs the same way.
"""
import os
import sys
import time
import logging
from logging.handlers import RotatingFileHandler

LOG_FILE_NAME = "campus_api.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

ROOT_LOGGER_NAME = "campus"


# Filter to prevent duplicate log messages
class DuplicateFilter(logging.Filter):
    def __init__(self, name=''):
        super().__init__(name)
        self.last_log = None
        self.last_time = 0

    def filter(self, record):
        current_log = (record.msg, record.args)
        current_time = time.time()

        # Same message within 0.1 seconds is dropped
        if current_log == self.last_log and current_time - self.last_time < 0.1:
            return False

        self.last_log = current_log
        self.last_time = current_time
        return True


def setup_logging(level="INFO", log_dir=None, log_to_file=True):
    """
    Configure the "campus" logger tree once per process.

    Args:
        level: Log level name for the campus loggers
        log_dir: Directory for the rotating log file
        log_to_file: Disable to keep logs on the console only

    Returns:
        The configured root "campus" logger
    """
    # Suppress MongoDB connection messages
    logging.getLogger('pymongo').setLevel(logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Only configure if handlers haven't been added yet
    if logger.handlers:
        return logger

    logger.addFilter(DuplicateFilter())
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_to_file and log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            # delay=True avoids opening the file until the first message
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, LOG_FILE_NAME),
                maxBytes=MAX_LOG_SIZE,
                backupCount=BACKUP_COUNT,
                delay=True
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {str(e)}")

    return logger


def get_logger(module_name=None):
    """Get a logger under the campus tree, e.g. get_logger("services.auth")"""
    if module_name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
