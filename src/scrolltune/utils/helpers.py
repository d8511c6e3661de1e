"""
Helper utilities for ScrollTune.

Provides logging setup shared by every component of the core.
"""

import os
import sys
import logging
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from scrolltune import constants

# Thread lock for logging setup
_logging_lock: threading.Lock = threading.Lock()


def is_production_mode() -> bool:
    return os.environ.get(constants.logs.ENV_VAR_PROD_MODE, "").lower() == "true"


def setup_logging(log_dir: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure the application logger in a thread-safe manner.

    A console handler is always installed. When `log_dir` is given, a rotating
    file handler writes to `constants.logs.LOG_FILENAME` inside it. Calling this
    again after the logger has handlers does nothing.
    """
    logger: logging.Logger = logging.getLogger(constants.app.APP_NAME)
    with _logging_lock:
        if logger.handlers:
            return logger

        is_production = is_production_mode()
        root_log_level = constants.logs.PRODUCTION_LOG_LEVEL if is_production else logging.DEBUG
        logger.setLevel(root_log_level)

        log_formatter = logging.Formatter(
            fmt=constants.logs.LOG_FORMAT, datefmt=constants.logs.LOG_DATE_FORMAT
        )

        file_log_level = constants.logs.PRODUCTION_LOG_LEVEL if is_production else constants.logs.FILE_LOG_LEVEL
        if log_dir is not None:
            log_file_path = Path(log_dir) / constants.logs.LOG_FILENAME
            try:
                log_file_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = RotatingFileHandler(
                    log_file_path,
                    maxBytes=constants.logs.MAX_LOG_SIZE,
                    backupCount=constants.logs.LOG_BACKUP_COUNT,
                    encoding='utf-8',
                    delay=True  # Delays opening the file until the first log message
                )
                file_handler.setFormatter(log_formatter)
                file_handler.setLevel(file_log_level)
                logger.addHandler(file_handler)
            except (PermissionError, OSError) as e:
                print(f"CRITICAL: Failed to set up file logging at {log_file_path}: {e}. File logging will be disabled.", file=sys.stderr)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(log_formatter)
        console_log_level = constants.logs.PRODUCTION_LOG_LEVEL if is_production else constants.logs.CONSOLE_LOG_LEVEL
        console_handler.setLevel(console_log_level)
        logger.addHandler(console_handler)

        if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
            logger.info("File logging target: %s, Level: %s", log_file_path, logging.getLevelName(file_log_level))
        logger.info("Console logging active. Level: %s", logging.getLevelName(console_handler.level))
        logger.info("Logging initialized. Production mode: %s. Root Log Level: %s.",
                    is_production, logging.getLevelName(root_log_level))

    return logger
