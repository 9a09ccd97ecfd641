"""
Logging configuration helpers and shared logger instance
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from config.settings import settings

# Libraries that log every model download and HTTP request at INFO
NOISY_LOGGERS = ("transformers", "huggingface_hub", "httpx", "urllib3")

def _build_formatter() -> logging.Formatter:
    default_format = "%(asctime)s | %(levelname)-8s | %(module)s:%(funcName)s:%(lineno)d - %(message)s"
    return logging.Formatter(
        fmt=settings.log_format or default_format,
        datefmt=settings.log_date_format
    )

def setup_logger(name: str = "customer-priority") -> logging.Logger:
    """
    Configure and return a named logger with console and optional file output

    Configuration is loaded from settings (LOG_LEVEL, LOG_TO_FILE, LOG_FILE_*).
    Third-party loggers listed in NOISY_LOGGERS are capped at WARNING unless
    LOG_LEVEL is DEBUG.

    Args:
        name: Logger name (default 'customer-priority')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        level = getattr(logging, settings.log_level.upper(), logging.INFO)
        logger.setLevel(level)
        formatter = _build_formatter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if settings.log_to_file:
            log_path = Path(settings.log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.TimedRotatingFileHandler(
                filename=log_path,
                when=settings.log_file_rotation,
                interval=1,
                backupCount=settings.log_file_retention,
                encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        if level > logging.DEBUG:
            for noisy in NOISY_LOGGERS:
                logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.propagate = False
    return logger

logger = setup_logger()
