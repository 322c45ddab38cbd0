from typing import Optional
import logging
import sys
from .handlers import CustomRotatingFileHandler
from .formatters import JSONFormatter


def _file_handler(
    log_file: str,
    app_name: Optional[str],
    max_bytes: int,
    backup_count: int
) -> CustomRotatingFileHandler:
    file_handler = CustomRotatingFileHandler(log_file, max_bytes=max_bytes, backup_count=backup_count)
    file_handler.setFormatter(JSONFormatter(app_name))
    return file_handler


def setup_logger(
    name: str,
    log_file: str,
    level: int = logging.INFO,
    app_name: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3
) -> logging.Logger:
    """Set up a logger with file and console handlers"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Handlers survive on the logging module's logger cache
    if logger.handlers:
        return logger

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger.addHandler(_file_handler(log_file, app_name, max_bytes, backup_count))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    return logger


def redirect_file_handler(
    logger: logging.Logger,
    log_file: str,
    app_name: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3
) -> None:
    """Swap the logger's rotating file handler for one writing to ``log_file``"""
    for handler in list(logger.handlers):
        if isinstance(handler, CustomRotatingFileHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.addHandler(_file_handler(log_file, app_name, max_bytes, backup_count))
