import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = 'paddock.api'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5


def _has_file_handler(logger: logging.Logger, log_path: str) -> bool:
    return any(
        isinstance(handler, RotatingFileHandler) and handler.baseFilename == log_path
        for handler in logger.handlers
    )


def setup_api_logger(log_path: str, level: int = logging.INFO) -> logging.Logger:
    """Attach the rotating API log file to the ``paddock.api`` logger.

    Every area logger handed out by :func:`get_logger` is a child of
    ``paddock.api`` and writes through this file, so modules never configure
    handlers themselves. Calling this again with the same path is a no-op.
    """
    log_path = os.path.abspath(log_path)
    os.makedirs(os.path.dirname(log_path), exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not _has_file_handler(logger, log_path):
        handler = RotatingFileHandler(log_path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding='utf-8')
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(area: str) -> logging.Logger:
    """Logger for one area of the API: ``get_logger("social")`` is ``paddock.api.social``."""
    return logging.getLogger(f'{LOGGER_NAME}.{area}')
