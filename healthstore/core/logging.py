# healthstore/core/logging.py
import logging
from healthstore.config import settings

def get_logger(name: str) -> logging.Logger:
    """
    Logger with timestamps on stderr, level taken from LOG_LEVEL.
    """
    logger = logging.getLogger(f"healthstore.{name}")
    if not logger.handlers:
        logger.setLevel(settings.log_level)
        handler = logging.StreamHandler()
        handler.setLevel(settings.log_level)
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
