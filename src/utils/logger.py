import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Create a logger with the given name and level"""
    logger = logging.getLogger(name)

    if not logger.handlers and not logging.getLogger().handlers:
        # Only add a handler when neither this logger nor the root has one
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(level)
    elif not logger.level:  # Only set default level if none is set
        logger.setLevel(logging.INFO)

    return logger

def parse_level(level_name: str) -> int:
    """Translate a level name such as 'debug' into a logging constant"""
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        return logging.INFO
    return level
