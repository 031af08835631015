# File: src/monitoring/logging_config.py

import logging
import logging.handlers
import os
from datetime import datetime

from ..utils.logger import LOG_FORMAT, parse_level

CONSOLE_FORMAT = '%(asctime)s %(levelname)-8s %(message)s'

# Floors for chatty client libraries; web3 logs every JSON-RPC request at DEBUG
LIBRARY_LEVELS = {
    'web3': logging.INFO,
    'urllib3': logging.WARNING,
    'uvicorn.access': logging.WARNING,
}

class LogConfig:
    """Root logging for the explorer process.

    The file keeps everything down to DEBUG and rolls over at ``max_size``;
    the console only shows ``level`` and above.
    """

    def __init__(
        self,
        log_dir: str = "logs",
        level: int = logging.INFO,
        max_size: int = 10 * 1024 * 1024,
        backup_count: int = 5
    ):
        self.log_dir = log_dir
        self.level = level
        self.max_size = max_size
        self.backup_count = backup_count
        os.makedirs(log_dir, exist_ok=True)

    @classmethod
    def from_config(cls, config) -> 'LogConfig':
        return cls(
            log_dir=config.get('monitoring.log_dir'),
            level=parse_level(config.get('monitoring.log_level')),
        )

    def log_file(self) -> str:
        return os.path.join(self.log_dir, f'ethscope_{datetime.now():%Y%m%d}.log')

    def file_handler(self) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            self.log_file(),
            maxBytes=self.max_size,
            backupCount=self.backup_count,
            encoding='utf-8',
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(logging.DEBUG)
        return handler

    def console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.setLevel(self.level)
        return handler

    def setup_logging(self) -> str:
        """Replace the root handlers and return the path of the log file"""
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        root_logger.addHandler(self.file_handler())
        root_logger.addHandler(self.console_handler())

        for name, floor in LIBRARY_LEVELS.items():
            logging.getLogger(name).setLevel(max(self.level, floor))

        log_file = self.log_file()
        logging.getLogger(__name__).debug(f"Logging to {log_file}")
        return log_file
