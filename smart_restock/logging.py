import sys
import threading
from loguru import logger
from smart_restock.config import get_config

_lock = threading.Lock()
_configured_level = None

class AppLogger:
    """Global logger configuration for the restock engine.

    Sets the log level from get_config().log_level. Sinks are only replaced
    when the configured level changes. Output goes to stderr so the CLI can
    keep stdout for JSON results.
    """
    def __init__(self) -> None:
        global _configured_level
        log_level = get_config().log_level.upper()
        with _lock:
            if log_level != _configured_level:
                logger.remove()
                logger.configure(extra={"name": "smart_restock"})
                logger.add(
                    sink=lambda msg: print(msg, end="", file=sys.stderr),
                    level=log_level,
                    format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
                )
                _configured_level = log_level
        self.logger = logger

    def get_logger(self, name: str = None):
        """Get the configured logger instance.

        Args:
            name (str, optional): Name for the logger context. Defaults to None.
        Returns:
            loguru.Logger: The configured logger instance.
        """
        if name:
            return self.logger.bind(name=name)
        return self.logger

def get_logger(name: str = None):
    """Get a new application logger using the latest config."""
    return AppLogger().get_logger(name)
