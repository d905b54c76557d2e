import sys
from loguru import logger
from eburger.config import get_config

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"

class AppLogger:
    """Global logger configuration for the application.

    Sets the log level from get_config().log_level. The sink is installed once
    per level so repeated get_logger() calls do not duplicate output.
    """
    _configured_level: str = None

    def __init__(self) -> None:
        log_level = get_config().log_level.upper()
        if AppLogger._configured_level != log_level:
            logger.remove()
            logger.add(sink=sys.stderr, level=log_level, format=LOG_FORMAT)
            AppLogger._configured_level = log_level
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
