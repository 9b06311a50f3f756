from __future__ import annotations

import logging
import sys
from typing import Dict, Optional, Sequence, Union

from can_search.config.settings import settings

LogValue = Union[str, int, float, bool, None, Sequence[str]]
LogContext = Dict[str, LogValue]


class LaravelStyleLogger:
    """Laravel-style logger implementation."""

    def __init__(self, name: str = __name__) -> None:
        self.name = name
        self.logger = logging.getLogger(name)

        if not self.logger.handlers and not logging.getLogger().handlers:
            self._setup_default_handler()

    def _setup_default_handler(self) -> None:
        """Set up default logging handler."""
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '[%(asctime)s] %(levelname)s in %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        self.logger.addHandler(handler)
        self.logger.setLevel(settings.LOG_LEVEL)

    def debug(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log debug message."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_message(message, context))

    def info(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, context))

    def warning(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, context))

    def error(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, context))

    def _format_message(self, message: str, context: Optional[LogContext] = None) -> str:
        """Format message with context."""
        if context:
            context_str = " | ".join(f"{k}={self._format_value(v)}" for k, v in context.items())
            return f"{message} | {context_str}"
        return message

    @staticmethod
    def _format_value(value: LogValue) -> str:
        if isinstance(value, (list, tuple)):
            return ",".join(str(item) for item in value)
        return str(value)


def get_logger(name: Optional[str] = None) -> LaravelStyleLogger:
    """Get a Laravel-style logger instance."""
    if name is None:
        name = __name__
    return LaravelStyleLogger(name)
