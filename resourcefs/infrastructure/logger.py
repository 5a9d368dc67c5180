#!/usr/bin/env python3
"""Structured logging system for ResourceFS.

This module provides a structured logging system with:
- Multiple log levels (DEBUG, INFO, WARNING, ERROR)
- Structured context (key-value pairs)
- Console and rotating file handlers
- Thread-local context management

Library code only formats records; where they go is up to the hosting
application. configure_logging() installs console and file output for
standalone use such as the CLI.

Example:
    >>> logger = get_logger()
    >>> logger.info("Provider ready", sources=2, fallback="/srv/www")
    >>> with logger.add_context(command="ls"):
    ...     logger.debug("Resolving file")
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


class Logger:
    """Structured logger with context support.

    Provides structured logging with key-value context that can be
    attached to log messages. Context pushed with add_context() is
    thread-local.

    Without explicit handlers the underlying stdlib logger is left as the
    host configured it and records propagate normally.
    """

    # Thread-local storage for context
    _context_stack = threading.local()

    def __init__(
        self,
        name: str = "resourcefs",
        level: Optional[Union[LogLevel, str]] = None,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output, None to leave it unset
            handlers: Handlers that replace existing ones; when given,
                records stop propagating to ancestor loggers
        """
        self.name = name
        self.logger = logging.getLogger(name)

        if level is not None:
            self.set_level(level)

        if handlers is not None:
            self.logger.handlers.clear()
            for handler in handlers:
                self.logger.addHandler(handler)
            self.logger.propagate = False

    @staticmethod
    def create_console_handler() -> logging.StreamHandler:
        """Create a stderr handler with formatting."""
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    @staticmethod
    def create_file_handler(
        filename: Union[str, Path],
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: New log level (LogLevel or string)
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def get_level(self) -> LogLevel:
        """Get the effective log level."""
        return LogLevel(self.logger.getEffectiveLevel())

    def _get_context(self) -> Dict[str, Any]:
        """Get current thread-local context.

        Returns:
            Combined context from all levels
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    def _format_message(self, msg: str, context: Dict[str, Any]) -> str:
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager to add temporary context.

        Args:
            **kwargs: Key-value pairs to add to context

        Example:
            >>> with logger.add_context(command="ls"):
            ...     logger.info("Listing directory")
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if self.logger.isEnabledFor(level):
            combined_context = self._get_context()
            combined_context.update(context)
            formatted_msg = self._format_message(msg, combined_context)
            self.logger.log(level, formatted_msg, extra={"context": combined_context})

    def debug(self, msg: str, **context) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, msg, context)


# Logger instances by name
_loggers: Dict[str, Logger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str = "resourcefs") -> Logger:
    """Get or create a logger instance.

    Creating one doesn't touch handlers, level or propagation.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    with _loggers_lock:
        logger = _loggers.get(name)
        if logger is None:
            logger = Logger(name=name)
            _loggers[name] = logger
        return logger


def set_global_logger(logger: Logger) -> None:
    """Register a logger instance under its name.

    Subsequent get_logger(logger.name) calls return it.

    Args:
        logger: Logger to use globally
    """
    with _loggers_lock:
        _loggers[logger.name] = logger


def configure_logging(level: Union[LogLevel, str] = LogLevel.INFO, file: Optional[str] = None) -> Logger:
    """Route the "resourcefs" logger to stderr and, optionally, a file.

    Meant for standalone use; applications embedding the library
    configure logging their own way instead.

    Args:
        level: Minimum log level
        file: Optional log file; a rotating file handler is added when set

    Returns:
        The configured logger
    """
    handlers: List[logging.Handler] = [Logger.create_console_handler()]
    if file:
        handlers.append(Logger.create_file_handler(file))

    logger = Logger(name="resourcefs", level=level, handlers=handlers)
    set_global_logger(logger)
    return logger
