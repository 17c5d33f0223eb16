"""
Logging service for the card stack.
Wraps the standard logging module behind ILogger so hosts can swap in a
null or in-memory sink.
"""

from __future__ import annotations
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging
import sys

from .interfaces import ILogger


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        try:
            return cls(str(name).upper())
        except ValueError:
            return cls.INFO


CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'


class LoggingService(ILogger):
    """ILogger on top of a named stdlib logger with console and optional file output."""

    def __init__(self, name: str = "card_stack", log_file: Optional[Path] = None,
                 console_level: LogLevel = LogLevel.INFO, file_level: LogLevel = LogLevel.DEBUG):
        self._name = name
        self._log_file = log_file

        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers.clear()

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(getattr(logging, console_level.value))
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
        self._logger.addHandler(console)

        if log_file:
            self.add_file_handler(log_file, file_level)

    def add_file_handler(self, log_file: Path, level: LogLevel = LogLevel.DEBUG) -> bool:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_file, encoding='utf-8')
        except OSError as e:
            self.error(f"Failed to set up file logging at {log_file}", exception=e)
            return False
        handler.setLevel(getattr(logging, level.value))
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        self._logger.addHandler(handler)
        return True

    def set_console_level(self, level: LogLevel) -> None:
        for handler in self._logger.handlers:
            if type(handler) is logging.StreamHandler:
                handler.setLevel(getattr(logging, level.value))

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(f"{message}{_format_context(kwargs)}")

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(f"{message}{_format_context(kwargs)}")

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(f"{message}{_format_context(kwargs)}")

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs) -> None:
        full_message = f"{message}{_format_context(kwargs)}"
        if exception:
            self._logger.error(full_message, exc_info=exception)
        else:
            self._logger.error(full_message)


def _format_context(kwargs: Dict[str, Any]) -> str:
    if not kwargs:
        return ""
    return " [" + ", ".join(f"{k}={v}" for k, v in kwargs.items()) + "]"


class NullLogger(ILogger):
    """Discards everything; default for objects built without a logger."""

    def debug(self, message: str, **kwargs) -> None:
        pass

    def info(self, message: str, **kwargs) -> None:
        pass

    def warning(self, message: str, **kwargs) -> None:
        pass

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs) -> None:
        pass


class MemoryLogger(ILogger):
    """In-memory logger for testing purposes."""

    def __init__(self, max_entries: int = 1000):
        self._max_entries = max_entries
        self._entries: List[Dict[str, Any]] = []

    def debug(self, message: str, **kwargs) -> None:
        self._add_entry("DEBUG", message, kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._add_entry("INFO", message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._add_entry("WARNING", message, kwargs)

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs) -> None:
        entry_kwargs = dict(kwargs)
        if exception:
            entry_kwargs['exception'] = str(exception)
        self._add_entry("ERROR", message, entry_kwargs)

    def _add_entry(self, level: str, message: str, kwargs: Dict[str, Any]) -> None:
        self._entries.append({
            'timestamp': datetime.now(),
            'level': level,
            'message': message,
            'kwargs': kwargs
        })
        if len(self._entries) > self._max_entries:
            self._entries = self._entries[-self._max_entries:]

    def get_entries(self, level: Optional[str] = None) -> List[Dict[str, Any]]:
        if level:
            return [e for e in self._entries if e['level'] == level]
        return self._entries.copy()

    def clear(self) -> None:
        self._entries.clear()
