# io_utils/log_utils.py
"""
Logging setup shared by scripts and the GUI.

Core modules only call logging.getLogger(__name__); handlers and formatting
are installed here, once, by whoever owns the process.
"""

import logging
from datetime import datetime
from typing import Optional, Union

_LOGGER_CONFIGURED = False


class StructuredFormatter(logging.Formatter):
    """[timestamp][LEVEL][name] message"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        prefix = f"[{timestamp}][{record.levelname}][{record.name}]"
        message = record.getMessage()
        if record.exc_info:
            return f"{prefix} {message}\n{self.formatException(record.exc_info)}"
        return f"{prefix} {message}"


class CallbackHandler(logging.Handler):
    """Forward formatted records to a callable, e.g. a GUI log panel."""

    def __init__(self, callback, level: int = logging.INFO):
        super().__init__(level=level)
        self._callback = callback
        self.setFormatter(StructuredFormatter())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._callback(self.format(record))
        except Exception:
            self.handleError(record)


def resolve_log_level(level: Union[str, int, None], debug: bool = False, quiet: bool = False) -> int:
    """Resolve a logging level from CLI-style inputs."""
    if quiet:
        return logging.WARNING
    if debug:
        return logging.DEBUG
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return logging.INFO


def setup_logging(script_name: str, level: Union[str, int, None] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """Configure the root logger once and return a logger named `script_name`."""
    global _LOGGER_CONFIGURED
    resolved = resolve_log_level(level)
    root = logging.getLogger()
    root.setLevel(resolved)
    if not _LOGGER_CONFIGURED:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
        root.addHandler(handler)
        _LOGGER_CONFIGURED = True
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        root.addHandler(file_handler)
    return logging.getLogger(script_name)
