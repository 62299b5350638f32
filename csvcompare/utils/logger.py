"""
Structured logging utility.
Single responsibility: provide consistent logging across the comparator.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import json


LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARN": 30,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


class StructuredLogger:
    """
    Structured logger for consistent application logging.

    Messages are dotted event names ("reconciler.complete") with keyword
    context rather than free-form sentences.
    """

    def __init__(self, name: str = "csv-comparator",
                 log_file: Optional[Path] = None,
                 level: str = "INFO"):
        """
        Initialize logger.

        Args:
            name: Logger name
            log_file: Optional file path for JSON-lines logging
            level: Minimum level that is emitted
        """
        self.name = name
        self.log_file = Path(log_file) if log_file else None
        self.set_level(level)

    def set_level(self, level: str):
        """
        Change the minimum emitted level.

        Raises:
            ValueError: If the level name is unknown
        """
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self.level = level

    def is_enabled_for(self, level: str) -> bool:
        """Check whether a level passes the threshold."""
        return LEVELS[level] >= LEVELS[self.level]

    def _format_message(self, level: str, message: str,
                       **kwargs) -> Dict[str, Any]:
        """
        Format log message with metadata.

        Args:
            level: Log level (INFO, DEBUG, ERROR, etc.)
            message: Log message
            **kwargs: Additional context fields

        Returns:
            Formatted log entry
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "logger": self.name,
            "message": message
        }

        if kwargs:
            entry["context"] = kwargs

        return entry

    def _output(self, entry: Dict[str, Any]):
        """
        Output log entry to console and optionally file.

        Args:
            entry: Log entry dictionary
        """
        # Console output - human readable
        timestamp = entry["timestamp"].split("T")[1][:8]
        level = entry["level"]
        msg = entry["message"]

        print(f"[{timestamp}] {level:5} | {msg}", file=sys.stderr)

        if "context" in entry:
            for key, value in entry["context"].items():
                print(f"  {key}={value}", file=sys.stderr)

        # File output - JSON for parsing
        if self.log_file:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, default=str) + "\n")

    def _log(self, level: str, message: str, **kwargs):
        if not self.is_enabled_for(level):
            return
        self._output(self._format_message(level, message, **kwargs))

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._log("INFO", message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._log("DEBUG", message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._log("WARN", message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message."""
        self._log("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message."""
        self._log("CRITICAL", message, **kwargs)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "csv-comparator") -> StructuredLogger:
    """
    Get or create logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    global _logger
    if _logger is None:
        _logger = StructuredLogger(name)
    return _logger


def configure_logging(level: str = "INFO",
                      log_file: Optional[Path] = None) -> StructuredLogger:
    """
    Reconfigure the shared logger in place.

    Modules hold a reference obtained at import time, so the instance is
    mutated rather than replaced.
    """
    logger = get_logger()
    logger.set_level(level)
    logger.log_file = Path(log_file) if log_file else None
    return logger
