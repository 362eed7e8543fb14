"""Logging configuration for depnorm."""

import logging
import sys
from typing import Any, Dict


def setup_logging(level: str = "INFO", structured: bool = False) -> logging.Logger:
    """
    Set up the package logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Whether to emit one JSON object per record

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("depnorm")

    # Avoid duplicate handlers
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    logger.setLevel(getattr(logging, level.upper()))

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if structured:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def set_log_level(level: str) -> None:
    """Change the level of the package logger and its handlers."""
    numeric = getattr(logging, level.upper())
    logger.setLevel(numeric)
    for handler in logger.handlers:
        handler.setLevel(numeric)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


# Package logger; output handlers are attached by setup_logging()
logger = logging.getLogger("depnorm")
logger.addHandler(logging.NullHandler())
