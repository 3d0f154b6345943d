"""Logging configuration for eyeglass.

This module provides:
- Environment variable-based log level control
- JSON formatting for log aggregation
- Human-readable console output

Deprecation notices are not log records; they are written to the
diagnostic sink (see :mod:`eyeglass.deprecation`).
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

__all__ = [
    "JSONFormatter",
    "HumanReadableFormatter",
    "get_log_level_from_env",
    "get_log_format_from_env",
    "setup_logging",
    "get_logger",
]

_RESERVED_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def __init__(self, include_context: bool = True):
        """
        Initialize JSON formatter.

        Args:
            include_context: Whether to include module/function/line fields
        """
        super().__init__()
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_data: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if self.include_context:
            log_data['module'] = record.module
            log_data['function'] = record.funcName
            log_data['line'] = record.lineno

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Fields passed through extra=
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Format log records in human-readable format with colors (optional)."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m'
    }

    def __init__(self, use_colors: bool = False, include_context: bool = False):
        if include_context:
            fmt = '[%(levelname)s] %(asctime)s - %(name)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s'
        else:
            fmt = '[%(levelname)s] %(asctime)s - %(name)s - %(message)s'

        super().__init__(fmt=fmt, datefmt='%Y-%m-%d %H:%M:%S')
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelname, '')
            return f"{color}{formatted}{self.COLORS['RESET']}"

        return formatted


def get_log_level_from_env() -> int:
    """
    Get log level from environment variable.

    Environment variables checked (in order):
    1. EYEGLASS_LOG_LEVEL
    2. LOG_LEVEL

    Returns:
        Logging level (default: WARNING)
    """
    level_name = os.environ.get('EYEGLASS_LOG_LEVEL') or os.environ.get('LOG_LEVEL', 'WARNING')

    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'WARN': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }

    return level_map.get(level_name.upper(), logging.WARNING)


def get_log_format_from_env() -> str:
    """Get log format ('json', 'human', 'simple') from EYEGLASS_LOG_FORMAT."""
    return os.environ.get('EYEGLASS_LOG_FORMAT', 'human').lower()


def setup_logging(
    level: Optional[int] = None,
    format_type: Optional[str] = None,
    log_file: Optional[Path] = None,
    use_colors: bool = False,
    include_context: bool = False
) -> None:
    """
    Configure the root logger.

    Console output goes to stderr so stdout stays free for command output.

    Args:
        level: Logging level (defaults to EYEGLASS_LOG_LEVEL or WARNING)
        format_type: Format type ('json', 'human', 'simple')
        log_file: Optional path to a rotating JSON log file
        use_colors: Use ANSI colors in console output
        include_context: Include module/function context in logs

    Environment Variables:
        EYEGLASS_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        EYEGLASS_LOG_FORMAT: Set format (json, human, simple)
        EYEGLASS_LOG_FILE: Path to log file
        LOG_LEVEL: Fallback for log level
    """
    if level is None:
        level = get_log_level_from_env()

    if format_type is None:
        format_type = get_log_format_from_env()

    if log_file is None:
        log_file_env = os.environ.get('EYEGLASS_LOG_FILE')
        if log_file_env:
            log_file = Path(log_file_env)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if format_type == 'json':
        formatter: logging.Formatter = JSONFormatter(include_context=include_context)
    elif format_type == 'simple':
        formatter = logging.Formatter('%(levelname)s: %(message)s')
    else:
        formatter = HumanReadableFormatter(use_colors=use_colors, include_context=include_context)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        # 10MB max, 5 backups; always JSON
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8',
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter(include_context=True))
        root_logger.addHandler(file_handler)


def get_logger(name: str, extra: Optional[Dict[str, Any]] = None) -> Union[logging.Logger, logging.LoggerAdapter]:
    """
    Get a logger with optional extra context.

    Example:
        >>> logger = get_logger(__name__, extra={'config': 'eyeglass.yaml'})
        >>> logger.info("Assembling options")
    """
    logger = logging.getLogger(name)

    if extra:
        return logging.LoggerAdapter(logger, extra)

    return logger
