"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Logging setup (text or JSON, optional rotating log file)
- Reading JSON inputs from files or stdin
- Writing JSON outputs to files or stdout

Log records and status lines go to stderr; stdout only carries converted
documents so that it can be piped.
"""

import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from ..constants import LoggingConfig

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

STDIN_MARKER = "-"


class JSONFormatter(logging.Formatter):
    """A lightweight JSON formatter for structured logging."""

    _RESERVED_FIELDS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "process",
        "processName",
        "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            LoggingConfig.JSON_DATE_FORMAT
        )
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # extra={...} fields
        for key, value in record.__dict__.items():
            if key in self._RESERVED_FIELDS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS.clear()


def _create_file_handler(path: str) -> Handler:
    if LoggingConfig.ROTATION_ENABLED:
        return RotatingFileHandler(
            path,
            maxBytes=LoggingConfig.MAX_LOG_FILE_MB * 1024 * 1024,
            backupCount=LoggingConfig.LOG_BACKUP_COUNT,
            encoding='utf-8',
        )
    return logging.FileHandler(path, encoding='utf-8')


def _open_log_file(file_path: str, formatter: logging.Formatter) -> Optional[Handler]:
    """
    Open a log file handler, trying fallback locations in order:
    the requested path, the system temp directory, the user home directory.
    """
    log_filename = os.path.basename(file_path) or LoggingConfig.DEFAULT_LOG_FILENAME
    fallback_locations = [
        file_path,
        os.path.join(tempfile.gettempdir(), log_filename),
        os.path.join(Path.home(), log_filename),
    ]
    for location in fallback_locations:
        try:
            log_dir = os.path.dirname(location)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handler = _create_file_handler(location)
        except OSError as exc:
            print(f"  Could not create log at {location}: {exc}", file=sys.stderr)
            continue
        handler.setFormatter(formatter)
        if location != file_path:
            print(f"Note: Using fallback log file: {location}", file=sys.stderr)
        return handler

    print("Warning: Could not write log file to any location, logging to console only",
          file=sys.stderr)
    return None


def setup_logging(
    level: LogLevel = LoggingConfig.DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Configure the root logger.

    Args:
        level: Log level, used when ``config`` has no ``level``.
        log_file: Log file path, overrides ``config["file"]``.
        config: The ``logging`` section of the configuration file
            (``level``, ``file``, ``format``).

    Returns:
        The log file actually used, or None when logging to stderr only.
    """
    config_dict = dict(config or {})

    resolved_level = str(config_dict.get('level') or level or LoggingConfig.DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, resolved_level.upper(), logging.INFO)

    file_path = log_file if log_file is not None else config_dict.get('file')

    format_style = str(config_dict.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if format_style not in LoggingConfig.SUPPORTED_FORMATS:
        format_style = LoggingConfig.DEFAULT_FORMAT_STYLE

    formatter: logging.Formatter
    if format_style == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=LoggingConfig.LOG_FORMAT, datefmt=LoggingConfig.DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers: List[Handler] = [console_handler]

    actual_log_file = None
    if file_path:
        file_handler = _open_log_file(str(file_path), formatter)
        if file_handler is not None:
            handlers.append(file_handler)
            actual_log_file = getattr(file_handler, 'baseFilename', str(file_path))

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    logging.captureWarnings(True)
    root_logger.setLevel(log_level)
    for handler in handlers:
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    if actual_log_file:
        logging.getLogger(__name__).info(f"Logging to: {actual_log_file}")
    return actual_log_file


def status(message: str) -> None:
    """Print a user-facing status line (stderr)."""
    print(message, file=sys.stderr)


def input_name(path: str) -> str:
    return "<stdin>" if path == STDIN_MARKER else path


def read_text(path: str) -> str:
    """
    Read an input file, or stdin for ``-``.

    Raises:
        FileNotFoundError: the file does not exist.
    """
    if path == STDIN_MARKER:
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def read_json(path: str) -> Any:
    """
    Read and decode a JSON input.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: the content is not valid JSON.
    """
    text = read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {input_name(path)} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e


def write_json(document: Any, output: Optional[str] = None) -> None:
    """Write ``document`` as indented JSON to ``output``, or stdout when None."""
    text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    if output is None or output == STDIN_MARKER:
        sys.stdout.write(text)
        return
    path = Path(output)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
