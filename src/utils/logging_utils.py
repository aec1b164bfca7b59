"""
Logging Utility Functions
======================

Root logger setup and structured context for accessibility runs.

Context values (grid name, cutoff, ...) are attached to every record emitted
while a LogContext is active. The context lives in a ContextVar, so each
thread sees only the values it set itself and concurrent aggregations never
tag each other's records.

Classes:
    LogContext: Context manager for adding contextual information to logs.
    ContextAwareFormatter: Formatter that copies the active context onto records.

Functions:
    setup_logging: Configure the root logger with console and optional file output.
    setup_structured_logging: setup_logging with a run-wide request ID.
    with_log_context: Decorator to add logging context to functions.
    get_log_context: The context active in the calling thread.
    clear_log_context: Drop any active logging context.

Example:
    >>> from src.utils.logging_utils import setup_structured_logging, LogContext
    >>> setup_structured_logging(log_file="accessibility.log")
    >>> with LogContext(grid="jobs", cutoff=45):
    ...     logging.info("Computing accessibility")
"""

# Standard library imports
import logging
import os
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Optional
from functools import wraps

# Local imports
from src.config import LOGS

STRUCTURED_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(request_id)s - %(message)s"

_log_context: ContextVar[dict] = ContextVar("log_context", default={})

# Shared by every thread; set once per run by setup_logging
_request_id = "-"


def get_log_context() -> dict:
    return _log_context.get()


def clear_log_context():
    """Clear all context values for the calling thread."""
    _log_context.set({})


class LogContext:
    """
    Context manager for adding structured context to logs.

    Nested contexts merge, and leaving one restores exactly what was active
    on entry.

    Example:
        with LogContext(grid="jobs"):
            logging.debug("Summing reachable pixels")
    """

    def __init__(self, **kwargs):
        self.values = kwargs
        self._token = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.values})
        return self

    def __exit__(self, _exc_type, _exc_val, _exc_tb):
        _log_context.reset(self._token)
        self._token = None


class ContextAwareFormatter(logging.Formatter):
    """Adds the active log context and the run's request ID to each record."""

    def format(self, record):
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)

        if not hasattr(record, "request_id"):
            record.request_id = _request_id

        return super().format(record)


def with_log_context(func=None, **context_kwargs):
    """
    Decorator to add context to all log messages within a function.

    Example:
        @with_log_context(module="raster")
        def build_grid(rows):
            logging.debug(f"Building grid from {len(rows)} rows")
    """

    def decorator(f):
        @wraps(f)
        def wrapped(*args, **kwargs):
            with LogContext(**context_kwargs):
                return f(*args, **kwargs)

        return wrapped

    if func is None:
        return decorator
    return decorator(func)


def setup_logging(
    log_file_name=None,
    logs_dir=None,
    level=logging.INFO,
    format_string="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    request_id=None,
):
    """Set up the root logger, replacing any handlers already attached.

    Args:
        log_file_name: Name of a log file to write alongside the console
        logs_dir: Directory for the log file (defaults to <project root>/logs)
        level: Logging level (default: INFO)
        format_string: Format string for log messages
        request_id: ID stamped on every record until logging is set up again
    """
    global _request_id
    _request_id = request_id or "-"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = ContextAwareFormatter(format_string)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file_name:
        log_file_path = Path(logs_dir or LOGS) / log_file_name
        try:
            os.makedirs(log_file_path.parent, exist_ok=True)
            file_handler = logging.FileHandler(log_file_path)
        except OSError as e:
            logging.error(f"Failed to setup file logging: {e}")
        else:
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            logging.info(f"Logging to file: {log_file_path}")

    clear_log_context()
    logging.info("Logging system initialized")


def setup_structured_logging(
    log_file: Optional[str] = None,
    logs_dir: Optional[str] = None,
    level: int = logging.INFO,
    request_id: Optional[str] = None,
):
    """
    Configure logging with the request ID column, generating an ID when none
    is given so every record of one run can be grouped.
    """
    setup_logging(
        log_file_name=log_file,
        logs_dir=logs_dir,
        level=level,
        format_string=STRUCTURED_FORMAT,
        request_id=request_id or str(uuid.uuid4()),
    )
