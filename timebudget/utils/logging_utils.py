"""Structured logging utilities with context support."""

import logging
import threading
import uuid
from typing import Any, Dict, Mapping, Optional

# Thread-local storage for log context
_thread_local = threading.local()

# Field names whose values are never logged
SENSITIVE_FIELDS = {"password", "token", "secret", "authorization", "api_key"}


def generate_session_id() -> str:
    """
    Generate a short id for tracking one import session in the logs.

    Returns:
        12-character hex string
    """
    return uuid.uuid4().hex[:12]


def get_context() -> Dict[str, Any]:
    """Get a copy of the current thread's log context."""
    return dict(getattr(_thread_local, "context", {}))


def get_session_id() -> Optional[str]:
    return get_context().get("session_id")


class LogContext:
    """
    Context manager for adding structured fields to log records.

    Fields are stored in thread-local storage and copied onto every record
    that passes a handler carrying ``ContextFilter``. Nested contexts merge;
    leaving a context restores the previous fields.

    Example:
        with LogContext(session_id="3f9a0c1e77b2", file_name="uren.xlsx"):
            logger.info("Parsing import file")
            # Record carries session_id and file_name
    """

    def __init__(self, **fields):
        self.fields = fields
        self.previous_context: Optional[Dict[str, Any]] = None

    def __enter__(self):
        if not hasattr(_thread_local, "context"):
            _thread_local.context = {}
        self.previous_context = _thread_local.context.copy()
        _thread_local.context.update(self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _thread_local.context = self.previous_context or {}


class ContextFilter(logging.Filter):
    """Logging filter that adds context fields to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in getattr(_thread_local, "context", {}).items():
            setattr(record, key, value)
        return True


def sanitize_sensitive_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Redact values of sensitive fields, recursively.

    Example:
        >>> sanitize_sensitive_data({"Authorization": "Bearer abc", "Accept": "json"})
        {'Authorization': '***REDACTED***', 'Accept': 'json'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_FIELDS):
            sanitized[key] = "***REDACTED***" if value is not None else None
        elif isinstance(value, Mapping):
            sanitized[key] = sanitize_sensitive_data(value)
        else:
            sanitized[key] = value
    return sanitized
