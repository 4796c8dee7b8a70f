"""
Logging utilities for safe structured logging.

Log records are attached to ``extra`` so values must never collide with
reserved LogRecord attributes and must stay short. Message bodies and
document text are summarised rather than logged in full.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

_RESERVED = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Convert any value to a bounded string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    text = value if isinstance(value, str) else str(value)
    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def _to_extra(context: dict[str, Any]) -> dict[str, str]:
    extra = {}
    for key, val in context.items():
        name = f"ctx_{key}" if key in _RESERVED else key
        extra[name] = safe_log_value(val)
    return extra


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs (tenant_id, document_id, ...)
    """
    logger.log(level, message, extra=_to_extra(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with its type and message plus structured context.

    Must be called from inside an ``except`` block so the traceback is attached.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional key-value pairs
    """
    extra = _to_extra(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc), max_length=500)
    logger.exception(message, extra=extra)
