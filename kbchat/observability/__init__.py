"""
Observability module.

Provides structured logging, correlation ID tracking and request middleware.
"""

from kbchat.observability.correlation import get_correlation_id, set_correlation_id
from kbchat.observability.logger import configure_logging
from kbchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
]
