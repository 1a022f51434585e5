"""
Observability module.

Provides structured logging, correlation ID tracking and Langfuse tracing.
"""

from docqa.observability.correlation import get_correlation_id, set_correlation_id
from docqa.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger", "get_correlation_id", "set_correlation_id"]
