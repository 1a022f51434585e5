"""
Langfuse tracing integration.

Builds a LangChain callback handler that reports chat chain runs to
Langfuse. Tracing is optional: without keys no handler is created.

Dependencies: langfuse, docqa.configs
System role: Distributed tracing for RAG operations
"""

import logging

from langfuse import Langfuse
from langfuse.langchain import CallbackHandler

from docqa.configs.observability import ObservabilitySettings

logger = logging.getLogger(__name__)


class LangfuseTracer:
    """Owns the Langfuse client and hands out per-request callback handlers."""

    def __init__(self, settings: ObservabilitySettings) -> None:
        """
        Initialize Langfuse client with configuration.

        Args:
            settings: Observability settings
        """
        self._enabled = settings.tracing_configured
        self._public_key = settings.public_key
        self._client: Langfuse | None = None
        if self._enabled:
            self._client = Langfuse(
                public_key=settings.public_key,
                secret_key=settings.secret_key,
                host=settings.host,
            )
            logger.info("Langfuse tracing enabled: host=%s", settings.host)
        else:
            logger.info("Langfuse tracing disabled")

    @property
    def enabled(self) -> bool:
        return self._enabled

    def callback_handler(self) -> CallbackHandler | None:
        """Return a fresh LangChain handler, or None when tracing is off."""
        if not self._enabled:
            return None
        return CallbackHandler(public_key=self._public_key)

    def flush(self) -> None:
        """Flush buffered events (called on shutdown)."""
        if self._client is not None:
            self._client.flush()
