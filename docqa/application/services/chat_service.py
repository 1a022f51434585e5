"""
Chat service for conversational Q&A with RAG.

Starts the streamed completion, waits (bounded) for the retriever callback,
then either rejects the turn because nothing was retrieved or hands back a
token stream plus source previews for the response headers.

Dependencies: langchain_core, docqa.core.retriever, docqa.core.rag_query
System role: Chat service orchestration layer
"""

import asyncio
import base64
import json
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.messages import ChatMessage as RoleMessage
from langchain_core.runnables import Runnable

from docqa.boundary.vdb import VectorStore
from docqa.configs.ingestion import ChatSettings
from docqa.core.exceptions import NoRelevantDocumentsError, ValidationError
from docqa.core.rag_query import build_rag_chain
from docqa.core.retriever import NamespaceRetriever, RetrievalSignal
from docqa.models.chat import ChatMessage, ChatRequest, SourcePreview

logger = logging.getLogger(__name__)

_END = object()


def format_chat_message(message: ChatMessage) -> BaseMessage:
    """Map a client message onto a LangChain message by role."""
    if message.role == "user":
        return HumanMessage(content=message.content)
    if message.role == "assistant":
        return AIMessage(content=message.content)
    logger.warning(
        f'Unknown message type passed: "{message.role}". Falling back to generic message type.'
    )
    return RoleMessage(content=message.content, role=message.role)


def build_source_previews(documents: list[Document], preview_chars: int = 50) -> list[SourcePreview]:
    return [
        SourcePreview(
            page_content_preview=doc.page_content[:preview_chars] + "...",
            metadata=doc.metadata,
        )
        for doc in documents
    ]


def encode_sources(sources: list[SourcePreview]) -> str:
    """Base64-encoded JSON array for the x-sources header."""
    payload = json.dumps([source.model_dump(by_alias=True) for source in sources])
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


@dataclass
class ChatStream:
    """A chat turn ready to be streamed."""

    body: AsyncIterator[str]
    message_index: int
    sources: list[SourcePreview] = field(default_factory=list)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "x-message-index": str(self.message_index),
            "x-sources": encode_sources(self.sources),
        }


class ChatService:
    """
    Chat service for retrieval-augmented answers.

    A new retriever, signal and chain are built for every turn; nothing is
    shared between requests except the long-lived clients passed in.
    """

    def __init__(
        self,
        model: BaseChatModel,
        embeddings: Embeddings,
        vector_store: VectorStore,
        settings: ChatSettings,
        top_k: int = 4,
        callbacks: list[BaseCallbackHandler] | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            model: Streaming chat model
            embeddings: Query embeddings
            vector_store: Namespace-scoped vector store
            settings: Timeout and preview settings
            top_k: Chunks retrieved per turn
            callbacks: Extra callback handlers (tracing)
        """
        self._model = model
        self._embeddings = embeddings
        self._vector_store = vector_store
        self._settings = settings
        self._top_k = top_k
        self._callbacks = callbacks or []

    async def respond(self, request: ChatRequest) -> ChatStream:
        """
        Answer the last message of a conversation.

        Args:
            request: Messages (last one is the question) and chatId namespace

        Returns:
            ChatStream: Token stream, message index and source previews

        Raises:
            ValidationError: No messages or no chatId
            NoRelevantDocumentsError: Nothing retrieved before the deadline
            UpstreamServiceError: Retrieval failed
        """
        if not request.messages:
            raise ValidationError("No messages provided.", field="messages")
        if not request.chat_id:
            raise ValidationError("chatId is required", field="chatId")

        namespace = request.chat_id
        history = [format_chat_message(m) for m in request.messages[:-1]]
        question = request.messages[-1].content
        logger.info(
            f"{__name__}:respond - Processing message",
            extra={"namespace": namespace, "message_count": len(request.messages)},
        )

        retriever = NamespaceRetriever(
            store=self._vector_store,
            embeddings=self._embeddings,
            namespace=namespace,
            k=self._top_k,
        )
        signal = RetrievalSignal()
        chain = build_rag_chain(self._model, retriever)

        queue: asyncio.Queue = asyncio.Queue()
        producer = asyncio.create_task(
            self._produce(
                chain,
                {"input": question, "chat_history": history},
                {"callbacks": [signal, *self._callbacks]},
                queue,
            )
        )

        try:
            outcome = await signal.wait(self._settings.retrieval_timeout_seconds)
        except BaseException:
            producer.cancel()
            raise

        if not outcome.documents:
            producer.cancel()
            logger.info(
                f"{__name__}:respond - No documents",
                extra={"namespace": namespace, "timed_out": outcome.timed_out},
            )
            raise NoRelevantDocumentsError(namespace, timed_out=outcome.timed_out)

        return ChatStream(
            body=self._drain(queue, producer),
            message_index=len(history) + 1,
            sources=build_source_previews(outcome.documents, self._settings.source_preview_chars),
        )

    async def _produce(
        self,
        chain: Runnable,
        inputs: dict[str, Any],
        config: dict[str, Any],
        queue: asyncio.Queue,
    ) -> None:
        try:
            async for token in chain.astream(inputs, config=config):
                queue.put_nowait(token)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Headers may already be sent; the stream just ends
            logger.exception(f"{__name__}:stream - FAILED: {type(e).__name__}: {e}")
        finally:
            queue.put_nowait(_END)

    async def _drain(self, queue: asyncio.Queue, producer: asyncio.Task) -> AsyncIterator[str]:
        try:
            while True:
                item = await queue.get()
                if item is _END:
                    break
                yield item
        finally:
            if not producer.done():
                producer.cancel()
