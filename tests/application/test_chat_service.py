"""
Test suite for ChatService and its helpers.

Runs the real chain over a temp FAISS store with fake embeddings and a fake
streaming chat model.

System role: Verification of chat orchestration and response headers
"""

import base64
import json
import logging
import time
from pathlib import Path

import pytest
from langchain_core.documents import Document
from langchain_core.messages import AIMessage, ChatMessage as RoleMessage, HumanMessage

from docqa.application.services import ChatService
from docqa.application.services.chat_service import (
    build_source_previews,
    encode_sources,
    format_chat_message,
)
from docqa.boundary.vdb import FAISSPartitionedStore
from docqa.configs.ingestion import ChatSettings
from docqa.core.exceptions import NoRelevantDocumentsError, ValidationError
from docqa.models.chat import ChatMessage, ChatRequest
from docqa.models.chunk import Chunk, ChunkMetadata

ANSWER = "Glucose stores the captured energy."


def seed(store: FAISSPartitionedStore, embeddings, namespace: str, count: int) -> None:
    chunks = [
        Chunk(
            content=f"Chunk {i} about photosynthesis and the energy stored in glucose molecules.",
            metadata=ChunkMetadata(
                namespace_id=namespace,
                source_locator=f"file:///{namespace}.pdf",
                source_file_name="biology.pdf",
                total_pages=3,
                chunk_index=i,
            ),
        )
        for i in range(count)
    ]
    store.write(namespace, chunks, embeddings.embed_documents([c.content for c in chunks]))


def decode_sources(header: str) -> list[dict]:
    return json.loads(base64.b64decode(header).decode("utf-8"))


@pytest.fixture
def store(tmp_path: Path, fake_embeddings) -> FAISSPartitionedStore:
    return FAISSPartitionedStore(str(tmp_path / "faiss"), fake_embeddings)


@pytest.fixture
def chat_service(store, fake_embeddings, fake_chat_model) -> ChatService:
    return ChatService(
        model=fake_chat_model,
        embeddings=fake_embeddings,
        vector_store=store,
        settings=ChatSettings(retrieval_timeout_seconds=5.0),
        top_k=4,
    )


class TestHelpers:
    """Tests for message formatting and header encoding."""

    def test_user_and_assistant_roles(self) -> None:
        assert isinstance(format_chat_message(ChatMessage(role="user", content="hi")), HumanMessage)
        assert isinstance(format_chat_message(ChatMessage(role="assistant", content="yo")), AIMessage)

    def test_unknown_role_falls_back_with_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            message = format_chat_message(ChatMessage(role="system", content="be brief"))

        assert isinstance(message, RoleMessage)
        assert message.role == "system"
        assert 'Unknown message type passed: "system"' in caplog.text

    def test_previews_truncate_content(self) -> None:
        doc = Document(page_content="x" * 80, metadata={"chunkIndex": 0})

        preview = build_source_previews([doc], preview_chars=50)[0]

        assert preview.page_content_preview == "x" * 50 + "..."
        assert preview.metadata == {"chunkIndex": 0}

    def test_encode_sources_uses_wire_keys(self) -> None:
        previews = build_source_previews([Document(page_content="short", metadata={"score": 0.5})])

        decoded = decode_sources(encode_sources(previews))

        assert decoded == [{"pageContentPreview": "short...", "metadata": {"score": 0.5}}]


class TestRespond:
    """Tests for respond()."""

    @pytest.mark.asyncio
    async def test_streams_answer_with_sources(self, chat_service, store, fake_embeddings) -> None:
        seed(store, fake_embeddings, "doc-1", 5)
        request = ChatRequest(
            messages=[
                ChatMessage(role="user", content="What is photosynthesis?"),
                ChatMessage(role="assistant", content="A process in plants."),
                ChatMessage(role="user", content="Where is the energy stored?"),
            ],
            chat_id="doc-1",
        )

        stream = await chat_service.respond(request)
        body = "".join([token async for token in stream.body])

        assert body == ANSWER
        assert stream.message_index == 3
        assert stream.headers["x-message-index"] == "3"
        sources = decode_sources(stream.headers["x-sources"])
        assert len(sources) == 4
        assert all(s["metadata"]["namespaceId"] == "doc-1" for s in sources)
        assert all(s["pageContentPreview"].endswith("...") for s in sources)

    @pytest.mark.asyncio
    async def test_empty_namespace_raises_not_found(self, chat_service) -> None:
        request = ChatRequest(messages=[ChatMessage(role="user", content="anything?")], chat_id="nothing-here")

        with pytest.raises(NoRelevantDocumentsError) as exc_info:
            await chat_service.respond(request)

        assert exc_info.value.status_code == 404
        assert exc_info.value.details["timed_out"] is False

    @pytest.mark.asyncio
    async def test_other_namespaces_are_not_used(self, chat_service, store, fake_embeddings) -> None:
        seed(store, fake_embeddings, "doc-other", 3)
        request = ChatRequest(messages=[ChatMessage(role="user", content="photosynthesis?")], chat_id="doc-1")

        with pytest.raises(NoRelevantDocumentsError):
            await chat_service.respond(request)

    @pytest.mark.asyncio
    async def test_slow_retrieval_times_out(self, store, fake_embeddings, fake_chat_model) -> None:
        seed(store, fake_embeddings, "doc-1", 2)
        original_query = store.query

        def slow_query(namespace, query_vector, k):
            time.sleep(0.3)
            return original_query(namespace, query_vector, k)

        store.query = slow_query
        service = ChatService(
            model=fake_chat_model,
            embeddings=fake_embeddings,
            vector_store=store,
            settings=ChatSettings(retrieval_timeout_seconds=0.05),
        )
        request = ChatRequest(messages=[ChatMessage(role="user", content="photosynthesis?")], chat_id="doc-1")

        with pytest.raises(NoRelevantDocumentsError) as exc_info:
            await service.respond(request)

        assert exc_info.value.details["timed_out"] is True

    @pytest.mark.asyncio
    async def test_requires_messages(self, chat_service) -> None:
        with pytest.raises(ValidationError, match="No messages provided"):
            await chat_service.respond(ChatRequest(messages=[], chat_id="doc-1"))

    @pytest.mark.asyncio
    async def test_requires_chat_id(self, chat_service) -> None:
        with pytest.raises(ValidationError, match="chatId"):
            await chat_service.respond(ChatRequest(messages=[ChatMessage(role="user", content="hi")]))
