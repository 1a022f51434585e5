"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, deterministic embeddings, fake chat
model, PDF byte builders, and a fully wired application with local backends.
Dependencies: pytest, sqlalchemy, fastapi, langchain_core
System role: Test infrastructure and fixture management
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage

EMBEDDING_SIZE = 16


def make_pdf(pages: list[str]) -> bytes:
    """
    Build a minimal, valid PDF with one line of Helvetica text per page.

    An empty string yields a page without any text (like a scanned image).
    """
    objects: list[bytes] = []
    page_count = len(pages)
    font_id = 3 + 2 * page_count
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))

    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())
    for i, text in enumerate(pages):
        content_id = 4 + 2 * i
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {content_id} 0 R /Resources << /Font << /F1 {font_id} 0 R >> >> >>"
            ).encode()
        )
        escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        stream = f"BT /F1 10 Tf 40 700 Td ({escaped}) Tj ET".encode() if text else b""
        objects.append(
            b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream"
        )
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def text_pdf_bytes() -> bytes:
    """Two-page PDF with plenty of extractable text."""
    return make_pdf(
        [
            "Photosynthesis converts light energy into chemical energy stored in glucose molecules.",
            "The Calvin cycle uses ATP and NADPH to fix carbon dioxide into three-carbon sugars.",
        ]
    )


@pytest.fixture
def scanned_pdf_bytes() -> bytes:
    """PDF whose pages carry no text layer."""
    return make_pdf(["", ""])


@pytest.fixture
def long_text() -> str:
    """Roughly 3500 characters of paragraph text."""
    paragraph = (
        "Mitochondria are membrane-bound organelles that generate most of the chemical energy "
        "needed to power the biochemical reactions of the cell. "
    )
    return "\n\n".join(paragraph * 3 for _ in range(8))


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    """Deterministic embeddings: same text, same vector."""
    return DeterministicFakeEmbedding(size=EMBEDDING_SIZE)


@pytest.fixture
def fake_chat_model() -> GenericFakeChatModel:
    """Chat model that streams a fixed answer word by word."""
    return GenericFakeChatModel(messages=iter([AIMessage(content="Glucose stores the captured energy.")]))


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from docqa.boundary.db.base import Base
    import docqa.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_settings(tmp_path: Path):
    """Settings pointing every backend at the temp directory."""
    from docqa.configs import Settings
    from docqa.configs.database import DatabaseSettings
    from docqa.configs.observability import ObservabilitySettings
    from docqa.configs.storage import StorageSettings
    from docqa.configs.vector_store import VectorStoreSettings

    return Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'docqa.db'}"),
        vector_store=VectorStoreSettings(store_type="faiss", faiss_index_dir=str(tmp_path / "faiss"), top_k=4),
        storage=StorageSettings(backend="local", local_dir=str(tmp_path / "uploads")),
        observability=ObservabilitySettings(enable_tracing=False),
    )


@pytest.fixture
def service_cache(test_settings, fake_embeddings, fake_chat_model):
    """Service container wired to local FAISS, local storage and fakes."""
    from docqa.api.deps import ServiceCache
    from docqa.boundary.storage import LocalDocumentStorage
    from docqa.boundary.vdb import FAISSPartitionedStore

    return ServiceCache(
        test_settings,
        embeddings=fake_embeddings,
        vector_store=FAISSPartitionedStore(test_settings.vector_store.faiss_index_dir, fake_embeddings),
        chat_model=fake_chat_model,
        storage=LocalDocumentStorage(test_settings.storage.local_dir),
    )


@pytest.fixture
def app(service_cache):
    """Full application with exception handlers and middleware."""
    from docqa.main import create_app

    return create_app(service_cache)


@pytest.fixture
def client(app):
    """Authenticated TestClient (userId cookie set); runs the lifespan."""
    with TestClient(app, cookies={"userId": "user-1"}) as test_client:
        yield test_client
