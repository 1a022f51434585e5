"""
Embedding provider.

Wraps the configured vendor embeddings (Google Gemini or Bedrock Titan) and
translates vendor failures into EmbeddingError. Vector dimension is fixed by
configuration and must match the vector index.

Dependencies: langchain_google_genai, langchain_aws, langchain_core
System role: Embedding capability for ingestion and retrieval
"""

import logging
from typing import List

from langchain_aws import BedrockEmbeddings
from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from docqa.configs.llm import EmbeddingSettings
from docqa.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings wrapper with fixed output dimensionality.

    The base class ignores output_dimensionality in the constructor, so every
    embed call passes the configured dimension explicitly.
    """

    _output_dimensionality: int = 1024

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1024,
        **kwargs,
    ) -> None:
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_documents(self, texts: List[str], **kwargs) -> List[List[float]]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_documents(texts, **kwargs)

    def embed_query(self, text: str, **kwargs) -> List[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_query(text, **kwargs)


def build_vendor_embeddings(settings: EmbeddingSettings) -> Embeddings:
    """
    Instantiate the vendor embeddings client.

    Args:
        settings: Embedding settings

    Returns:
        Embeddings: Gemini or Bedrock Titan embeddings

    Raises:
        ValueError: If the provider is unknown
    """
    provider = settings.provider.lower()
    if provider == "google":
        kwargs = {}
        if settings.api_key is not None:
            kwargs["google_api_key"] = settings.api_key
        return FixedDimensionEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimension,
            **kwargs,
        )
    if provider == "bedrock":
        return BedrockEmbeddings(
            model_id=settings.model,
            region_name=settings.region,
            model_kwargs={"dimensions": settings.dimension, "normalize": True},
        )
    raise ValueError(f"Invalid EMBEDDING_PROVIDER: {provider}. Must be 'google' or 'bedrock'.")


class EmbeddingProvider(Embeddings):
    """
    Embedding capability used by the pipeline, retriever and FAISS wrapper.

    Any failure from the vendor client surfaces as EmbeddingError.
    """

    def __init__(self, embeddings: Embeddings, dimension: int) -> None:
        self._embeddings = embeddings
        self.dimension = dimension

    @classmethod
    def from_settings(cls, settings: EmbeddingSettings) -> "EmbeddingProvider":
        return cls(build_vendor_embeddings(settings), settings.dimension)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        try:
            vectors = self._embeddings.embed_documents(texts)
        except Exception as e:
            logger.error(f"{__name__}:embed_documents - FAILED: {type(e).__name__}: {e}")
            raise EmbeddingError(
                f"Embedding request failed: {e}",
                {"text_count": len(texts)},
            ) from e
        logger.debug(f"{__name__}:embed_documents - Embedded {len(vectors)} texts")
        return vectors

    def embed_query(self, text: str) -> list[float]:
        try:
            return self._embeddings.embed_query(text)
        except Exception as e:
            logger.error(f"{__name__}:embed_query - FAILED: {type(e).__name__}: {e}")
            raise EmbeddingError(f"Query embedding failed: {e}") from e
