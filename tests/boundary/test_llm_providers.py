"""
Test suite for embedding and chat model providers.

Vendor clients are mocked; no network calls are made.

System role: Verification of provider selection and error wrapping
"""

from unittest.mock import MagicMock, patch

import pytest
from langchain_core.embeddings import Embeddings

from docqa.boundary.llm import EmbeddingProvider, build_chat_model
from docqa.boundary.llm.embeddings import build_vendor_embeddings
from docqa.configs.llm import EmbeddingSettings, LLMSettings
from docqa.core.exceptions import CompletionError, EmbeddingError

EMBEDDINGS_MODULE = "docqa.boundary.llm.embeddings"
CHAT_MODULE = "docqa.boundary.llm.chat_model"


class TestEmbeddingProvider:
    """Tests for EmbeddingProvider."""

    def test_delegates_to_vendor(self) -> None:
        vendor = MagicMock(spec=Embeddings)
        vendor.embed_documents.return_value = [[0.1, 0.2]]
        vendor.embed_query.return_value = [0.3, 0.4]
        provider = EmbeddingProvider(vendor, dimension=2)

        assert provider.embed_documents(["a"]) == [[0.1, 0.2]]
        assert provider.embed_query("q") == [0.3, 0.4]

    def test_empty_batch_skips_vendor(self) -> None:
        vendor = MagicMock(spec=Embeddings)

        assert EmbeddingProvider(vendor, dimension=2).embed_documents([]) == []
        vendor.embed_documents.assert_not_called()

    def test_vendor_failure_becomes_embedding_error(self) -> None:
        vendor = MagicMock(spec=Embeddings)
        vendor.embed_documents.side_effect = RuntimeError("quota exhausted")
        vendor.embed_query.side_effect = RuntimeError("quota exhausted")
        provider = EmbeddingProvider(vendor, dimension=2)

        with pytest.raises(EmbeddingError) as exc_info:
            provider.embed_documents(["a", "b"])
        assert exc_info.value.status_code == 502
        assert exc_info.value.details["text_count"] == 2

        with pytest.raises(EmbeddingError):
            provider.embed_query("q")


class TestVendorSelection:
    """Tests for build_vendor_embeddings and build_chat_model."""

    def test_bedrock_embeddings_get_dimension(self) -> None:
        settings = EmbeddingSettings(provider="bedrock", model="amazon.titan-embed-text-v2:0", dimension=512)

        with patch(f"{EMBEDDINGS_MODULE}.BedrockEmbeddings") as bedrock_cls:
            build_vendor_embeddings(settings)

        kwargs = bedrock_cls.call_args.kwargs
        assert kwargs["model_id"] == "amazon.titan-embed-text-v2:0"
        assert kwargs["model_kwargs"] == {"dimensions": 512, "normalize": True}

    def test_google_embeddings_get_dimension(self) -> None:
        settings = EmbeddingSettings(provider="google", dimension=768)

        with patch(f"{EMBEDDINGS_MODULE}.FixedDimensionEmbeddings") as google_cls:
            build_vendor_embeddings(settings)

        assert google_cls.call_args.kwargs["output_dimensionality"] == 768

    def test_unknown_embedding_provider(self) -> None:
        with pytest.raises(ValueError, match="EMBEDDING_PROVIDER"):
            build_vendor_embeddings(EmbeddingSettings(provider="openai"))

    def test_bedrock_chat_model(self) -> None:
        settings = LLMSettings(provider="bedrock", model="anthropic.model", region="eu-west-1")

        with patch(f"{CHAT_MODULE}.ChatBedrockConverse") as bedrock_cls:
            model = build_chat_model(settings)

        assert model is bedrock_cls.return_value
        assert bedrock_cls.call_args.kwargs["region_name"] == "eu-west-1"

    def test_unknown_chat_provider(self) -> None:
        with pytest.raises(CompletionError, match="LLM_PROVIDER"):
            build_chat_model(LLMSettings(provider="openai"))

    def test_client_construction_failure(self) -> None:
        with patch(f"{CHAT_MODULE}.ChatGoogleGenerativeAI", side_effect=ValueError("no key")):
            with pytest.raises(CompletionError, match="Could not initialise chat model"):
                build_chat_model(LLMSettings(provider="google"))
