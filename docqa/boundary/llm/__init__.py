"""
Model provider boundary.

Embedding and chat completion vendors behind LangChain interfaces.
"""

from docqa.boundary.llm.chat_model import build_chat_model
from docqa.boundary.llm.embeddings import EmbeddingProvider

__all__ = ["EmbeddingProvider", "build_chat_model"]
