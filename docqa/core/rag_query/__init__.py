"""RAG query business logic.

Prompt and chain composition for grounded, streamed answers.
"""

from .chain import build_rag_chain, format_documents
from .prompt import RAG_PROMPT

__all__ = ["RAG_PROMPT", "build_rag_chain", "format_documents"]
