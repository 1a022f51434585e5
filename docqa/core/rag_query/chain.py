"""
RAG chain composition (LCEL).

input -> retriever -> formatted context, merged with the question and chat
history, then prompt -> model -> plain string tokens.

Dependencies: langchain_core
System role: Retrieval-augmented answer chain
"""

from operator import itemgetter

from langchain_core.documents import Document
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.retrievers import BaseRetriever
from langchain_core.runnables import Runnable, RunnableLambda, RunnablePassthrough

from docqa.core.rag_query.prompt import RAG_PROMPT


def format_documents(documents: list[Document]) -> str:
    """Join retrieved chunks into the prompt's context block."""
    return "\n\n".join(
        f'<doc id="{index}">\n{document.page_content}\n</doc>'
        for index, document in enumerate(documents)
    )


def build_rag_chain(model: BaseChatModel, retriever: BaseRetriever) -> Runnable:
    """
    Build the streaming answer chain.

    Expects {"input": str, "chat_history": list[BaseMessage]} and yields
    answer text chunks.

    Args:
        model: Chat model
        retriever: Namespace-bound retriever

    Returns:
        Runnable: LCEL chain
    """
    context = itemgetter("input") | retriever | RunnableLambda(format_documents)
    return (
        RunnablePassthrough.assign(context=context)
        | RAG_PROMPT
        | model
        | StrOutputParser()
    )
