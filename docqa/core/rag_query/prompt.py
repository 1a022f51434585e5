"""
RAG answer prompt.

System instructions with the retrieved context, the prior conversation and
the active question.

Dependencies: langchain_core.prompts
System role: Prompt template for grounded answers
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

SYSTEM_PROMPT = """You are a helpful assistant that answers questions about the user's uploaded document.

## Instructions
1. Use ONLY the provided context to answer questions
2. If the context doesn't contain enough information, say so clearly
3. Be concise but thorough in your explanations
4. Use the conversation history to understand follow-up questions

## Context
{context}"""

RAG_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", SYSTEM_PROMPT),
        MessagesPlaceholder("chat_history"),
        ("human", "{input}"),
    ]
)
