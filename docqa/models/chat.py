"""
Chat domain models and schemas.

Request schema for the chat endpoint and the source previews reported in
the x-sources response header.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatMessage(BaseModel):
    """Single chat message as sent by the client."""

    role: str = Field(description="Message role: 'user', 'assistant', or any other role")
    content: str = Field(description="Message content")


class ChatRequest(BaseModel):
    """Request schema for chat turns. chatId doubles as the retrieval namespace."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(default_factory=list)
    chat_id: str | None = Field(default=None, alias="chatId")

    @field_validator("chat_id", mode="before")
    @classmethod
    def _stringify_chat_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class SourcePreview(BaseModel):
    """Compact preview of a retrieved chunk for the x-sources header."""

    model_config = ConfigDict(populate_by_name=True)

    page_content_preview: str = Field(alias="pageContentPreview")
    metadata: dict[str, Any]
