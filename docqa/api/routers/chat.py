"""
Chat API endpoint.

Routes: POST /chat

Streams the answer as plain text. Source previews travel in the
x-sources header (base64 JSON) next to x-message-index.

Dependencies: docqa.application.services.chat_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from docqa.api.deps import get_chat_service
from docqa.application.services import ChatService
from docqa.models.chat import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """
    Answer the last message using documents in the chatId namespace.

    Returns 404 {"error": ...} when nothing is retrieved within the
    retrieval deadline.
    """
    stream = await chat_service.respond(request)
    return StreamingResponse(
        stream.body,
        media_type="text/plain; charset=utf-8",
        headers=stream.headers,
    )
