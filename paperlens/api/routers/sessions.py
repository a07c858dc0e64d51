"""
Session API endpoints.

Routes:
- POST /sessions - Index a document into a new session
- GET /sessions/{id}/messages - Get conversation log
- GET /sessions/{id}/export - Export insights and conversation as Markdown

Dependencies: paperlens.application.services, paperlens.models
System role: Session management HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from paperlens.api.deps import (
    ServiceCache,
    SessionRegistry,
    get_conversation,
    get_service_cache,
    get_session_registry,
)
from paperlens.api.routers.error_handling import handle_conversation_errors
from paperlens.application.services import ConversationService
from paperlens.core.rag import format_paged_text
from paperlens.models.session import CreateSessionRequest, MessagesResponse, SessionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=201)
@handle_conversation_errors
async def create_session(
    request: CreateSessionRequest,
    cache: ServiceCache = Depends(get_service_cache),
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """
    Index extracted pages into a new conversation session.

    Args:
        request: CreateSessionRequest with file name and page texts
        cache: Injected ServiceCache
        registry: Injected SessionRegistry

    Returns:
        SessionResponse: Session id, chunk count and insights
    """
    pages = sorted(request.pages, key=lambda page: page.page_number)
    paged_text = format_paged_text((page.page_number, page.text) for page in pages)

    conversation = cache.create_conversation()
    insights = await conversation.index_document(
        file_name=request.file_name,
        paged_text=paged_text,
        page_count=len(pages),
    )
    registry.add(conversation)

    return SessionResponse(
        session_id=conversation.session_id,
        file_name=request.file_name,
        page_count=conversation.page_count,
        chunk_count=conversation.chunk_count,
        insights=insights,
    )


@router.get("/{session_id}/messages", response_model=MessagesResponse)
async def get_messages(
    conversation: ConversationService = Depends(get_conversation),
) -> MessagesResponse:
    """Get the session's conversation log, oldest first."""
    history = conversation.history
    return MessagesResponse(messages=history, total=len(history))


@router.get("/{session_id}/export", response_class=PlainTextResponse)
@handle_conversation_errors
async def export_session(
    conversation: ConversationService = Depends(get_conversation),
) -> PlainTextResponse:
    """Export insights and conversation as a Markdown document."""
    return PlainTextResponse(conversation.export_markdown(), media_type="text/markdown")
