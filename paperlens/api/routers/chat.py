"""
Chat API endpoints.

Routes:
- POST /sessions/{session_id}/chat - Send a message through the document agent
- POST /sessions/{session_id}/explain - Explain selected text
- POST /sessions/{session_id}/pages/{page_number}/analyze - Explain a rendered page

Dependencies: paperlens.application.services.conversation_service
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from paperlens.api.deps import get_conversation
from paperlens.api.routers.error_handling import handle_conversation_errors
from paperlens.application.services import ConversationService
from paperlens.models.chat import ChatRequest, ExplainRequest, PageAnalysisRequest
from paperlens.models.conversation import ConversationTurn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["chat"])


@router.post("/{session_id}/chat", response_model=ConversationTurn)
@handle_conversation_errors
async def chat(
    request: ChatRequest,
    conversation: ConversationService = Depends(get_conversation),
) -> ConversationTurn:
    """
    Send chat message to the session's document agent.

    Agent failures are returned as a model turn starting with "Agent Error:".

    Args:
        request: ChatRequest with message and optional image
        conversation: Injected ConversationService

    Returns:
        ConversationTurn: Model reply with cited sources and step trace

    Raises:
        HTTPException(404): Session not found
        HTTPException(409): Another message is being answered
        HTTPException(400): No document indexed
    """
    return await conversation.send_message(request.message, image_base64=request.image_base64)


@router.post("/{session_id}/explain", response_model=ConversationTurn)
@handle_conversation_errors
async def explain(
    request: ExplainRequest,
    conversation: ConversationService = Depends(get_conversation),
) -> ConversationTurn:
    """Explain selected document text at the requested level."""
    return await conversation.explain_selection(request.selection, request.level)


@router.post("/{session_id}/pages/{page_number}/analyze", response_model=ConversationTurn)
@handle_conversation_errors
async def analyze_page(
    page_number: int,
    request: PageAnalysisRequest,
    conversation: ConversationService = Depends(get_conversation),
) -> ConversationTurn:
    """Explain diagrams and charts on a rendered page image."""
    return await conversation.analyze_page(page_number, request.image_base64)
