"""
Session domain schemas.

Request/response schemas for document session operations.

Dependencies: pydantic
System role: Session API contracts
"""

from pydantic import BaseModel, Field

from paperlens.models.conversation import ConversationTurn
from paperlens.models.insights import DocumentInsights


class PageText(BaseModel):
    """Extracted text of one page."""

    page_number: int = Field(ge=1)
    text: str = ""


class CreateSessionRequest(BaseModel):
    """Request schema for indexing a document into a new session."""

    file_name: str = Field(min_length=1, description="Source file name")
    pages: list[PageText] = Field(min_length=1, description="Extracted pages in order")


class SessionResponse(BaseModel):
    """Response schema for an indexed session."""

    session_id: str
    file_name: str
    page_count: int
    chunk_count: int
    insights: DocumentInsights


class MessagesResponse(BaseModel):
    """Conversation log of a session."""

    messages: list[ConversationTurn]
    total: int = Field(description="Total number of turns")
