"""
Chat domain schemas.

Request schemas for chat operations. Replies are returned as the appended
ConversationTurn.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field

from paperlens.models.conversation import ExplanationLevel


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(min_length=1, description="User question or message")
    image_base64: str | None = Field(default=None, description="Optional base64 JPEG")


class ExplainRequest(BaseModel):
    """Request schema for explaining selected text."""

    selection: str = Field(min_length=1)
    level: ExplanationLevel = ExplanationLevel.HIGH_SCHOOL


class PageAnalysisRequest(BaseModel):
    """Request schema for visual analysis of a rendered page."""

    image_base64: str = Field(min_length=1, description="Base64 JPEG of the page")
