"""
Conversation domain models.

Turns of a document conversation and the agent's per-message result.

Dependencies: pydantic
System role: Conversation data structures
"""

import uuid
from enum import Enum

from pydantic import BaseModel, Field

from paperlens.models.citation import GroundingSource


class TurnRole(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    MODEL = "model"


class ConversationTurn(BaseModel):
    """Single entry of the append-only conversation log."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: TurnRole
    text: str
    image: str | None = Field(default=None, description="Base64 JPEG attached to a user turn")
    cited_sources: list[GroundingSource] = Field(default_factory=list)
    tool_trace: list[str] = Field(default_factory=list, description="Agent step log")
    cited_pages: list[int] = Field(default_factory=list, description="Pages cited as [[Page N]]")
    is_index_summary: bool = Field(
        default=False,
        description="Synthetic first turn written after indexing",
    )


class AgentResponse(BaseModel):
    """Final result of one agent run."""

    text: str
    grounding_sources: list[GroundingSource] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    cited_pages: list[int] = Field(default_factory=list)


class ExplanationLevel(str, Enum):
    """Audience for a selected-text explanation."""

    HIGH_SCHOOL = "High School"
    PHD = "PhD"
