"""
Agent configuration settings.

Chat model selection and the bounds of the retrieve/generate/tool loop.

Dependencies: pydantic, pydantic_settings
System role: Agent orchestration configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AgentSettings(BaseSettings):
    """Agent loop configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chat_model: str = Field(default="gemini-2.5-pro", description="Gemini chat model for the agent")
    insights_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model for document insights",
    )
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)

    retrieval_top_k: int = Field(default=4, ge=1, description="Chunks injected as grounding context")
    max_tool_rounds: int = Field(default=3, ge=0, description="Tool-call rounds per user message")
    enable_web_search: bool = Field(
        default=True,
        description="Forward the native Google Search tool to the model",
    )
    insights_max_chars: int = Field(
        default=50_000,
        gt=0,
        description="Characters of document text sent for insights analysis",
    )
