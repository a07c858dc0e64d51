"""
Tool configuration settings.

Endpoints and output limits for the locally executed agent tools.

Dependencies: pydantic, pydantic_settings
System role: Agent tool configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ToolSettings(BaseSettings):
    """Agent tool configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    semantic_scholar_url: str = Field(
        default="https://api.semanticscholar.org/graph/v1/paper/search",
        description="Semantic Scholar paper search endpoint",
    )
    search_result_limit: int = Field(default=3, ge=1, le=100)
    abstract_preview_chars: int = Field(default=150, ge=0)
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")
