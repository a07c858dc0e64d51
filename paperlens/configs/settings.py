"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from paperlens.configs.agent import AgentSettings
from paperlens.configs.base import BaseSettings
from paperlens.configs.indexing import IndexingSettings
from paperlens.configs.tools import ToolSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    google_api_key: str | None = Field(
        default=None,
        description="Google Generative AI API key (falls back to GOOGLE_API_KEY handling in the SDK)",
    )

    # Aggregated settings
    indexing: IndexingSettings = IndexingSettings()
    agent: AgentSettings = AgentSettings()
    tools: ToolSettings = ToolSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from paperlens.configs import get_settings
        settings = get_settings()
    """
    return Settings()
