"""
Dependency injection container.

Factory functions for FastAPI dependencies: cached providers, the in-memory
session registry and per-request conversation lookup.

Dependencies: paperlens.configs, paperlens.application, paperlens.boundary
System role: DI container for service injection
"""

import logging

from fastapi import Depends, HTTPException

from paperlens.application.services import ConversationService, InsightsAnalyzer
from paperlens.boundary.providers import EmbeddingProvider, GenerationProvider
from paperlens.configs import Settings, get_settings
from paperlens.core.agentic_system.tools import ToolRegistry, create_default_registry
from paperlens.core.exceptions import SessionNotFoundError

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached provider instances shared by all sessions."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._embedder = None
        self._generation_provider = None
        self._tool_registry = None
        self._insights_analyzer = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def embedder(self) -> EmbeddingProvider:
        """Get cached embedding provider."""
        if self._embedder is None:
            from paperlens.boundary.providers.gemini_embeddings import GeminiEmbeddingProvider

            indexing = self.settings.indexing
            self._embedder = GeminiEmbeddingProvider(
                model=indexing.embedding_model,
                output_dimensionality=indexing.embedding_dimension,
                google_api_key=self.settings.google_api_key,
            )
        return self._embedder

    @property
    def generation_provider(self) -> GenerationProvider:
        """Get cached chat model provider."""
        if self._generation_provider is None:
            from paperlens.boundary.providers.gemini_chat import GeminiGenerationProvider

            self._generation_provider = GeminiGenerationProvider(
                model_id=self.settings.agent.chat_model,
                temperature=self.settings.agent.temperature,
                google_api_key=self.settings.google_api_key,
            )
        return self._generation_provider

    @property
    def tool_registry(self) -> ToolRegistry:
        """Get cached tool registry."""
        if self._tool_registry is None:
            self._tool_registry = create_default_registry(
                settings=self.settings.tools,
                enable_web_search=self.settings.agent.enable_web_search,
            )
        return self._tool_registry

    @property
    def insights_analyzer(self) -> InsightsAnalyzer:
        """Get cached insights analyzer."""
        if self._insights_analyzer is None:
            self._insights_analyzer = InsightsAnalyzer(
                model_id=self.settings.agent.insights_model,
                max_chars=self.settings.agent.insights_max_chars,
                google_api_key=self.settings.google_api_key,
            )
        return self._insights_analyzer

    def create_conversation(self) -> ConversationService:
        """Create an empty conversation wired to the cached providers."""
        return ConversationService(
            embedder=self.embedder,
            generation_provider=self.generation_provider,
            tool_registry=self.tool_registry,
            insights_analyzer=self.insights_analyzer,
            settings=self.settings,
        )

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embedder = None
        self._generation_provider = None
        self._tool_registry = None
        self._insights_analyzer = None


class SessionRegistry:
    """In-memory conversations keyed by session id."""

    def __init__(self) -> None:
        self._sessions: dict[str, ConversationService] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def add(self, conversation: ConversationService) -> None:
        self._sessions[conversation.session_id] = conversation
        logger.info(f"{__name__}:add - Registered session {conversation.session_id}")

    def get(self, session_id: str) -> ConversationService:
        """
        Look up a conversation.

        Raises:
            SessionNotFoundError: If the id is unknown
        """
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def clear(self) -> None:
        self._sessions.clear()


# Global singletons
_service_cache = ServiceCache()
_session_registry = SessionRegistry()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_session_registry() -> SessionRegistry:
    """Get session registry singleton."""
    return _session_registry


def get_conversation(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> ConversationService:
    """
    Resolve the conversation addressed by the path.

    Args:
        session_id: Session id from the route path
        registry: Injected SessionRegistry

    Returns:
        ConversationService: The session's conversation

    Raises:
        HTTPException(404): Session not found
    """
    try:
        return registry.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
