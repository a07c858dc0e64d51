"""Embedding and generation provider interfaces and Gemini adapters."""

from paperlens.boundary.providers.base import (
    ChatSession,
    EmbeddingProvider,
    GenerationProvider,
)

__all__ = ["ChatSession", "EmbeddingProvider", "GenerationProvider"]
