"""
Core business logic module.

Contains the RAG memory, the agentic system, and the exception hierarchy.
"""

from paperlens.core.exceptions import (
    ConversationBusyError,
    DocumentNotIndexedError,
    EmbeddingError,
    GenerationError,
    PaperLensException,
    RetrievalError,
    SessionNotFoundError,
)

__all__ = [
    "PaperLensException",
    "EmbeddingError",
    "RetrievalError",
    "GenerationError",
    "SessionNotFoundError",
    "DocumentNotIndexedError",
    "ConversationBusyError",
]
