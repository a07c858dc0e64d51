"""
Exception hierarchy for PaperLens.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PaperLensException(Exception):
    """Base exception for all PaperLens application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class EmbeddingError(PaperLensException):
    """Raised when the embedding provider fails to embed a text."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding error.

        Args:
            message: Error message
            model: Embedding model that failed
            details: Additional context
        """
        details = details or {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class RetrievalError(PaperLensException):
    """Raised when a query cannot be embedded or ranked."""

    pass


class GenerationError(PaperLensException):
    """Raised when the generation provider fails during an agent run."""

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize generation error.

        Args:
            message: Error message
            stage: Loop stage that failed (initial message, tool result)
            details: Additional context
        """
        details = details or {}
        if stage:
            details["stage"] = stage
        super().__init__(message, details)


class SessionNotFoundError(PaperLensException):
    """Raised when a conversation session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class DocumentNotIndexedError(PaperLensException):
    """Raised when a message is sent before the document was indexed."""

    pass


class ConversationBusyError(PaperLensException):
    """Raised when a message arrives while an agent run is still in flight."""

    pass
