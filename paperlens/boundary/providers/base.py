"""
Provider interfaces.

Abstract contracts for the external embedding and generation capabilities.
Core components receive instances of these explicitly, so deterministic fakes
can stand in for the real models.

Dependencies: abc
System role: Seam between core logic and model providers
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from paperlens.models.conversation import ConversationTurn
from paperlens.models.tooling import GenerationResponse, ToolCall, ToolDeclaration


class EmbeddingProvider(ABC):
    """Maps a text to a fixed-length vector."""

    @abstractmethod
    async def embed_one(self, text: str) -> list[float]:
        """
        Embed a single text.

        Raises:
            EmbeddingError: When the provider cannot produce a vector
        """


class ChatSession(ABC):
    """One multi-message exchange with the generation provider."""

    @abstractmethod
    async def send(self, text: str, image_base64: str | None = None) -> GenerationResponse:
        """Send a user turn, optionally carrying a base64 JPEG."""

    @abstractmethod
    async def send_tool_result(self, call: ToolCall, result: str) -> GenerationResponse:
        """Answer a requested tool call with its result text."""


class GenerationProvider(ABC):
    """Creates chat sessions configured with instructions, tools and history."""

    @abstractmethod
    def start_chat(
        self,
        system_instruction: str,
        tools: Sequence[ToolDeclaration],
        history: Sequence[ConversationTurn],
    ) -> ChatSession:
        """Open a chat session seeded with prior turns."""
