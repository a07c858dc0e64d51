"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic embedding and generation fakes, tool registries,
sample documents and settings
Dependencies: pytest, paperlens
System role: Test infrastructure and fixture management
"""

import asyncio
from collections.abc import Callable, Sequence

import pytest

from paperlens.boundary.providers.base import ChatSession, EmbeddingProvider, GenerationProvider
from paperlens.configs import Settings
from paperlens.core.agentic_system.tools.calculator_tool import (
    CALCULATOR_STEP_TEMPLATE,
    create_calculator_tool,
)
from paperlens.core.agentic_system.tools.registry import ToolRegistry
from paperlens.core.exceptions import EmbeddingError
from paperlens.core.rag import format_paged_text
from paperlens.models.conversation import ConversationTurn
from paperlens.models.tooling import GenerationResponse, ToolCall, ToolDeclaration

VOCABULARY = ("transformer", "attention", "convolution", "image", "dataset", "accuracy")


class KeywordEmbedder(EmbeddingProvider):
    """Bag-of-keywords embedder; texts sharing keywords are similar."""

    def __init__(self, vocabulary: Sequence[str] = VOCABULARY, fail_on: str | None = None):
        self.vocabulary = tuple(vocabulary)
        self.fail_on = fail_on
        self.calls: list[str] = []

    async def embed_one(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on and self.fail_on in text:
            raise EmbeddingError("embedding backend unavailable", model="fake")
        lowered = text.lower()
        # Constant last component keeps every vector non-zero
        return [float(lowered.count(word)) for word in self.vocabulary] + [0.01]


class ScriptedChatSession(ChatSession):
    """Chat session replaying queued responses and recording what was sent."""

    def __init__(self, responder: Callable[["ScriptedChatSession"], GenerationResponse]):
        self._responder = responder
        self.sent: list[tuple[str, str | None]] = []
        self.tool_results: list[tuple[ToolCall, str]] = []
        self.release: asyncio.Event | None = None

    async def send(self, text: str, image_base64: str | None = None) -> GenerationResponse:
        self.sent.append((text, image_base64))
        if self.release is not None:
            await self.release.wait()
        return self._responder(self)

    async def send_tool_result(self, call: ToolCall, result: str) -> GenerationResponse:
        self.tool_results.append((call, result))
        return self._responder(self)


class ScriptedGenerationProvider(GenerationProvider):
    """
    Generation fake.

    Responses come from a list (consumed in order, the last one repeats) or
    from a callable receiving the session.
    """

    def __init__(
        self,
        responses: Sequence[GenerationResponse] | None = None,
        responder: Callable[[ScriptedChatSession], GenerationResponse] | None = None,
    ):
        self._responses = list(responses or [GenerationResponse(text="ok")])
        self._responder = responder
        self.release: asyncio.Event | None = None
        self.system_instructions: list[str] = []
        self.tools: list[list[ToolDeclaration]] = []
        self.histories: list[list[ConversationTurn]] = []
        self.sessions: list[ScriptedChatSession] = []

    def _next_response(self, session: ScriptedChatSession) -> GenerationResponse:
        if self._responder is not None:
            return self._responder(session)
        index = len(session.sent) + len(session.tool_results) - 1
        return self._responses[min(index, len(self._responses) - 1)]

    def start_chat(
        self,
        system_instruction: str,
        tools: Sequence[ToolDeclaration],
        history: Sequence[ConversationTurn],
    ) -> ChatSession:
        self.system_instructions.append(system_instruction)
        self.tools.append(list(tools))
        self.histories.append(list(history))
        session = ScriptedChatSession(self._next_response)
        session.release = self.release
        self.sessions.append(session)
        return session


@pytest.fixture
def embedder() -> KeywordEmbedder:
    """Provide deterministic keyword embedder."""
    return KeywordEmbedder()


@pytest.fixture
def calculator_registry() -> ToolRegistry:
    """Provide registry with only the calculator tool."""
    registry = ToolRegistry()
    registry.register(create_calculator_tool(), step_template=CALCULATOR_STEP_TEMPLATE)
    return registry


@pytest.fixture
def settings() -> Settings:
    """Provide settings with defaults."""
    return Settings()


@pytest.fixture
def two_page_text() -> str:
    """Two-page document: transformers on page 1, convolutions on page 2."""
    return format_paged_text([
        (1, "The transformer architecture relies entirely on attention. "
            "Self attention relates every token to every other token in the sequence."),
        (2, "Convolution layers slide small filters over the image. "
            "A convolution network reached high accuracy on the image dataset."),
    ])


@pytest.fixture
def make_provider() -> Callable[..., ScriptedGenerationProvider]:
    """Provide factory for scripted generation providers."""
    return ScriptedGenerationProvider


@pytest.fixture
def make_embedder() -> Callable[..., KeywordEmbedder]:
    """Provide factory for keyword embedders with custom failure modes."""
    return KeywordEmbedder
