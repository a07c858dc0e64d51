"""
Gemini generation provider.

Runs agent chat sessions on ChatGoogleGenerativeAI with bound tool
declarations. Local tools are bound as function declarations; the native
Google Search capability is bound as a built-in tool and its grounding
chunks are read back from the response metadata.

Dependencies: langchain_google_genai, langchain_core.messages
System role: Generation adapter for the agent orchestrator
"""

import logging
from collections.abc import Sequence
from typing import Any

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from paperlens.boundary.providers.base import ChatSession, GenerationProvider
from paperlens.models.citation import GroundingSource
from paperlens.models.conversation import ConversationTurn, TurnRole
from paperlens.models.tooling import (
    GenerationResponse,
    ToolCall,
    ToolDeclaration,
)

logger = logging.getLogger(__name__)

NATIVE_TOOL_BINDINGS = {
    "google_search": {"google_search": {}},
}


def to_langchain_tools(tools: Sequence[ToolDeclaration]) -> list[dict[str, Any]]:
    """
    Convert tool declarations into bind_tools payloads.

    Args:
        tools: Registry declarations

    Returns:
        list[dict]: Function schemas and built-in tool entries
    """
    bound: list[dict[str, Any]] = []
    for declaration in tools:
        if declaration.native:
            binding = NATIVE_TOOL_BINDINGS.get(declaration.name)
            if binding is None:
                logger.warning(f"{__name__}:to_langchain_tools - Unsupported native tool {declaration.name}")
                continue
            bound.append(binding)
            continue
        bound.append({
            "type": "function",
            "function": {
                "name": declaration.name,
                "description": declaration.description,
                "parameters": declaration.parameter_schema,
            },
        })
    return bound


def to_langchain_history(history: Sequence[ConversationTurn]) -> list[BaseMessage]:
    """Map conversation turns to text-only chat messages."""
    messages: list[BaseMessage] = []
    for turn in history:
        if turn.role == TurnRole.USER:
            messages.append(HumanMessage(content=turn.text))
        else:
            messages.append(AIMessage(content=turn.text))
    return messages


def content_text(message: BaseMessage) -> str | None:
    """Extract plain text from string or multi-part message content."""
    content = message.content
    if isinstance(content, str):
        return content or None
    parts = []
    for item in content:
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, dict) and item.get("type") == "text":
            parts.append(item.get("text", ""))
    text = "".join(parts)
    return text or None


def grounding_sources(message: BaseMessage) -> list[GroundingSource]:
    """Read web grounding chunks from Gemini response metadata."""
    metadata = getattr(message, "response_metadata", None) or {}
    grounding = metadata.get("grounding_metadata") or {}
    sources = []
    for chunk in grounding.get("grounding_chunks") or []:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if web and web.get("uri"):
            sources.append(GroundingSource(uri=web["uri"], title=web.get("title") or ""))
    return sources


def to_generation_response(message: AIMessage) -> GenerationResponse:
    """Normalize an AIMessage into the provider-neutral response shape."""
    return GenerationResponse(
        text=content_text(message),
        tool_calls=[
            ToolCall(name=call["name"], args=call.get("args") or {}, id=call.get("id"))
            for call in message.tool_calls
        ],
        grounding_sources=grounding_sources(message),
    )


class LangChainChatSession(ChatSession):
    """Chat session keeping its own message list for a bound chat model."""

    def __init__(self, model: Runnable, messages: list[BaseMessage]) -> None:
        """
        Initialize session.

        Args:
            model: Chat model with tools already bound
            messages: System instruction and prior history
        """
        self._model = model
        self._messages = messages

    @property
    def messages(self) -> list[BaseMessage]:
        """Messages exchanged so far."""
        return list(self._messages)

    async def send(self, text: str, image_base64: str | None = None) -> GenerationResponse:
        """Send a user turn, image part first when present."""
        if image_base64:
            content: str | list = [
                {"type": "image_url", "image_url": f"data:image/jpeg;base64,{image_base64}"},
                {"type": "text", "text": text},
            ]
        else:
            content = text
        return await self._exchange(HumanMessage(content=content))

    async def send_tool_result(self, call: ToolCall, result: str) -> GenerationResponse:
        """Feed back a function result for the given call."""
        return await self._exchange(
            ToolMessage(content=result, tool_call_id=call.id or call.name, name=call.name)
        )

    async def _exchange(self, message: BaseMessage) -> GenerationResponse:
        pending = [*self._messages, message]
        response = await self._model.ainvoke(pending)
        # Only commit the outgoing message once the model answered
        self._messages = [*pending, response]
        return to_generation_response(response)


class GeminiGenerationProvider(GenerationProvider):
    """Gemini chat model factory for agent sessions."""

    def __init__(
        self,
        model_id: str = "gemini-2.5-pro",
        temperature: float = 0.0,
        google_api_key: str | None = None,
    ) -> None:
        """
        Initialize Gemini chat model.

        Args:
            model_id: Gemini model identifier
            temperature: Model temperature (0.0 for deterministic)
            google_api_key: API key, SDK environment lookup when None
        """
        kwargs: dict[str, Any] = {"model": model_id, "temperature": temperature}
        if google_api_key:
            kwargs["google_api_key"] = google_api_key
        self._model = ChatGoogleGenerativeAI(**kwargs)
        self._model_id = model_id

    def start_chat(
        self,
        system_instruction: str,
        tools: Sequence[ToolDeclaration],
        history: Sequence[ConversationTurn],
    ) -> ChatSession:
        """Open a session with tools bound and history replayed."""
        bound_tools = to_langchain_tools(tools)
        model = self._model.bind_tools(bound_tools) if bound_tools else self._model
        messages: list[BaseMessage] = [
            SystemMessage(content=system_instruction),
            *to_langchain_history(history),
        ]
        logger.info(
            f"{__name__}:start_chat - model={self._model_id}, tools={len(bound_tools)}, "
            f"history_len={len(history)}"
        )
        return LangChainChatSession(model, messages)
