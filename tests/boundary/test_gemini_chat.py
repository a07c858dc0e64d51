"""
Tests for the Gemini generation adapter.

Covers tool binding payloads, history mapping, response normalization
(text, tool calls, web grounding) and chat session bookkeeping.

Dependencies: pytest, unittest.mock, langchain_core
System role: Generation adapter verification
"""

from unittest.mock import MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.runnables import RunnableLambda

from paperlens.boundary.providers.gemini_chat import (
    GeminiGenerationProvider,
    LangChainChatSession,
    content_text,
    grounding_sources,
    to_generation_response,
    to_langchain_history,
    to_langchain_tools,
)
from paperlens.models.conversation import ConversationTurn, TurnRole
from paperlens.models.tooling import ToolCall, ToolDeclaration

CALCULATOR = ToolDeclaration(
    name="calculate_math",
    description="Exact math",
    parameter_schema={"type": "object", "properties": {"expression": {"type": "string"}}},
)
WEB_SEARCH = ToolDeclaration(name="google_search", description="Web", native=True)


class TestConversions:
    """Test pure conversion helpers."""

    def test_tools_become_function_and_native_bindings(self) -> None:
        bound = to_langchain_tools([CALCULATOR, WEB_SEARCH])

        assert bound[0] == {
            "type": "function",
            "function": {
                "name": "calculate_math",
                "description": "Exact math",
                "parameters": CALCULATOR.parameter_schema,
            },
        }
        assert bound[1] == {"google_search": {}}

    def test_unsupported_native_tool_is_skipped(self) -> None:
        assert to_langchain_tools([ToolDeclaration(name="code_execution", native=True)]) == []

    def test_history_roles(self) -> None:
        messages = to_langchain_history([
            ConversationTurn(role=TurnRole.USER, text="question"),
            ConversationTurn(role=TurnRole.MODEL, text="answer"),
        ])

        assert isinstance(messages[0], HumanMessage)
        assert isinstance(messages[1], AIMessage)
        assert [m.content for m in messages] == ["question", "answer"]

    def test_content_text_joins_text_parts(self) -> None:
        message = AIMessage(content=[{"type": "text", "text": "Hello "}, "world"])

        assert content_text(message) == "Hello world"
        assert content_text(AIMessage(content="")) is None

    def test_grounding_sources_from_metadata(self) -> None:
        message = AIMessage(
            content="news",
            response_metadata={
                "grounding_metadata": {
                    "grounding_chunks": [
                        {"web": {"uri": "https://a.example", "title": "A"}},
                        {"web": {"uri": ""}},
                        {"retrieved_context": {}},
                    ]
                }
            },
        )

        sources = grounding_sources(message)

        assert [(s.uri, s.title) for s in sources] == [("https://a.example", "A")]

    def test_tool_calls_are_normalized(self) -> None:
        message = AIMessage(
            content="",
            tool_calls=[{"name": "calculate_math", "args": {"expression": "1+1"}, "id": "c1"}],
        )

        response = to_generation_response(message)

        assert response.text is None
        assert response.tool_calls == [ToolCall(name="calculate_math", args={"expression": "1+1"}, id="c1")]
        assert response.grounding_sources == []


class TestLangChainChatSession:
    """Test message bookkeeping of a chat session."""

    @pytest.mark.asyncio
    async def test_send_with_image_puts_image_first(self) -> None:
        seen = []

        def model(messages):
            seen.append(messages)
            return AIMessage(content="A bar chart.")

        session = LangChainChatSession(RunnableLambda(model), [SystemMessage(content="sys")])

        response = await session.send("Explain", image_base64="QUJD")

        content = seen[0][-1].content
        assert content[0] == {"type": "image_url", "image_url": "data:image/jpeg;base64,QUJD"}
        assert content[1] == {"type": "text", "text": "Explain"}
        assert response.text == "A bar chart."
        assert len(session.messages) == 3

    @pytest.mark.asyncio
    async def test_tool_result_references_call_id(self) -> None:
        session = LangChainChatSession(
            RunnableLambda(lambda messages: AIMessage(content="4")),
            [SystemMessage(content="sys")],
        )

        await session.send_tool_result(ToolCall(name="calculate_math", id="c9"), "Calculated Result: 4")

        tool_message = session.messages[1]
        assert isinstance(tool_message, ToolMessage)
        assert tool_message.tool_call_id == "c9"
        assert tool_message.content == "Calculated Result: 4"

    @pytest.mark.asyncio
    async def test_failed_exchange_is_not_committed(self) -> None:
        def model(messages):
            raise RuntimeError("unavailable")

        session = LangChainChatSession(RunnableLambda(model), [SystemMessage(content="sys")])

        with pytest.raises(RuntimeError):
            await session.send("hello")

        assert len(session.messages) == 1


class TestGeminiGenerationProvider:
    """Test session creation with a patched chat model."""

    @patch("paperlens.boundary.providers.gemini_chat.ChatGoogleGenerativeAI")
    def test_start_chat_binds_tools_and_history(self, mock_chat_cls: MagicMock) -> None:
        provider = GeminiGenerationProvider(model_id="gemini-test", google_api_key="key")
        history = [ConversationTurn(role=TurnRole.USER, text="earlier")]

        session = provider.start_chat("system text", [CALCULATOR, WEB_SEARCH], history)

        mock_chat_cls.assert_called_once_with(model="gemini-test", temperature=0.0, google_api_key="key")
        mock_chat_cls.return_value.bind_tools.assert_called_once_with(
            to_langchain_tools([CALCULATOR, WEB_SEARCH])
        )
        assert isinstance(session.messages[0], SystemMessage)
        assert session.messages[0].content == "system text"
        assert session.messages[1].content == "earlier"

    @patch("paperlens.boundary.providers.gemini_chat.ChatGoogleGenerativeAI")
    def test_no_tools_skips_binding(self, mock_chat_cls: MagicMock) -> None:
        provider = GeminiGenerationProvider()

        provider.start_chat("system text", [], [])

        mock_chat_cls.return_value.bind_tools.assert_not_called()
