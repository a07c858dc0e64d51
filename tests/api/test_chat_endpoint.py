"""
Test suite for chat API endpoints.

Tests POST /sessions/{id}/chat, /explain and /pages/{n}/analyze with
FastAPI TestClient. Covers replies, error turns and status code mapping.

System role: Verification of chat HTTP API endpoints
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from paperlens.api.deps import SessionRegistry, get_session_registry
from paperlens.api.routers import chat_router
from paperlens.application.services import ConversationService
from paperlens.core.exceptions import ConversationBusyError
from paperlens.models.insights import DocumentInsights
from paperlens.models.tooling import GenerationResponse, ToolCall


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def provider(make_provider):
    return make_provider([
        GenerationResponse(tool_calls=[ToolCall(name="calculate_math", args={"expression": "6*7"})]),
        GenerationResponse(text="The answer is 42 [[Page 1]]."),
    ])


@pytest.fixture
def conversation(embedder, provider, calculator_registry, settings) -> ConversationService:
    analyzer = MagicMock()
    analyzer.analyze = AsyncMock(return_value=DocumentInsights(title="Doc"))
    return ConversationService(
        embedder=embedder,
        generation_provider=provider,
        tool_registry=calculator_registry,
        insights_analyzer=analyzer,
        settings=settings,
        session_id="s1",
    )


@pytest.fixture
async def indexed(conversation, registry, two_page_text) -> ConversationService:
    await conversation.index_document("doc.pdf", two_page_text, page_count=2)
    registry.add(conversation)
    return conversation


@pytest.fixture
def app(registry: SessionRegistry) -> FastAPI:
    """Create FastAPI test application with chat router."""
    app = FastAPI()
    app.include_router(chat_router)
    app.dependency_overrides[get_session_registry] = lambda: registry
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)


class TestChatEndpoint:
    """Test POST /sessions/{id}/chat."""

    def test_chat_returns_model_turn(self, client: TestClient, indexed) -> None:
        response = client.post("/sessions/s1/chat", json={"message": "What is six times seven?"})

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "model"
        assert data["text"] == "The answer is 42 [[Page 1]]."
        assert data["cited_pages"] == [1]
        assert data["tool_trace"] == ["Retrieving relevant pages...", "Calculating 6*7..."]

    def test_empty_message_rejected(self, client: TestClient, indexed) -> None:
        assert client.post("/sessions/s1/chat", json={"message": ""}).status_code == 422

    def test_unknown_session_returns_404(self, client: TestClient) -> None:
        response = client.post("/sessions/nope/chat", json={"message": "hello"})

        assert response.status_code == 404
        assert "nope" in response.json()["detail"]

    def test_not_indexed_returns_400(self, client: TestClient, conversation, registry) -> None:
        registry.add(conversation)

        response = client.post("/sessions/s1/chat", json={"message": "hello"})

        assert response.status_code == 400

    def test_busy_returns_409(self, client: TestClient, registry) -> None:
        busy = MagicMock(spec=ConversationService)
        busy.session_id = "busy"
        busy.send_message = AsyncMock(side_effect=ConversationBusyError("A message is already being answered"))
        registry.add(busy)

        response = client.post("/sessions/busy/chat", json={"message": "hello"})

        assert response.status_code == 409
        assert response.json()["detail"] == "A message is already being answered"


class TestExplainAndAnalyze:
    """Test POST /explain and /pages/{n}/analyze."""

    def test_explain_uses_level(self, client: TestClient, indexed, provider) -> None:
        response = client.post(
            "/sessions/s1/explain",
            json={"selection": "scaled dot-product attention", "level": "High School"},
        )

        assert response.status_code == 200
        assert provider.sessions[0].sent[0][0] == (
            'Explain this text (High School level): "scaled dot-product attention"'
        )

    def test_explain_rejects_unknown_level(self, client: TestClient, indexed) -> None:
        response = client.post("/sessions/s1/explain", json={"selection": "x", "level": "Toddler"})

        assert response.status_code == 422

    def test_analyze_page(self, client: TestClient, indexed, provider) -> None:
        response = client.post("/sessions/s1/pages/1/analyze", json={"image_base64": "SU1H"})

        assert response.status_code == 200
        assert provider.sessions[0].sent[0] == (
            "Analyze this visual page (Page 1). Explain diagrams or charts found.",
            "SU1H",
        )

    def test_analyze_page_out_of_range_returns_400(self, client: TestClient, indexed) -> None:
        response = client.post("/sessions/s1/pages/9/analyze", json={"image_base64": "SU1H"})

        assert response.status_code == 400
