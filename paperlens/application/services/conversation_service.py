"""
Conversation service for one document session.

Orchestrates the document lifecycle: indexing into a vector store, insights
analysis, the append-only conversation log and one agent run per message.
Agent failures become a labelled model turn so the log stays consistent.

Dependencies: paperlens.core.rag, paperlens.core.agentic_system,
    paperlens.application.services.insights_service
System role: Conversation orchestration layer
"""

import asyncio
import logging
import uuid

from paperlens.application.services.insights_service import InsightsAnalyzer
from paperlens.boundary.providers.base import EmbeddingProvider, GenerationProvider
from paperlens.configs import Settings, get_settings
from paperlens.core.agentic_system.agent import DocumentAgent
from paperlens.core.agentic_system.tools.registry import ToolRegistry
from paperlens.core.exceptions import (
    ConversationBusyError,
    DocumentNotIndexedError,
    GenerationError,
    RetrievalError,
)
from paperlens.core.rag import PageChunker, VectorStore
from paperlens.models.conversation import ConversationTurn, ExplanationLevel, TurnRole
from paperlens.models.insights import DocumentInsights
from paperlens.observability import bind_session

logger = logging.getLogger(__name__)

INDEX_SUMMARY_TEMPLATE = (
    "I've indexed **{title}** ({chunk_count} chunks). \n\n"
    "I can read charts, search for citations (Semantic Scholar), and do math."
)
EXPLAIN_TEMPLATE = 'Explain this text ({level} level): "{selection}"'
VISUAL_PAGE_TEMPLATE = "Analyze this visual page (Page {page_number}). Explain diagrams or charts found."
AGENT_ERROR_PREFIX = "Agent Error: "


class ConversationService:
    """
    Single-document conversation.

    Coordinates indexing, insights and agent runs. At most one agent run is
    in flight; overlapping sends are rejected rather than queued.
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        generation_provider: GenerationProvider,
        tool_registry: ToolRegistry,
        insights_analyzer: InsightsAnalyzer,
        settings: Settings | None = None,
        session_id: str | None = None,
    ) -> None:
        """
        Initialize conversation service.

        Args:
            embedder: Embedding provider used for indexing and queries
            generation_provider: Chat model provider for the agent
            tool_registry: Tools offered to the agent
            insights_analyzer: Document overview generator
            settings: Application settings (cached settings when None)
            session_id: Session identifier (random when None)
        """
        self.session_id = session_id or uuid.uuid4().hex
        self.settings = settings or get_settings()
        self._embedder = embedder
        self._provider = generation_provider
        self._registry = tool_registry
        self._insights_analyzer = insights_analyzer

        self.file_name: str | None = None
        self.page_count = 0
        self.insights: DocumentInsights | None = None
        self._agent: DocumentAgent | None = None
        self._turns: list[ConversationTurn] = []
        self._lock = asyncio.Lock()

    @property
    def is_indexed(self) -> bool:
        return self._agent is not None

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    @property
    def chunk_count(self) -> int:
        return len(self._agent.vector_store) if self._agent else 0

    @property
    def history(self) -> list[ConversationTurn]:
        """Conversation turns in order, index-summary turn included."""
        return list(self._turns)

    async def index_document(
        self,
        file_name: str,
        paged_text: str,
        page_count: int,
    ) -> DocumentInsights:
        """
        Index a document and start a fresh conversation.

        Flow:
        1. Chunk and embed the page-delimited text
        2. Analyze insights (failures yield placeholder insights)
        3. Reset history to the index-summary turn

        Args:
            file_name: Source file name
            paged_text: Text with "--- Page N ---" markers
            page_count: Number of pages in the source

        Returns:
            DocumentInsights: Insights for the document

        Raises:
            ConversationBusyError: If an agent run is in flight
        """
        if self.is_busy:
            raise ConversationBusyError(
                "Cannot re-index while a message is being answered",
                details={"session_id": self.session_id},
            )

        with bind_session(self.session_id):
            return await self._index(file_name, paged_text, page_count)

    async def _index(self, file_name: str, paged_text: str, page_count: int) -> DocumentInsights:
        logger.info(
            f"{__name__}:index_document - START file={file_name}, "
            f"pages={page_count}, chars={len(paged_text)}"
        )
        indexing = self.settings.indexing
        store = await VectorStore.build(
            paged_text,
            self._embedder,
            chunker=PageChunker(indexing.chunk_size, indexing.chunk_overlap),
            min_chunk_chars=indexing.min_chunk_chars,
        )
        insights = await self._insights_analyzer.analyze(paged_text)

        self.file_name = file_name
        self.page_count = page_count
        self.insights = insights
        self._agent = DocumentAgent(
            vector_store=store,
            generation_provider=self._provider,
            tool_registry=self._registry,
            retrieval_top_k=self.settings.agent.retrieval_top_k,
            max_tool_rounds=self.settings.agent.max_tool_rounds,
        )
        self._turns = [
            ConversationTurn(
                role=TurnRole.MODEL,
                text=INDEX_SUMMARY_TEMPLATE.format(title=insights.title, chunk_count=len(store)),
                is_index_summary=True,
            )
        ]

        logger.info(
            f"{__name__}:index_document - END chunks={len(store)}, title={insights.title!r}"
        )
        return insights

    async def send_message(self, text: str, image_base64: str | None = None) -> ConversationTurn:
        """
        Answer one user message through the agent.

        The user turn is appended first; the model turn (answer or labelled
        agent error) is appended and returned.

        Args:
            text: User message
            image_base64: Optional base64 JPEG attached to the message

        Returns:
            ConversationTurn: The appended model turn

        Raises:
            DocumentNotIndexedError: If no document was indexed yet
            ConversationBusyError: If another run is in flight
        """
        if self._agent is None:
            raise DocumentNotIndexedError(
                "No document indexed for this session",
                details={"session_id": self.session_id},
            )
        if self.is_busy:
            raise ConversationBusyError(
                "A message is already being answered",
                details={"session_id": self.session_id},
            )

        async with self._lock:
            with bind_session(self.session_id):
                return await self._answer(self._agent, text, image_base64)

    async def _answer(
        self,
        agent: DocumentAgent,
        text: str,
        image_base64: str | None,
    ) -> ConversationTurn:
        prior_turns = list(self._turns)
        self._turns.append(ConversationTurn(role=TurnRole.USER, text=text, image=image_base64))

        try:
            response = await agent.run(text, prior_turns, image_base64)
            model_turn = ConversationTurn(
                role=TurnRole.MODEL,
                text=response.text,
                cited_sources=response.grounding_sources,
                tool_trace=response.steps,
                cited_pages=response.cited_pages,
            )
        except (RetrievalError, GenerationError) as e:
            logger.error(f"{__name__}:send_message - Agent FAILED: {type(e).__name__}: {e}")
            model_turn = ConversationTurn(role=TurnRole.MODEL, text=AGENT_ERROR_PREFIX + e.message)

        self._turns.append(model_turn)
        return model_turn

    async def explain_selection(
        self,
        selection: str,
        level: ExplanationLevel = ExplanationLevel.HIGH_SCHOOL,
    ) -> ConversationTurn:
        """Ask the agent to explain selected text for an audience level."""
        level = ExplanationLevel(level)
        return await self.send_message(EXPLAIN_TEMPLATE.format(level=level.value, selection=selection))

    async def analyze_page(self, page_number: int, image_base64: str) -> ConversationTurn:
        """
        Ask the agent to explain the visuals of a rendered page.

        Raises:
            ValueError: If the page number is outside the document
        """
        if page_number < 1 or (self.page_count and page_number > self.page_count):
            raise ValueError(f"Page {page_number} is outside 1..{self.page_count}")
        return await self.send_message(
            VISUAL_PAGE_TEMPLATE.format(page_number=page_number),
            image_base64=image_base64,
        )

    def export_markdown(self) -> str:
        """
        Render insights and the conversation as Markdown.

        Raises:
            DocumentNotIndexedError: If no document was indexed yet
        """
        if self.insights is None:
            raise DocumentNotIndexedError(
                "No document indexed for this session",
                details={"session_id": self.session_id},
            )

        header = (
            f"# {self.insights.title} - Analysis\n\n"
            f"## Summary\n{self.insights.summary}\n\n"
            "## Chat History\n\n"
        )
        return header + "\n\n".join(
            f"### {turn.role.value.upper()}\n{turn.text}" for turn in self._turns
        )
