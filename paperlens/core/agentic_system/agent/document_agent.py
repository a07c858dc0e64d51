"""
Document agent implementation.

Runs one user message through the bounded agent loop:
RETRIEVING -> GENERATING -> (TOOL_PENDING <-> GENERATING)* -> DONE.

Retrieved chunks ground the system instruction; the model may request
tools, of which only the first call per round is executed, for at most
``max_tool_rounds`` rounds. Reaching the bound is not an error: the latest
model text is returned.

Dependencies: paperlens.core.rag, paperlens.core.agentic_system.tools,
    paperlens.boundary.providers
System role: Agent orchestration
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from paperlens.boundary.providers.base import ChatSession, GenerationProvider
from paperlens.core.agentic_system.agent.document_agent_prompt import (
    build_system_instruction,
    format_context,
)
from paperlens.core.agentic_system.tools.registry import ToolRegistry
from paperlens.core.citations import extract_page_citations
from paperlens.core.exceptions import GenerationError
from paperlens.core.rag.vector_store import VectorStore
from paperlens.models.chunk import Chunk
from paperlens.models.conversation import AgentResponse, ConversationTurn
from paperlens.models.tooling import GenerationResponse, ToolCall

logger = logging.getLogger(__name__)

RETRIEVAL_STEP = "Retrieving relevant pages..."
VISUAL_STEP = "Analyzing visual content..."
EMPTY_RESPONSE = "No response generated."


class AgentState(str, Enum):
    """Phases of one agent run."""

    RETRIEVING = "retrieving"
    GENERATING = "generating"
    TOOL_PENDING = "tool_pending"
    DONE = "done"


@dataclass
class AgentRunState:
    """Ephemeral state of a single agent run."""

    query: str
    image: str | None = None
    conversation_history: list[ConversationTurn] = field(default_factory=list)
    retrieved_chunks: list[Chunk] = field(default_factory=list)
    step_log: list[str] = field(default_factory=list)
    tool_calls_used: int = 0
    state: AgentState = AgentState.RETRIEVING

    def transition(self, state: AgentState) -> None:
        logger.debug(f"{__name__}:transition - {self.state.value} -> {state.value}")
        self.state = state


class DocumentAgent:
    """
    Retrieval-grounded, tool-using agent over one indexed document.

    Providers, store and registry are injected so tests can substitute
    deterministic fakes.
    """

    def __init__(
        self,
        vector_store: VectorStore,
        generation_provider: GenerationProvider,
        tool_registry: ToolRegistry,
        retrieval_top_k: int = 4,
        max_tool_rounds: int = 3,
    ) -> None:
        """
        Initialize document agent.

        Args:
            vector_store: Built store for the document
            generation_provider: Chat model provider
            tool_registry: Tools offered to the model
            retrieval_top_k: Chunks placed in the grounding context
            max_tool_rounds: Tool-call rounds allowed per message
        """
        self._vector_store = vector_store
        self._provider = generation_provider
        self._registry = tool_registry
        self._retrieval_top_k = retrieval_top_k
        self._max_tool_rounds = max_tool_rounds

    @property
    def vector_store(self) -> VectorStore:
        return self._vector_store

    async def run(
        self,
        query: str,
        history: Sequence[ConversationTurn] = (),
        image_base64: str | None = None,
    ) -> AgentResponse:
        """
        Answer one user message.

        Args:
            query: User message text
            history: Prior conversation turns; index-summary turns are dropped
            image_base64: Optional base64 JPEG for visual analysis

        Returns:
            AgentResponse: Final text, grounding sources, step log, cited pages

        Raises:
            RetrievalError: When the query cannot be embedded
            GenerationError: When the generation provider fails
        """
        run = AgentRunState(
            query=query,
            image=image_base64,
            conversation_history=[turn for turn in history if not turn.is_index_summary],
        )
        logger.info(
            f"{__name__}:run - START query_len={len(query)}, "
            f"history_len={len(run.conversation_history)}, has_image={image_base64 is not None}"
        )

        # RETRIEVING
        run.step_log.append(RETRIEVAL_STEP)
        run.retrieved_chunks = await self._vector_store.retrieve(query, top_k=self._retrieval_top_k)
        declarations = self._registry.declarations
        system_instruction = build_system_instruction(
            format_context(run.retrieved_chunks), declarations
        )

        # GENERATING
        run.transition(AgentState.GENERATING)
        if image_base64:
            run.step_log.append(VISUAL_STEP)
        try:
            session = self._provider.start_chat(
                system_instruction, declarations, run.conversation_history
            )
            response = await session.send(query, image_base64)
        except Exception as e:
            logger.error(f"{__name__}:run - Generation FAILED: {type(e).__name__}: {e}")
            raise GenerationError(f"Generation failed: {e}", stage="message") from e

        response = await self._tool_loop(run, session, response)

        run.transition(AgentState.DONE)
        text = response.text or EMPTY_RESPONSE
        logger.info(
            f"{__name__}:run - END tool_rounds={run.tool_calls_used}, "
            f"answer_len={len(text)}, sources={len(response.grounding_sources)}"
        )
        return AgentResponse(
            text=text,
            grounding_sources=response.grounding_sources,
            steps=run.step_log,
            cited_pages=extract_page_citations(text),
        )

    async def _tool_loop(
        self,
        run: AgentRunState,
        session: ChatSession,
        response: GenerationResponse,
    ) -> GenerationResponse:
        while response.tool_calls:
            if run.tool_calls_used >= self._max_tool_rounds:
                logger.info(
                    f"{__name__}:_tool_loop - Tool round limit {self._max_tool_rounds} reached, "
                    "using latest response"
                )
                break

            run.transition(AgentState.TOOL_PENDING)
            call: ToolCall = response.tool_calls[0]
            if len(response.tool_calls) > 1:
                logger.info(
                    f"{__name__}:_tool_loop - Executing first of {len(response.tool_calls)} "
                    "requested calls"
                )
            run.step_log.append(self._registry.describe_call(call.name, call.args))
            result = await self._registry.invoke(call.name, call.args)
            run.tool_calls_used += 1

            run.transition(AgentState.GENERATING)
            try:
                response = await session.send_tool_result(call, result.result_text)
            except Exception as e:
                logger.error(f"{__name__}:_tool_loop - Generation FAILED: {type(e).__name__}: {e}")
                raise GenerationError(
                    f"Generation failed: {e}",
                    stage="tool_result",
                    details={"tool": call.name},
                ) from e
        return response
