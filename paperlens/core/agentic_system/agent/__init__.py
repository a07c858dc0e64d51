from paperlens.core.agentic_system.agent.document_agent import (
    AgentRunState,
    AgentState,
    DocumentAgent,
)

__all__ = ["AgentRunState", "AgentState", "DocumentAgent"]
