"""Service orchestrators."""

from .conversation_service import ConversationService
from .insights_service import InsightsAnalyzer

__all__ = [
    "ConversationService",
    "InsightsAnalyzer",
]
