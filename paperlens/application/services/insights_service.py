"""
Document insights analyzer.

Extracts title, summary, outline, key points and concepts from a document
with a single structured-output call. Analysis is best-effort: any failure
yields the placeholder insights and indexing proceeds.

Dependencies: langchain_core, langchain_google_genai
System role: Document overview generation
"""

import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from paperlens.models.insights import DocumentInsights

logger = logging.getLogger(__name__)

INSIGHTS_PROMPT = ChatPromptTemplate.from_messages([
    (
        "system",
        "You analyze academic papers and technical documents. "
        "Return the document title, a short summary, a section outline, "
        "key points and the central concepts with the concepts they relate to.",
    ),
    ("human", "Analyze this paper. Extract title, summary, outline, key points, and concepts.\nTEXT: {text}"),
])


class InsightsAnalyzer:
    """Structured overview of a document from its leading text."""

    def __init__(
        self,
        model: BaseChatModel | None = None,
        model_id: str = "gemini-2.5-flash",
        max_chars: int = 50_000,
        google_api_key: str | None = None,
    ) -> None:
        """
        Initialize insights analyzer.

        Args:
            model: Chat model to use (Gemini created from model_id when None)
            model_id: Gemini model identifier
            max_chars: Leading characters of the document sent for analysis
            google_api_key: Optional API key override
        """
        if model is None:
            kwargs = {"model": model_id, "temperature": 0}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            model = ChatGoogleGenerativeAI(**kwargs)

        self.max_chars = max_chars
        self._chain = INSIGHTS_PROMPT | model.with_structured_output(DocumentInsights)

    async def analyze(self, full_text: str) -> DocumentInsights:
        """
        Analyze a document.

        Args:
            full_text: Page-delimited document text

        Returns:
            DocumentInsights: Extracted insights, or the failure placeholder
        """
        excerpt = full_text[: self.max_chars]
        logger.info(f"{__name__}:analyze - START chars={len(excerpt)} of {len(full_text)}")
        try:
            result = await self._chain.ainvoke({"text": excerpt})
            if isinstance(result, dict):
                result = DocumentInsights.model_validate(result)
        except Exception as e:
            logger.error(f"{__name__}:analyze - FAILED: {type(e).__name__}: {e}")
            return DocumentInsights.failed()

        if not isinstance(result, DocumentInsights):
            logger.error(f"{__name__}:analyze - Unparseable output: {type(result).__name__}")
            return DocumentInsights.failed()

        logger.info(
            f"{__name__}:analyze - END title={result.title!r}, "
            f"key_points={len(result.key_points)}, concepts={len(result.concepts)}"
        )
        return result
