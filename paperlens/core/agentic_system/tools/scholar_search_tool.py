"""
Semantic Scholar agent tool.

Finds related research papers and citation counts for the model.
No matches and network failures are returned as text, never raised.

Dependencies: langchain_core.tools, httpx, paperlens.boundary.scholar
System role: Bibliographic search tool for the document agent
"""

import logging

import httpx
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

from paperlens.boundary.scholar import PaperRecord, SemanticScholarClient

logger = logging.getLogger(__name__)

SCHOLAR_TOOL_NAME = "search_semantic_scholar"
SCHOLAR_STEP_TEMPLATE = 'Searching Semantic Scholar for "{query}"...'
NO_RESULTS = "No papers found."
CONNECTION_ERROR = "Error connecting to Semantic Scholar API."


class ScholarSearchInput(BaseModel):
    """Arguments of the scholarly search tool."""

    query: str = Field(description="Keywords to search for")


def format_paper(paper: PaperRecord, preview_chars: int = 150) -> str:
    """Render one paper as a short text summary."""
    abstract = (paper.abstract or "")[:preview_chars]
    return (
        f"Title: {paper.title} ({paper.year})\n"
        f"Citations: {paper.citation_count}\n"
        f"Abstract: {abstract}...\n"
        f"Link: {paper.url}"
    )


def create_scholar_search_tool(
    client: SemanticScholarClient,
    limit: int = 3,
    preview_chars: int = 150,
) -> BaseTool:
    """
    Create a search tool bound to a Semantic Scholar client.

    Args:
        client: Search client
        limit: Maximum papers per search
        preview_chars: Abstract characters kept per paper

    Returns:
        BaseTool: Async tool named search_semantic_scholar
    """

    @tool(
        SCHOLAR_TOOL_NAME,
        args_schema=ScholarSearchInput,
        description="Search for related research papers, citations, or previous work.",
    )
    async def search_semantic_scholar(query: str) -> str:
        logger.info(f"{__name__}:search_semantic_scholar - START query_len={len(query)}")
        try:
            papers = await client.search(query, limit=limit)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{__name__}:search_semantic_scholar - FAILED: {type(e).__name__}: {e}")
            return CONNECTION_ERROR

        if not papers:
            logger.warning(f"{__name__}:search_semantic_scholar - No results found")
            return NO_RESULTS
        return "\n\n".join(format_paper(p, preview_chars) for p in papers[:limit])

    return search_semantic_scholar
