"""
Semantic Scholar paper search client.

Thin async wrapper over the Graph API paper search endpoint.

Dependencies: httpx, pydantic
System role: External bibliographic search for the agent's search tool
"""

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

SEARCH_FIELDS = "title,abstract,year,citationCount,url"


class PaperRecord(BaseModel):
    """One paper returned by the search endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    abstract: str | None = None
    year: int | None = None
    citation_count: int | None = Field(default=None, alias="citationCount")
    url: str | None = None


class SemanticScholarClient:
    """Async client for Semantic Scholar paper search."""

    def __init__(
        self,
        base_url: str = "https://api.semanticscholar.org/graph/v1/paper/search",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            base_url: Paper search endpoint
            timeout: Request timeout in seconds
            client: Optional shared AsyncClient (tests inject a mock transport)
        """
        self.base_url = base_url
        self.timeout = timeout
        self._client = client

    async def search(self, query: str, limit: int = 3) -> list[PaperRecord]:
        """
        Search papers by free text.

        Args:
            query: Free-text query, URL-encoded by httpx
            limit: Maximum number of records

        Returns:
            list[PaperRecord]: Matching papers, possibly empty

        Raises:
            httpx.HTTPError: On network failure or non-2xx status
            ValueError: When the body is not the expected JSON shape
        """
        params = {"query": query, "limit": limit, "fields": SEARCH_FIELDS}
        logger.info(f"{__name__}:search - query_len={len(query)}, limit={limit}")

        if self._client is not None:
            response = await self._client.get(self.base_url, params=params, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.base_url, params=params)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Unexpected search response shape")
        records = [PaperRecord.model_validate(item) for item in payload.get("data") or []]
        logger.info(f"{__name__}:search - Got {len(records)} records")
        return records
