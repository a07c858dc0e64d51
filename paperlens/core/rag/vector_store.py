"""
In-memory vector store for one document.

Builds the per-document RAG memory (chunk, filter, embed) and ranks chunks
against a query by cosine similarity. The store is read-only once built.

Dependencies: numpy, paperlens.core.rag.chunker, paperlens.boundary.providers
System role: Indexing and retrieval for the agent's grounding context
"""

import itertools
import logging
from collections.abc import Sequence

import numpy as np

from paperlens.boundary.providers.base import EmbeddingProvider
from paperlens.core.exceptions import RetrievalError
from paperlens.core.rag.chunker import PageChunker
from paperlens.core.rag.similarity import cosine_scores
from paperlens.models.chunk import Chunk, ScoredChunk

logger = logging.getLogger(__name__)

_chunk_counter = itertools.count(1)


def next_chunk_id(page_number: int) -> str:
    """Process-unique chunk id built from the page and a monotonic counter."""
    return f"{page_number}-{next(_chunk_counter)}"


class VectorStore:
    """
    Ordered chunk collection sharing one embedding space.

    Every contained vector has the same length. An empty store is valid and
    answers every retrieval with an empty list.
    """

    def __init__(self, embedder: EmbeddingProvider, chunks: Sequence[Chunk] = ()) -> None:
        """
        Initialize store from already embedded chunks.

        Args:
            embedder: Provider used to embed queries (same as at index time)
            chunks: Embedded chunks in insertion order

        Raises:
            ValueError: When a chunk has no vector or dimensions differ
        """
        self._embedder = embedder
        self._chunks: tuple[Chunk, ...] = tuple(chunks)

        dimensions = {len(chunk.vector or ()) for chunk in self._chunks}
        if 0 in dimensions:
            raise ValueError("All chunks must carry a vector")
        if len(dimensions) > 1:
            raise ValueError(f"Mixed vector dimensions: {sorted(dimensions)}")

        self._dimension = dimensions.pop() if dimensions else 0
        self._matrix = (
            np.array([chunk.vector for chunk in self._chunks], dtype=np.float64)
            if self._chunks
            else np.empty((0, 0))
        )

    @classmethod
    async def build(
        cls,
        paged_text: str,
        embedder: EmbeddingProvider,
        chunker: PageChunker | None = None,
        min_chunk_chars: int = 50,
    ) -> "VectorStore":
        """
        Chunk, filter and embed a document.

        Chunks are embedded one at a time. A chunk whose embedding fails, is
        empty, or disagrees with the established dimension is logged and
        dropped; indexing continues.

        Args:
            paged_text: Page-delimited document text
            embedder: Embedding provider
            chunker: Chunker to use (default window sizes when None)
            min_chunk_chars: Minimum trimmed length for a chunk to be indexed

        Returns:
            VectorStore: Possibly empty store
        """
        chunker = chunker or PageChunker()
        windows = chunker.chunk(paged_text)
        # Blank windows are never indexed, whatever the threshold
        candidates = [
            w for w in windows
            if w.page_content.strip() and len(w.page_content.strip()) >= min_chunk_chars
        ]
        logger.info(
            f"{__name__}:build - START windows={len(windows)}, "
            f"candidates={len(candidates)}, min_chunk_chars={min_chunk_chars}"
        )

        chunks: list[Chunk] = []
        dimension: int | None = None
        failures = 0
        for window in candidates:
            page_number = window.metadata["page"]
            try:
                vector = await embedder.embed_one(window.page_content)
            except Exception as e:
                failures += 1
                logger.warning(
                    f"{__name__}:build - Failed to embed chunk on page {page_number}: "
                    f"{type(e).__name__}: {e}"
                )
                continue

            if not vector or (dimension is not None and len(vector) != dimension):
                failures += 1
                logger.warning(
                    f"{__name__}:build - Dropping chunk on page {page_number}: "
                    f"vector length {len(vector or [])}, expected {dimension}"
                )
                continue

            dimension = len(vector)
            chunks.append(Chunk(
                id=next_chunk_id(page_number),
                text=window.page_content,
                page_number=page_number,
                vector=vector,
            ))

        logger.info(
            f"{__name__}:build - END indexed={len(chunks)}, failed={failures}, dimension={dimension}"
        )
        return cls(embedder, chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        """Chunks in insertion order."""
        return self._chunks

    @property
    def dimension(self) -> int:
        """Vector length shared by all chunks (0 when empty)."""
        return self._dimension

    @property
    def is_empty(self) -> bool:
        return not self._chunks

    def rank(self, query_vector: Sequence[float], top_k: int = 5) -> list[ScoredChunk]:
        """
        Score every chunk against a query vector.

        Sorted by descending similarity; ties keep insertion order.

        Args:
            query_vector: Embedded query
            top_k: Maximum number of results

        Returns:
            list[ScoredChunk]: At most top_k scored chunks

        Raises:
            ValueError: When the query dimension differs from the store's
        """
        if self.is_empty or top_k < 1:
            return []
        if len(query_vector) != self._dimension:
            raise ValueError(
                f"Query vector has {len(query_vector)} dimensions, store has {self._dimension}"
            )

        scores = cosine_scores(query_vector, self._matrix)
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [ScoredChunk(chunk=self._chunks[i], score=float(scores[i])) for i in order]

    async def search(self, query: str, top_k: int = 5) -> list[ScoredChunk]:
        """
        Embed a query and rank chunks against it.

        No embedding call is made when the store is empty.

        Raises:
            RetrievalError: When the query cannot be embedded or compared
        """
        if self.is_empty:
            return []

        try:
            query_vector = await self._embedder.embed_one(query)
            results = self.rank(query_vector, top_k)
        except Exception as e:
            logger.error(f"{__name__}:search - FAILED: {type(e).__name__}: {e}")
            raise RetrievalError(
                f"Failed to retrieve context: {e}",
                details={"query_len": len(query), "top_k": top_k},
            ) from e

        logger.info(
            f"{__name__}:search - Retrieved {len(results)} chunks "
            f"(pages={[r.chunk.page_number for r in results]})"
        )
        return results

    async def retrieve(self, query: str, top_k: int = 5) -> list[Chunk]:
        """
        Return the most relevant chunks for a query, most relevant first.

        Args:
            query: User query text
            top_k: Maximum number of chunks

        Returns:
            list[Chunk]: At most top_k chunks

        Raises:
            RetrievalError: When the query cannot be embedded
        """
        return [result.chunk for result in await self.search(query, top_k)]
