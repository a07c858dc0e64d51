"""
Tests for the in-memory vector store.

Covers building (filtering, failure tolerance, dimension checks) and
retrieval (ordering, bounds, empty store, error surfacing).

System role: Verification of RAG indexing and retrieval
"""

from unittest.mock import AsyncMock

import pytest

from paperlens.core.exceptions import EmbeddingError, RetrievalError
from paperlens.core.rag import PageChunker, VectorStore, format_paged_text
from paperlens.models.chunk import Chunk


class TestVectorStoreBuild:
    """Test VectorStore.build indexing."""

    @pytest.mark.asyncio
    async def test_build_indexes_each_page(self, embedder, two_page_text) -> None:
        """Should create page-tagged chunks with vectors of one dimension."""
        store = await VectorStore.build(two_page_text, embedder)

        assert len(store) == 2
        assert [c.page_number for c in store.chunks] == [1, 2]
        assert store.dimension == len(embedder.vocabulary) + 1
        assert all(len(c.vector) == store.dimension for c in store.chunks)

    @pytest.mark.asyncio
    async def test_short_chunks_are_not_embedded(self, embedder) -> None:
        """Windows under the minimum trimmed length are skipped before embedding."""
        text = format_paged_text([(1, "too short"), (2, "attention " * 10)])

        store = await VectorStore.build(text, embedder, min_chunk_chars=50)

        assert len(store) == 1
        assert store.chunks[0].page_number == 2
        assert len(embedder.calls) == 1

    @pytest.mark.asyncio
    async def test_blank_page_is_skipped_without_threshold(self, embedder) -> None:
        text = format_paged_text([(1, "The transformer attention " * 5), (2, "   ")])

        store = await VectorStore.build(text, embedder, min_chunk_chars=0)

        assert [c.page_number for c in store.chunks] == [1]
        assert all(call.strip() for call in embedder.calls)

    @pytest.mark.asyncio
    async def test_failed_chunk_is_dropped(self, make_embedder) -> None:
        """An embedding failure skips that chunk and indexing continues."""
        embedder = make_embedder(fail_on="convolution")
        text = format_paged_text([
            (1, "attention " * 10),
            (2, "convolution " * 10),
            (3, "dataset " * 10),
        ])

        store = await VectorStore.build(text, embedder)

        assert [c.page_number for c in store.chunks] == [1, 3]
        assert len(embedder.calls) == 3

    @pytest.mark.asyncio
    async def test_mismatched_dimension_is_dropped(self) -> None:
        """Vectors disagreeing with the first dimension are not indexed."""
        embedder = AsyncMock()
        embedder.embed_one.side_effect = [[1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0]]
        text = format_paged_text([(1, "a" * 60), (2, "b" * 60), (3, "c" * 60)])

        store = await VectorStore.build(text, embedder)

        assert [c.page_number for c in store.chunks] == [1, 3]
        assert store.dimension == 2

    @pytest.mark.asyncio
    async def test_chunk_ids_are_unique(self, embedder) -> None:
        text = format_paged_text([(1, "attention " * 30)])
        chunker = PageChunker(chunk_size=100, chunk_overlap=20)

        first = await VectorStore.build(text, embedder, chunker=chunker)
        second = await VectorStore.build(text, embedder, chunker=chunker)

        ids = [c.id for c in first.chunks] + [c.id for c in second.chunks]
        assert len(ids) == len(set(ids))

    def test_constructor_rejects_mixed_dimensions(self, embedder) -> None:
        chunks = [
            Chunk(id="1-a", text="alpha", page_number=1, vector=(1.0, 0.0)),
            Chunk(id="1-b", text="beta", page_number=1, vector=(1.0,)),
        ]
        with pytest.raises(ValueError):
            VectorStore(embedder, chunks)


class TestVectorStoreRetrieve:
    """Test VectorStore.retrieve ranking."""

    @pytest.mark.asyncio
    async def test_most_similar_page_first(self, embedder, two_page_text) -> None:
        store = await VectorStore.build(two_page_text, embedder)

        results = await store.retrieve("How does transformer attention work?", top_k=2)

        assert [c.page_number for c in results] == [1, 2]

    @pytest.mark.asyncio
    async def test_result_size_is_bounded(self, embedder) -> None:
        text = format_paged_text([(n, f"attention dataset page {n} " * 5) for n in range(1, 7)])
        store = await VectorStore.build(text, embedder)

        assert len(await store.retrieve("attention", top_k=4)) == 4
        assert len(await store.retrieve("attention", top_k=10)) == 6

    @pytest.mark.asyncio
    async def test_scores_are_non_increasing(self, embedder, two_page_text) -> None:
        store = await VectorStore.build(two_page_text, embedder)

        results = await store.search("image convolution accuracy", top_k=5)

        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert results[0].chunk.page_number == 2

    @pytest.mark.asyncio
    async def test_ties_keep_insertion_order(self, embedder) -> None:
        text = format_paged_text([(n, "dataset " * 10) for n in (1, 2, 3)])
        store = await VectorStore.build(text, embedder)

        results = await store.retrieve("dataset", top_k=3)

        assert [c.page_number for c in results] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_empty_store_does_not_embed(self, embedder) -> None:
        """Retrieval on an empty store returns nothing without an embedding call."""
        store = VectorStore(embedder)

        assert await store.retrieve("anything", top_k=4) == []
        assert embedder.calls == []

    @pytest.mark.asyncio
    async def test_query_embedding_failure_raises(self, make_embedder, two_page_text) -> None:
        embedder = make_embedder(fail_on="explode")
        store = await VectorStore.build(two_page_text, embedder)

        with pytest.raises(RetrievalError) as exc_info:
            await store.retrieve("please explode", top_k=4)

        assert isinstance(exc_info.value.__cause__, EmbeddingError)

    def test_rank_rejects_wrong_dimension(self, embedder) -> None:
        store = VectorStore(embedder, [Chunk(id="1-x", text="alpha", page_number=1, vector=(1.0, 0.0))])

        with pytest.raises(ValueError):
            store.rank([1.0, 0.0, 0.0])

    def test_rank_with_non_positive_top_k(self, embedder) -> None:
        store = VectorStore(embedder, [Chunk(id="1-y", text="alpha", page_number=1, vector=(1.0, 0.0))])

        assert store.rank([1.0, 0.0], top_k=0) == []
