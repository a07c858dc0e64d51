"""RAG memory: page-aware chunking, embedding index, similarity ranking."""

from paperlens.core.rag.chunker import PAGE_MARKER_PATTERN, PageChunker, format_paged_text
from paperlens.core.rag.similarity import cosine_similarity
from paperlens.core.rag.vector_store import VectorStore

__all__ = [
    "PAGE_MARKER_PATTERN",
    "PageChunker",
    "VectorStore",
    "cosine_similarity",
    "format_paged_text",
]
