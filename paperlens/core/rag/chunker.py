"""
Page-aware fixed window chunker.

Splits page-delimited document text into overlapping character windows
that never cross a page boundary.

Dependencies: langchain_core.documents
System role: First stage of document indexing
"""

import re
from collections.abc import Iterable

from langchain_core.documents import Document

PAGE_MARKER_PATTERN = re.compile(r"--- Page (\d+) ---")


def format_paged_text(pages: Iterable[tuple[int, str]]) -> str:
    """
    Render extracted pages in the delimited form the chunker reads.

    Args:
        pages: (page_number, text) pairs in page order

    Returns:
        str: Text with a "--- Page N ---" marker before each page
    """
    return "".join(f"--- Page {number} ---\n{text}\n\n" for number, text in pages)


class PageChunker:
    """Split page-delimited text into fixed-size overlapping windows."""

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200) -> None:
        """
        Initialize chunker with window configuration.

        Args:
            chunk_size: Maximum window size in characters
            chunk_overlap: Characters shared by consecutive windows of a page

        Raises:
            ValueError: When the overlap does not leave the window room to advance
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def stride(self) -> int:
        return self.chunk_size - self.chunk_overlap

    def split_pages(self, paged_text: str) -> list[tuple[int, str]]:
        """
        Recover (page_number, content) pairs from delimited text.

        Content before the first marker is ignored.
        """
        parts = PAGE_MARKER_PATTERN.split(paged_text)
        # parts = [preamble, number, content, number, content, ...]
        return [(int(parts[i]), parts[i + 1]) for i in range(1, len(parts) - 1, 2)]

    def chunk(self, paged_text: str) -> list[Document]:
        """
        Split text into page-tagged windows.

        Args:
            paged_text: Text using the "--- Page N ---" convention

        Returns:
            list[Document]: Windows in page order, then offset order, with
                ``page`` and ``start_index`` metadata
        """
        documents = []
        for page_number, content in self.split_pages(paged_text):
            start = 0
            while start < len(content):
                end = min(start + self.chunk_size, len(content))
                documents.append(Document(
                    page_content=content[start:end],
                    metadata={"page": page_number, "start_index": start},
                ))
                start += self.stride
        return documents
