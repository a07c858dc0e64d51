"""Semantic Scholar bibliographic search client."""

from paperlens.boundary.scholar.semantic_scholar_client import PaperRecord, SemanticScholarClient

__all__ = ["PaperRecord", "SemanticScholarClient"]
