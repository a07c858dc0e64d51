"""
Indexing configuration settings.

Chunking window sizes, noise filtering and embedding model selection
for building the per-document vector store.

Dependencies: pydantic, pydantic_settings
System role: RAG memory configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndexingSettings(BaseSettings):
    """Chunking and embedding configuration."""

    model_config = SettingsConfigDict(
        env_prefix="INDEXING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=1000, gt=0, description="Window size in characters")
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Characters shared by consecutive windows of one page",
    )
    min_chunk_chars: int = Field(
        default=50,
        ge=0,
        description="Chunks shorter than this after trimming are not indexed",
    )

    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Google embedding model ID",
    )
    embedding_dimension: int | None = Field(
        default=None,
        description="Optional fixed output dimensionality (model default if unset)",
    )

    @model_validator(mode="after")
    def _overlap_below_size(self) -> "IndexingSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
