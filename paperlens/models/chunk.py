"""
Chunk domain model.

Represents an indexed span of document text tagged with its source page.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Chunk(BaseModel):
    """Document chunk model, immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Process-unique chunk identifier")
    text: str = Field(description="Chunk text content")
    page_number: int = Field(ge=1, description="1-based source page")
    vector: tuple[float, ...] | None = Field(default=None, description="Embedding vector")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("chunk text must not be blank")
        return value


class ScoredChunk(BaseModel):
    """Chunk paired with its similarity to a query."""

    chunk: Chunk
    score: float = Field(ge=-1.0, le=1.0, description="Cosine similarity")
