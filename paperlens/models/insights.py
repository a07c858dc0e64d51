"""
Document insights schema.

Structured output requested from the model when a document is indexed.

Dependencies: pydantic
System role: Document summary data structure
"""

from pydantic import BaseModel, Field


class InsightConcept(BaseModel):
    """A key concept of the document and what it relates to."""

    concept: str
    description: str = ""
    related_to: list[str] = Field(default_factory=list)


class DocumentInsights(BaseModel):
    """Title, summary and structure of an indexed document."""

    title: str = Field(default="Untitled", description="Document title")
    summary: str = Field(default="", description="Short abstract-style summary")
    outline: list[str] = Field(default_factory=list, description="Section outline")
    key_points: list[str] = Field(default_factory=list)
    concepts: list[InsightConcept] = Field(default_factory=list)

    @classmethod
    def failed(cls) -> "DocumentInsights":
        """Placeholder used when analysis cannot be completed."""
        return cls(title="Error", summary="Analysis failed")
