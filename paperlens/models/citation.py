"""
Citation domain models.

Grounding sources returned by the generation provider and the page
citation marker contract shared with the presentation layer.

Dependencies: pydantic
System role: Citation data structures
"""

from pydantic import BaseModel, Field


class GroundingSource(BaseModel):
    """External evidence attached to an answer by the model's web search."""

    uri: str = Field(description="Source URL")
    title: str = Field(default="", description="Source title")
