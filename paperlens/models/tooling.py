"""
Tool and generation exchange models.

Tool declarations, requested calls, invocation results, and the
normalized shape of one generation provider response.

Dependencies: pydantic
System role: Agent/provider wire contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from paperlens.models.citation import GroundingSource


class ToolDeclaration(BaseModel):
    """Declaration of a tool the model may call."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Tool name, unique within a registry")
    description: str = Field(default="")
    parameter_schema: dict[str, Any] = Field(
        default_factory=dict,
        description="JSON schema of the tool arguments",
    )
    native: bool = Field(
        default=False,
        description="Executed by the generation provider rather than locally",
    )


class ToolCall(BaseModel):
    """A tool invocation requested by the model."""

    name: str
    args: dict[str, Any] = Field(default_factory=dict)
    id: str | None = None


class ToolInvocationResult(BaseModel):
    """String payload fed back to the model after running a tool."""

    name: str
    result_text: str


class GenerationResponse(BaseModel):
    """One response from the generation provider."""

    text: str | None = None
    tool_calls: list[ToolCall] = Field(default_factory=list)
    grounding_sources: list[GroundingSource] = Field(default_factory=list)
