"""
Document agent system prompt.

Builds the system instruction from the retrieved grounding context and the
declared tools, and fixes the page citation format.

Dependencies: langchain_core.prompts
System role: Prompt template for document agent behavior
"""

from collections.abc import Sequence

from langchain_core.prompts import PromptTemplate

from paperlens.models.chunk import Chunk
from paperlens.models.tooling import ToolDeclaration

NO_CONTEXT = "No relevant passages were found in the document."

SYSTEM_PROMPT = """You are PaperLens, an agentic research assistant that helps a reader understand a document.

## Tools Available
{tool_descriptions}

## Context From The Document
{context}

## Instructions
1. Answer based on the document context first.
2. If the user asks for outside information, use the tools.
3. If math is needed, use the calculator instead of computing in your head.
4. Cite document pages as [[Page N]] right after the claim they support.
5. If an image of a page is attached, describe and explain its diagrams, charts and tables."""

SYSTEM_PROMPT_TEMPLATE = PromptTemplate.from_template(SYSTEM_PROMPT)


def format_context(chunks: Sequence[Chunk]) -> str:
    """Render retrieved chunks as ``[Page P]: text`` blocks."""
    return "\n\n".join(f"[Page {chunk.page_number}]: {chunk.text}" for chunk in chunks)


def format_tool_descriptions(tools: Sequence[ToolDeclaration]) -> str:
    """Numbered capability list for the system prompt."""
    if not tools:
        return "None."
    return "\n".join(
        f"{i}. {tool.name}: {tool.description}" for i, tool in enumerate(tools, start=1)
    )


def build_system_instruction(context: str, tools: Sequence[ToolDeclaration]) -> str:
    """
    Render the agent's system instruction.

    Args:
        context: Formatted grounding context (may be empty)
        tools: Declarations offered to the model

    Returns:
        str: System instruction text
    """
    return SYSTEM_PROMPT_TEMPLATE.format(
        tool_descriptions=format_tool_descriptions(tools),
        context=context or NO_CONTEXT,
    )
