"""
Tool registry.

Catalog of the tools offered to the model: locally executed LangChain
tools plus natively executed provider capabilities. Invoking a tool never
raises; every failure becomes a descriptive result string that flows back
into the conversation.

Dependencies: langchain_core.tools, pydantic
System role: Tool declaration and invocation for the document agent
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from langchain_core.tools import BaseTool
from langchain_core.utils.function_calling import convert_to_openai_tool
from pydantic import ValidationError

from paperlens.models.tooling import ToolDeclaration, ToolInvocationResult
from paperlens.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

GOOGLE_SEARCH_DECLARATION = ToolDeclaration(
    name="google_search",
    description="Search the web for current events and information outside the document.",
    native=True,
)


@dataclass(frozen=True)
class RegisteredTool:
    """A locally executable tool and how its calls appear in the step log."""

    tool: BaseTool
    declaration: ToolDeclaration
    step_template: str | None = None


def declare(tool: BaseTool) -> ToolDeclaration:
    """Build a function declaration from a LangChain tool's schema."""
    function = convert_to_openai_tool(tool)["function"]
    return ToolDeclaration(
        name=function["name"],
        description=function.get("description", ""),
        parameter_schema=function.get("parameters", {}),
    )


class ToolRegistry:
    """Immutable-after-setup catalog of agent tools."""

    def __init__(self, native: Iterable[ToolDeclaration] = ()) -> None:
        """
        Initialize registry.

        Args:
            native: Declarations executed by the generation provider itself
        """
        self._tools: dict[str, RegisteredTool] = {}
        self._native: dict[str, ToolDeclaration] = {}
        for declaration in native:
            self._check_unique(declaration.name)
            self._native[declaration.name] = declaration

    def _check_unique(self, name: str) -> None:
        if name in self._tools or name in self._native:
            raise ValueError(f"Tool already registered: {name}")

    def register(self, tool: BaseTool, step_template: str | None = None) -> ToolDeclaration:
        """
        Register a locally executed tool.

        Args:
            tool: LangChain tool
            step_template: str.format template over the call arguments

        Returns:
            ToolDeclaration: Declaration forwarded to the model

        Raises:
            ValueError: When the name is already taken
        """
        declaration = declare(tool)
        self._check_unique(declaration.name)
        self._tools[declaration.name] = RegisteredTool(tool, declaration, step_template)
        return declaration

    def __contains__(self, name: object) -> bool:
        return name in self._tools or name in self._native

    @property
    def declarations(self) -> list[ToolDeclaration]:
        """Local declarations in registration order, then native ones."""
        return [t.declaration for t in self._tools.values()] + list(self._native.values())

    def describe_call(self, name: str, args: Mapping[str, Any]) -> str:
        """Human-readable step-log line for a requested call."""
        registered = self._tools.get(name)
        if registered and registered.step_template:
            try:
                return registered.step_template.format(**args)
            except (KeyError, IndexError, ValueError):
                pass
        return f"Calling {name}..."

    async def invoke(self, name: str, args: Mapping[str, Any] | None) -> ToolInvocationResult:
        """
        Run a tool by name.

        Args:
            name: Tool name requested by the model
            args: Tool arguments

        Returns:
            ToolInvocationResult: Result text, or a failure description
        """
        logger.info(f"{__name__}:invoke - START name={name}, args={safe_log_value(dict(args or {}))}")

        if name in self._native:
            return ToolInvocationResult(
                name=name,
                result_text=f"Error: Tool '{name}' is executed by the model and cannot be invoked locally.",
            )
        registered = self._tools.get(name)
        if registered is None:
            logger.warning(f"{__name__}:invoke - Unknown tool {name}")
            return ToolInvocationResult(name=name, result_text=f"Error: Unknown tool '{name}'.")

        try:
            output = await registered.tool.ainvoke(dict(args or {}))
        except ValidationError as e:
            logger.warning(f"{__name__}:invoke - Invalid arguments for {name}: {e.error_count()} errors")
            return ToolInvocationResult(
                name=name,
                result_text=f"Error: Invalid arguments for '{name}': {e.errors(include_url=False)}",
            )
        except Exception as e:
            logger.error(f"{__name__}:invoke - {name} FAILED: {type(e).__name__}: {e}")
            return ToolInvocationResult(name=name, result_text=f"Error: Tool '{name}' failed: {e}")

        result_text = output if isinstance(output, str) else str(output)
        logger.info(f"{__name__}:invoke - END name={name}, result_len={len(result_text)}")
        return ToolInvocationResult(name=name, result_text=result_text)
