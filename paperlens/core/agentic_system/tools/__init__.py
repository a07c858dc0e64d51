"""Agent tools and the registry that declares and invokes them."""

from paperlens.core.agentic_system.tools.calculator_tool import (
    CALCULATOR_STEP_TEMPLATE,
    create_calculator_tool,
)
from paperlens.core.agentic_system.tools.registry import (
    GOOGLE_SEARCH_DECLARATION,
    ToolRegistry,
)
from paperlens.core.agentic_system.tools.scholar_search_tool import (
    SCHOLAR_STEP_TEMPLATE,
    create_scholar_search_tool,
)
from paperlens.boundary.scholar import SemanticScholarClient
from paperlens.configs.tools import ToolSettings


def create_default_registry(
    settings: ToolSettings | None = None,
    enable_web_search: bool = True,
    scholar_client: SemanticScholarClient | None = None,
) -> ToolRegistry:
    """
    Build the standard registry: scholarly search, calculator, web search.

    Args:
        settings: Tool settings (env defaults when None)
        enable_web_search: Declare the native Google Search capability
        scholar_client: Optional preconfigured search client

    Returns:
        ToolRegistry: Populated registry
    """
    settings = settings or ToolSettings()
    client = scholar_client or SemanticScholarClient(
        base_url=settings.semantic_scholar_url,
        timeout=settings.request_timeout,
    )
    registry = ToolRegistry(native=[GOOGLE_SEARCH_DECLARATION] if enable_web_search else [])
    registry.register(
        create_scholar_search_tool(
            client,
            limit=settings.search_result_limit,
            preview_chars=settings.abstract_preview_chars,
        ),
        step_template=SCHOLAR_STEP_TEMPLATE,
    )
    registry.register(create_calculator_tool(), step_template=CALCULATOR_STEP_TEMPLATE)
    return registry


__all__ = ["ToolRegistry", "GOOGLE_SEARCH_DECLARATION", "create_default_registry"]
