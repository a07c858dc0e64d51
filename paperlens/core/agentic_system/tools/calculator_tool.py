"""
Calculator agent tool.

Exact arithmetic for the model (averages from tables, percentages).
Failures are returned as text, never raised.

Dependencies: langchain_core.tools, pydantic
System role: Calculator tool for the document agent
"""

import logging

from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

from paperlens.core.agentic_system.tools.calculator import (
    CalculationError,
    evaluate,
    format_number,
    is_allowed_expression,
)

logger = logging.getLogger(__name__)

CALCULATOR_TOOL_NAME = "calculate_math"
CALCULATOR_STEP_TEMPLATE = "Calculating {expression}..."
REJECTED_EXPRESSION = "Error: Only basic math allowed."


class CalculatorInput(BaseModel):
    """Arguments of the calculator tool."""

    expression: str = Field(description="The math expression to evaluate (e.g. (23+45)/2)")


def calculate_math(expression: str) -> str:
    """
    Evaluate an arithmetic expression into a result string.

    Args:
        expression: Expression over digits, + - * / ( ) . and spaces

    Returns:
        str: "Calculated Result: ..." or an error description
    """
    if not is_allowed_expression(expression):
        logger.warning(f"{__name__}:calculate_math - Rejected expression with disallowed characters")
        return REJECTED_EXPRESSION
    try:
        result = format_number(evaluate(expression))
    except RecursionError:
        return "Math Error: expression is too deeply nested"
    except (CalculationError, ArithmeticError, ValueError) as e:
        # ValueError covers int/str conversion past the digit limit
        return f"Math Error: {e}"
    return f"Calculated Result: {result}"


def create_calculator_tool() -> BaseTool:
    """
    Create the calculator tool.

    Returns:
        BaseTool: Tool named calculate_math
    """

    @tool(
        CALCULATOR_TOOL_NAME,
        args_schema=CalculatorInput,
        description="Perform exact mathematical calculations (e.g. averages from tables).",
    )
    def calculate(expression: str) -> str:
        return calculate_math(expression)

    return calculate
