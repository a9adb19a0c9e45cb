"""
Function Calling Tools Module

This module contains the tools (functions) that specialist agents can invoke
through function calling. Each tool is designed to:
- Have a clear, single purpose
- Be pure, synchronous and side-effect free
- Accept the parameters declared in config.TOOL_DEFINITIONS
- Return structured results and never raise (errors are reported in-band)

Tools are registered in the tool registry for the agents to use.
"""

from .calculator import (
    calculator,
    evaluate_expression,
    format_number,
    CalculationError,
)

from .physics_constants import (
    lookup_constant,
    physics_constants_lookup,
    PHYSICAL_CONSTANTS,
    CONSTANT_NOT_FOUND,
)


# Tool registry for specialist agents
def get_tool_registry():
    """
    Get the complete registry of available tools.

    Keys match the tool names declared in config.TOOL_DEFINITIONS.

    Returns:
        Dictionary mapping tool names to callable functions
    """
    return {
        "calculator": calculator,
        "physicsConstantsLookup": physics_constants_lookup,
    }


__all__ = [
    # Calculator
    "calculator",
    "evaluate_expression",
    "format_number",
    "CalculationError",

    # Physics constants
    "lookup_constant",
    "physics_constants_lookup",
    "PHYSICAL_CONSTANTS",
    "CONSTANT_NOT_FOUND",

    # Registry
    "get_tool_registry",
]
