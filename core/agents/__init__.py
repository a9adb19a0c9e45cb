"""
Specialist agents: one per routable intent.
"""

from .base import (
    SpecialistAgent,
    AgentRun,
    ToolResult,
    validate_agent_output,
)
from .math_agent import MathAgent, generate_math_response
from .physics_agent import PhysicsAgent, generate_physics_explanation
from .general_agent import GeneralAgent, generate_general_response

__all__ = [
    "SpecialistAgent",
    "AgentRun",
    "ToolResult",
    "validate_agent_output",
    "MathAgent",
    "generate_math_response",
    "PhysicsAgent",
    "generate_physics_explanation",
    "GeneralAgent",
    "generate_general_response",
]
