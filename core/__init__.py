"""
Core Agent Logic Module

This module contains the brain of TutorVerse:
- Conversation history conventions shared by every component
- Intent classification (router): math, physics or other
- Specialist agents: one per intent, with tool calling
- Orchestration (TutorAgent): validate, classify, dispatch, wrap

Each query is handled by exactly one specialist; the orchestrator is the
single fault boundary between the agents and the UI.
"""

from .history import (
    HistoryItem,
    normalize_history,
    format_history,
)

from .router import (
    classify_intent,
    IntentType,
    IntentResult,
)

from .agents import (
    SpecialistAgent,
    AgentRun,
    ToolResult,
    MathAgent,
    PhysicsAgent,
    GeneralAgent,
    validate_agent_output,
    generate_math_response,
    generate_physics_explanation,
    generate_general_response,
)

from .orchestrator import (
    TutorAgent,
    ProcessedResponse,
    process_query,
)

__all__ = [
    # History
    "HistoryItem",
    "normalize_history",
    "format_history",

    # Router
    "classify_intent",
    "IntentType",
    "IntentResult",

    # Agents
    "SpecialistAgent",
    "AgentRun",
    "ToolResult",
    "MathAgent",
    "PhysicsAgent",
    "GeneralAgent",
    "validate_agent_output",
    "generate_math_response",
    "generate_physics_explanation",
    "generate_general_response",

    # Orchestrator
    "TutorAgent",
    "ProcessedResponse",
    "process_query",
]
