"""
Gemini access layer for TutorVerse.

Every model call made by the router and the specialist agents goes through
here, so timeouts, retries, JSON handling and Langfuse tracing behave the
same everywhere.
"""

from .llm_service import (
    call_llm,
    call_llm_with_tools,
    generate_structured_output,
    parse_json_output,
    validate_model_available,
    health_check,
    get_langfuse_client,
)

__all__ = [
    "call_llm",
    "call_llm_with_tools",
    "generate_structured_output",
    "parse_json_output",
    "validate_model_available",
    "health_check",
    "get_langfuse_client",
]
