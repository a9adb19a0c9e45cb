"""
Configuration module for TutorVerse.

This module provides centralized configuration management including:
- Application settings (models, API keys, pipeline limits)
- Prompt templates and system instructions
- Tool definitions, output schemas and fixed responses

All configurable values should be imported from this module to ensure
consistency across the application.
"""

from .settings import (
    # Paths
    BASE_DIR,

    # API Keys
    GOOGLE_API_KEY,

    # LLM Settings
    GEMINI_MODEL,
    TEMPERATURE,
    MAX_TOKENS,
    TOP_P,
    TOP_K,
    MAX_RETRIES,
    RETRY_DELAY,
    TIMEOUT,

    # Langfuse Settings
    LANGFUSE_PUBLIC_KEY,
    LANGFUSE_SECRET_KEY,
    LANGFUSE_HOST,
    LANGFUSE_ENABLED,

    # Pipeline Settings
    MAX_QUERY_LENGTH,
    MAX_HISTORY_MESSAGES,
    MAX_TOOL_CALLS,

    # UI Settings
    APP_TITLE,
    APP_SUBTITLE,
    PAGE_ICON,
    AGENT_NAMES,
    AGENT_AVATARS,
    GREETING_MESSAGE,
    get_agent_name,

    # Validation
    validate_settings,
    DEBUG,
    LOG_LEVEL,
    get_log_level,
)

from .prompts import (
    # Prompts
    SYSTEM_PROMPT,
    ROUTER_PROMPT,
    MATH_PROMPT,
    PHYSICS_PROMPT,
    GENERAL_PROMPT,
    NO_HISTORY_TEXT,

    # Tool Definitions
    TOOL_DEFINITIONS,

    # Output Schemas
    INTENT_SCHEMA,
    MATH_SCHEMA,
    PHYSICS_SCHEMA,
    GENERAL_SCHEMA,

    # Fixed Responses
    EMPTY_QUERY_MESSAGE,
    QUERY_TOO_LONG_MESSAGE,
    PROCESSING_ERROR_MESSAGE,
    MATH_FALLBACK,
    PHYSICS_HICCUP_FALLBACK,
    PHYSICS_STUMPED_FALLBACK,
    GENERAL_FALLBACK,
    SPECIALTY_REMINDER,

    # Utilities
    format_prompt,
    get_tool_by_name,
)

__all__ = [
    # Settings
    "BASE_DIR",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "TEMPERATURE",
    "MAX_TOKENS",
    "TOP_P",
    "TOP_K",
    "MAX_RETRIES",
    "RETRY_DELAY",
    "TIMEOUT",
    "LANGFUSE_PUBLIC_KEY",
    "LANGFUSE_SECRET_KEY",
    "LANGFUSE_HOST",
    "LANGFUSE_ENABLED",
    "MAX_QUERY_LENGTH",
    "MAX_HISTORY_MESSAGES",
    "MAX_TOOL_CALLS",
    "APP_TITLE",
    "APP_SUBTITLE",
    "PAGE_ICON",
    "AGENT_NAMES",
    "AGENT_AVATARS",
    "GREETING_MESSAGE",
    "get_agent_name",
    "validate_settings",
    "DEBUG",
    "LOG_LEVEL",
    "get_log_level",

    # Prompts
    "SYSTEM_PROMPT",
    "ROUTER_PROMPT",
    "MATH_PROMPT",
    "PHYSICS_PROMPT",
    "GENERAL_PROMPT",
    "NO_HISTORY_TEXT",
    "TOOL_DEFINITIONS",
    "INTENT_SCHEMA",
    "MATH_SCHEMA",
    "PHYSICS_SCHEMA",
    "GENERAL_SCHEMA",
    "EMPTY_QUERY_MESSAGE",
    "QUERY_TOO_LONG_MESSAGE",
    "PROCESSING_ERROR_MESSAGE",
    "MATH_FALLBACK",
    "PHYSICS_HICCUP_FALLBACK",
    "PHYSICS_STUMPED_FALLBACK",
    "GENERAL_FALLBACK",
    "SPECIALTY_REMINDER",
    "format_prompt",
    "get_tool_by_name",
]
