"""
Application settings and configuration values.

This module centralizes all configuration values including:
- API keys and credentials
- Model parameters
- Pipeline limits (query length, history window, tool budget)
- UI constants

Environment variables are loaded via python-dotenv. Nothing secret is
hardcoded here; keys come from the process environment or a local .env file.
"""

import os
from pathlib import Path
from typing import Dict, List
from dotenv import load_dotenv

# ============================================================================
# PATHS
# ============================================================================

BASE_DIR = Path(__file__).parent.parent

# Load environment variables from .env file
load_dotenv(BASE_DIR / ".env")

# ============================================================================
# LLM CONFIGURATION
# ============================================================================

# Gemini API Settings
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")

# Model Parameters
TEMPERATURE = float(os.getenv("TEMPERATURE", "0.7"))
MAX_TOKENS = int(os.getenv("MAX_TOKENS", "8192"))
TOP_P = float(os.getenv("TOP_P", "0.95"))
TOP_K = int(os.getenv("TOP_K", "40"))

# Retry and Timeout Settings
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "2"))  # total attempts, i.e. one retry
RETRY_DELAY = float(os.getenv("RETRY_DELAY", "1.0"))  # seconds
TIMEOUT = int(os.getenv("TIMEOUT", "30"))  # seconds, per backend request

# ============================================================================
# LANGFUSE OBSERVABILITY
# ============================================================================

LANGFUSE_PUBLIC_KEY = os.getenv("LANGFUSE_PUBLIC_KEY")
LANGFUSE_SECRET_KEY = os.getenv("LANGFUSE_SECRET_KEY")
LANGFUSE_HOST = os.getenv("LANGFUSE_HOST", "https://cloud.langfuse.com")

# Enable/disable Langfuse tracing
LANGFUSE_ENABLED = os.getenv("LANGFUSE_ENABLED", "true").lower() == "true"

if LANGFUSE_ENABLED and (not LANGFUSE_PUBLIC_KEY or not LANGFUSE_SECRET_KEY):
    LANGFUSE_ENABLED = False

# ============================================================================
# PIPELINE SETTINGS
# ============================================================================

# Queries longer than this are rejected before any LLM call
MAX_QUERY_LENGTH = int(os.getenv("MAX_QUERY_LENGTH", "1000"))

# Most recent prior turns rendered into classifier/agent prompts
MAX_HISTORY_MESSAGES = int(os.getenv("MAX_HISTORY_MESSAGES", "20"))

# Tool invocations a specialist may make within a single turn
MAX_TOOL_CALLS = int(os.getenv("MAX_TOOL_CALLS", "5"))

# ============================================================================
# UI SETTINGS
# ============================================================================

APP_TITLE = "TutorVerse"
APP_SUBTITLE = "Your friendly guide to the wonders of Math and Physics"
PAGE_ICON = "🧠"

# Display name of the assistant, keyed by message intent
AGENT_NAMES: Dict[str, str] = {
    "math": "Math Whiz",
    "physics": "Physics Pro",
    "error": "Oops!",
}
DEFAULT_AGENT_NAME = "TutorVerse"

AGENT_AVATARS: Dict[str, str] = {
    "math": "🧮",
    "physics": "⚛️",
    "error": "⚠️",
    "other": "💬",
    "greeting": "✨",
}

GREETING_MESSAGE = (
    "Hello there, curious learner! I'm TutorVerse, your friendly guide to the "
    "wonders of Math and Physics. What amazing question do you have for me today?"
)

# ============================================================================
# VALIDATION HELPERS
# ============================================================================

def get_agent_name(intent: str = None) -> str:
    """Return the assistant display name for a message intent."""
    return AGENT_NAMES.get(intent, DEFAULT_AGENT_NAME)


def validate_settings() -> List[str]:
    """
    Check the loaded configuration for problems.

    Called by the entry point at startup rather than on import, so that
    tests and tooling can import the configuration without credentials.

    Returns:
        List of human-readable problems (empty if configuration is usable)
    """
    problems = []

    if not GOOGLE_API_KEY:
        problems.append(
            "GOOGLE_API_KEY not found in environment variables. "
            "Please set it in your .env file."
        )

    if MAX_QUERY_LENGTH <= 0:
        problems.append(f"MAX_QUERY_LENGTH must be positive, got {MAX_QUERY_LENGTH}")

    if MAX_RETRIES < 1:
        problems.append(f"MAX_RETRIES must be at least 1, got {MAX_RETRIES}")

    if TIMEOUT <= 0:
        problems.append(f"TIMEOUT must be positive, got {TIMEOUT}")

    return problems


# ============================================================================
# DEVELOPMENT / DEBUG SETTINGS
# ============================================================================

DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_log_level() -> str:
    """Root log level name; DEBUG=true overrides LOG_LEVEL."""
    if DEBUG:
        return "DEBUG"
    return LOG_LEVEL.upper()
