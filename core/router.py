"""
Intent Classification Router

Analyzes the user's query, together with the prior conversation, to decide
which specialist agent should answer it. Uses LLM-based classification with
a structured output schema and a deterministic fallback.

Intent types:
- math: arithmetic, algebra, word problems, math concepts
- physics: physical phenomena, formulas, constants
- other: everything else (handled by the general agent)
"""

import logging
from enum import Enum
from typing import List, Optional
from dataclasses import dataclass

from ai import generate_structured_output
from config import ROUTER_PROMPT, SYSTEM_PROMPT, INTENT_SCHEMA, format_prompt
from .history import HistoryItem, format_history

logger = logging.getLogger(__name__)


# ============================================================================
# INTENT TYPES
# ============================================================================

class IntentType(Enum):
    """Enumeration of routable intents."""

    MATH = "math"
    PHYSICS = "physics"
    OTHER = "other"


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class IntentResult:
    """
    Result of intent classification.

    Attributes:
        intent: The classified intent type (never unset)
        reasoning: LLM's reasoning for the classification, if given
        fallback: True when the classifier output was unusable and the
            intent defaulted to OTHER
    """
    intent: IntentType
    reasoning: Optional[str] = None
    fallback: bool = False


# ============================================================================
# ROUTING LOGIC
# ============================================================================

def classify_intent(
    query: str,
    history: Optional[List[HistoryItem]] = None,
) -> IntentResult:
    """
    Classify a query as math, physics or other.

    The prior conversation is embedded in the prompt so that elliptical
    follow-ups ("what about its formula?") inherit the subject of the
    previous turn.

    If the model returns nothing usable (no text, invalid JSON, or a label
    outside the fixed set) the result is OTHER. Transport errors are not
    caught here; they propagate to the orchestrator.

    Args:
        query: The user's current query (already trimmed and validated)
        history: Prior turns, oldest first

    Returns:
        IntentResult with the classified intent

    Example:
        >>> result = classify_intent("What is 25 into 11?")
        >>> result.intent
        <IntentType.MATH: 'math'>
    """
    history = history or []

    full_prompt = format_prompt(
        ROUTER_PROMPT,
        history=format_history(history),
        query=query,
    )

    try:
        result = generate_structured_output(
            prompt=full_prompt,
            schema=INTENT_SCHEMA,
            system_instruction=SYSTEM_PROMPT,
            temperature=0.2,  # Low temperature for consistent classification
        )
    except ValueError as e:
        logger.warning(
            f"⚠️  Intent classification returned no usable output for query {query!r} "
            f"(history: {len(history)} turns): {e}. Falling back to 'other'."
        )
        return _fallback_result("Classifier returned no usable output")

    intent_str = result.get("intent") if isinstance(result, dict) else None

    try:
        intent = IntentType(intent_str)
    except ValueError:
        logger.warning(
            f"⚠️  Unknown intent {intent_str!r} returned for query {query!r}. "
            f"Raw output: {result!r}. Falling back to 'other'."
        )
        return _fallback_result(f"Classifier returned unknown intent {intent_str!r}")

    intent_result = IntentResult(
        intent=intent,
        reasoning=result.get("reasoning"),
    )

    logger.info(f"🧭 Intent classified: {intent.value}")

    return intent_result


def _fallback_result(reason: str) -> IntentResult:
    return IntentResult(intent=IntentType.OTHER, reasoning=reason, fallback=True)
