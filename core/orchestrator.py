"""
Tutor Agent - Query Orchestrator

Runs one conversational turn:
1. Validate: reject blank or over-long queries before any LLM call
2. Classify: decide math / physics / other using the query and history
3. Dispatch: hand the query to exactly one specialist agent
4. Wrap: return a ProcessedResponse (intent + display text)

Any exception escaping classification or a specialist is caught here and
turned into an `error` response. There are no retries at this layer.
"""

import logging
import time
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

from langfuse import observe, get_client

from ai import get_langfuse_client
from config import (
    MAX_QUERY_LENGTH,
    EMPTY_QUERY_MESSAGE,
    QUERY_TOO_LONG_MESSAGE,
    PROCESSING_ERROR_MESSAGE,
    SPECIALTY_REMINDER,
)
from .history import HistoryLike, normalize_history
from .router import classify_intent, IntentType
from .agents import SpecialistAgent, MathAgent, PhysicsAgent, GeneralAgent

logger = logging.getLogger(__name__)

ERROR_INTENT = "error"


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class ProcessedResponse:
    """
    Outcome of one turn, handed back to the UI.

    Attributes:
        intent: "math", "physics", "other" or "error"
        text: Text to display to the user
        metadata: Execution details (timing, tools used, fallbacks)
    """
    intent: str
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_error(self) -> bool:
        return self.intent == ERROR_INTENT

    def to_dict(self) -> Dict[str, str]:
        return {"intent": self.intent, "text": self.text}


# ============================================================================
# TUTOR AGENT
# ============================================================================

class TutorAgent:
    """
    Routes each query to the math, physics or general specialist.

    Holds only the specialist instances, which keep no per-turn state, so
    one TutorAgent can serve any number of conversations.
    """

    def __init__(
        self,
        agents: Optional[Dict[IntentType, SpecialistAgent]] = None,
        max_query_length: int = MAX_QUERY_LENGTH,
    ):
        """
        Initialize the tutor agent.

        Args:
            agents: Specialist per intent (defaults to Math/Physics/General)
            max_query_length: Longest accepted query, in characters, after trimming
        """
        self.agents = agents or {
            IntentType.MATH: MathAgent(),
            IntentType.PHYSICS: PhysicsAgent(),
            IntentType.OTHER: GeneralAgent(),
        }
        self.max_query_length = max_query_length

    @observe(name="process_query")
    def process_query(
        self,
        query: str,
        history: Optional[List[HistoryLike]] = None,
        session_id: Optional[str] = None,
    ) -> ProcessedResponse:
        """
        Answer one user query.

        Args:
            query: Raw user input
            history: Turns before this query, oldest first
            session_id: Conversation identifier for tracing

        Returns:
            ProcessedResponse; never raises
        """
        start_time = time.time()

        if session_id and get_langfuse_client():
            get_client().update_current_trace(session_id=session_id)

        # Step 1: Validate
        trimmed = (query or "").strip()

        if not trimmed:
            logger.info("⚠️  Empty query rejected")
            return ProcessedResponse(intent=ERROR_INTENT, text=EMPTY_QUERY_MESSAGE)

        if len(trimmed) > self.max_query_length:
            logger.info(f"⚠️  Query rejected: {len(trimmed)} characters (max {self.max_query_length})")
            return ProcessedResponse(
                intent=ERROR_INTENT,
                text=QUERY_TOO_LONG_MESSAGE.format(
                    length=len(trimmed),
                    max_length=self.max_query_length,
                ),
            )

        items = normalize_history(history)

        try:
            # Step 2: Classify
            intent_result = classify_intent(trimmed, items)
            intent = intent_result.intent
            logger.info(f"🎯 Intent: {intent.value}")

            # Step 3: Dispatch
            agent = self.agents[intent]
            run = agent.run(trimmed, items)
            text = run.output[agent.output_field]

            if intent == IntentType.OTHER:
                text = f"{text}\n\n{SPECIALTY_REMINDER}"

            # Step 4: Wrap
            execution_time = time.time() - start_time
            logger.info(f"✅ Query answered by {agent.name} agent in {execution_time:.2f}s")

            return ProcessedResponse(
                intent=intent.value,
                text=text,
                metadata={
                    "execution_time": execution_time,
                    "tools_used": run.tools_used,
                    "classifier_fallback": intent_result.fallback,
                    "agent_fallback": run.used_fallback,
                },
            )

        except Exception as e:
            logger.error(
                f"❌ Query processing failed for {trimmed!r} "
                f"({len(items)} history turns): {e}",
                exc_info=True,
            )
            return ProcessedResponse(
                intent=ERROR_INTENT,
                text=PROCESSING_ERROR_MESSAGE.format(details=str(e)),
                metadata={
                    "execution_time": time.time() - start_time,
                    "error": str(e),
                },
            )


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

_default_agent: Optional[TutorAgent] = None


def process_query(
    query: str,
    history: Optional[List[HistoryLike]] = None,
    session_id: Optional[str] = None,
) -> ProcessedResponse:
    """
    Answer one user query with the default TutorAgent.

    Args:
        query: Raw user input
        history: Turns before this query, oldest first
        session_id: Conversation identifier for tracing

    Returns:
        ProcessedResponse
    """
    global _default_agent
    if _default_agent is None:
        _default_agent = TutorAgent()
    return _default_agent.process_query(query, history, session_id=session_id)
