"""
Physics Agent (Physics Pro)

Explains physics questions, looking up physical constants through the
physicsConstantsLookup tool when the answer needs them.

Failure handling is two-tier:
- unusable or blank output -> the "hiccup" fallback
- the backend call itself raising -> the "stumped" fallback
Neither reaches the orchestrator.
"""

import logging
from typing import Dict, List, Optional

from config import (
    PHYSICS_PROMPT,
    PHYSICS_SCHEMA,
    PHYSICS_HICCUP_FALLBACK,
    PHYSICS_STUMPED_FALLBACK,
)
from ..history import HistoryItem
from .base import SpecialistAgent, AgentRun, serialize_history

logger = logging.getLogger(__name__)


class PhysicsAgent(SpecialistAgent):
    name = "physics"
    prompt_template = PHYSICS_PROMPT
    query_placeholder = "question"
    output_field = "explanation"
    schema = PHYSICS_SCHEMA
    tool_names = ("physicsConstantsLookup",)
    fallback_text = PHYSICS_HICCUP_FALLBACK
    stumped_text = PHYSICS_STUMPED_FALLBACK
    temperature = 0.4

    def run(self, question: str, history: Optional[List[HistoryItem]] = None) -> AgentRun:
        try:
            return super().run(question, history)
        except Exception as e:
            history = list(history or [])
            logger.error(
                f"❌ Physics explanation failed for question {question!r} "
                f"(history: {serialize_history(history)}): {e}",
                exc_info=True,
            )
            return AgentRun(
                question=question,
                history=history,
                output={self.output_field: self.stumped_text},
                used_fallback=True,
            )


def generate_physics_explanation(
    question: str,
    history: Optional[List[HistoryItem]] = None,
) -> Dict[str, str]:
    """Explain a physics question; returns {"explanation": ...}."""
    return PhysicsAgent().generate(question, history)
