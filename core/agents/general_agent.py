"""
General Agent

Brief answers (or a polite refusal) for queries that are neither math nor
physics. No tools. The orchestrator appends the specialty reminder; this
agent only produces the answer itself.
"""

from typing import Dict, List, Optional

from config import GENERAL_PROMPT, GENERAL_SCHEMA, GENERAL_FALLBACK
from ..history import HistoryItem
from .base import SpecialistAgent


class GeneralAgent(SpecialistAgent):
    name = "general"
    prompt_template = GENERAL_PROMPT
    query_placeholder = "query"
    output_field = "response"
    schema = GENERAL_SCHEMA
    fallback_text = GENERAL_FALLBACK
    temperature = 0.7


def generate_general_response(
    query: str,
    history: Optional[List[HistoryItem]] = None,
) -> Dict[str, str]:
    """Answer a general query; returns {"response": ...}."""
    return GeneralAgent().generate(query, history)
