"""
Math Agent (Math Whiz)

Step-by-step solutions to math questions. Arithmetic goes through the
calculator tool: the prompt has the model translate natural-language
phrasing and word problems into a single expression first
("25 into 11" -> "25 * 11"). Conceptual questions skip the tool.
"""

from typing import Dict, List, Optional

from config import MATH_PROMPT, MATH_SCHEMA, MATH_FALLBACK
from ..history import HistoryItem
from .base import SpecialistAgent


class MathAgent(SpecialistAgent):
    name = "math"
    prompt_template = MATH_PROMPT
    query_placeholder = "question"
    output_field = "answer"
    schema = MATH_SCHEMA
    tool_names = ("calculator",)
    fallback_text = MATH_FALLBACK
    temperature = 0.3


def generate_math_response(
    question: str,
    history: Optional[List[HistoryItem]] = None,
) -> Dict[str, str]:
    """Answer a math question; returns {"answer": ...}."""
    return MathAgent().generate(question, history)
