"""
Conversation history passed between the UI and the agent pipeline.

Convention: history holds strictly the turns *before* the current query, in
chronological order (the turn immediately preceding the query is last). The
current query is always passed separately and is never appended here.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional, Union

from config import MAX_HISTORY_MESSAGES, NO_HISTORY_TEXT

logger = logging.getLogger(__name__)

VALID_ROLES = ("user", "assistant")


@dataclass(frozen=True)
class HistoryItem:
    """One prior conversation turn, as sent to the classifier and agents."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


HistoryLike = Union[HistoryItem, Dict[str, Any]]


def normalize_history(history: Optional[Iterable[HistoryLike]]) -> List[HistoryItem]:
    """
    Coerce caller-supplied history into HistoryItem objects.

    Accepts HistoryItem instances or {"role", "content"} dicts. Entries with
    an unknown role or non-string content are dropped (and logged) rather
    than failing the whole turn.

    Args:
        history: Prior turns, oldest first (None is treated as empty)

    Returns:
        List of valid HistoryItem objects, order preserved
    """
    items: List[HistoryItem] = []

    for index, entry in enumerate(history or []):
        if isinstance(entry, HistoryItem):
            role, content = entry.role, entry.content
        elif isinstance(entry, dict):
            role, content = entry.get("role"), entry.get("content")
        else:
            logger.warning(f"⚠️  Dropping history entry {index}: unsupported type {type(entry).__name__}")
            continue

        if role not in VALID_ROLES or not isinstance(content, str):
            logger.warning(f"⚠️  Dropping history entry {index}: role={role!r}, content type={type(content).__name__}")
            continue

        items.append(HistoryItem(role=role, content=content))

    return items


def format_history(history: List[HistoryItem], limit: int = MAX_HISTORY_MESSAGES) -> str:
    """
    Render history as role-tagged lines for prompt interpolation.

    Only the most recent `limit` turns are rendered.

    Example:
        user: what is gravity
        assistant: Gravity is the force...
    """
    if not history:
        return NO_HISTORY_TEXT

    recent = history[-limit:] if limit > 0 else history
    return "\n".join(f"{item.role}: {item.content}" for item in recent)
