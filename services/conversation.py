"""
Conversation Transcript

The UI-side record of a chat: an ordered list of messages seeded with the
greeting. While a reply is pending the transcript holds exactly one loading
placeholder, which is replaced in place (same id, same position) once the
reply resolves.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from config import GREETING_MESSAGE
from core import HistoryItem

logger = logging.getLogger(__name__)

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
GREETING_INTENT = "greeting"
ERROR_INTENT = "error"


@dataclass
class Message:
    """
    One entry in the transcript.

    Attributes:
        id: Monotonic per-transcript identifier
        role: "user" or "assistant"
        content: Message text (empty while loading)
        intent: math/physics/other/error/greeting, assistant messages only
        is_loading: True only for the pending reply placeholder
    """
    id: int
    role: str
    content: str
    intent: Optional[str] = None
    is_loading: bool = False


class Transcript:
    """Ordered chat messages with a single pending-reply slot."""

    def __init__(self, greeting: Optional[str] = GREETING_MESSAGE):
        self._ids = itertools.count(1)
        self._greeting = greeting
        self.messages: List[Message] = []
        self._seed()

    def _seed(self) -> None:
        if self._greeting:
            self.messages.append(Message(
                id=next(self._ids),
                role=ASSISTANT_ROLE,
                content=self._greeting,
                intent=GREETING_INTENT,
            ))

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    @property
    def pending_message(self) -> Optional[Message]:
        for message in self.messages:
            if message.is_loading:
                return message
        return None

    @property
    def is_pending(self) -> bool:
        return self.pending_message is not None

    def add_user_message(self, content: str) -> Message:
        message = Message(id=next(self._ids), role=USER_ROLE, content=content)
        self.messages.append(message)
        return message

    def start_reply(self) -> Message:
        """
        Append the loading placeholder for the next assistant reply.

        Raises:
            RuntimeError: If a reply is already pending
        """
        if self.is_pending:
            raise RuntimeError("A reply is already pending")

        placeholder = Message(
            id=next(self._ids),
            role=ASSISTANT_ROLE,
            content="",
            is_loading=True,
        )
        self.messages.append(placeholder)
        return placeholder

    def resolve_reply(self, intent: str, text: str) -> Message:
        """
        Replace the pending placeholder with the final reply.

        Raises:
            RuntimeError: If no reply is pending
        """
        placeholder = self.pending_message
        if placeholder is None:
            raise RuntimeError("No reply is pending")

        placeholder.content = text
        placeholder.intent = intent
        placeholder.is_loading = False
        return placeholder

    def fail_reply(self, text: str) -> Message:
        return self.resolve_reply(ERROR_INTENT, text)

    def history(self) -> List[HistoryItem]:
        """
        Turns eligible to be sent as history: everything that is not a
        loading placeholder, greeting included, oldest first.
        """
        return [
            HistoryItem(role=m.role, content=m.content)
            for m in self.messages
            if not m.is_loading and isinstance(m.content, str)
        ]

    def clear(self) -> None:
        """Drop all messages and re-seed the greeting. Ids keep counting up."""
        self.messages = []
        self._seed()
        logger.info("🧹 Conversation cleared")
