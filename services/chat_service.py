"""
Chat Service - Main Coordinator

Orchestrates the user interaction flow:
1. Receives the user's query and the prior conversation
2. Hands it to the TutorAgent
3. Returns a formatted response with follow-up suggestions
4. Applies the transcript lifecycle (user message, placeholder, reply)

This is the main entry point for the Streamlit UI.
"""

import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
import uuid

from core import TutorAgent, HistoryItem
from config import PROCESSING_ERROR_MESSAGE
from .conversation import Transcript, Message

logger = logging.getLogger(__name__)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class ChatResponse:
    """
    Response from the chat service.

    Attributes:
        message: The response text to display to the user
        success: Whether the request was handled successfully
        metadata: Additional metadata about the response (intent, timing)
        suggestions: Follow-up suggestions for the user
    """
    message: str
    success: bool
    metadata: Dict[str, Any]
    suggestions: Optional[List[str]] = None

    @property
    def intent(self) -> str:
        return self.metadata.get("intent", "error")


# ============================================================================
# CHAT SERVICE
# ============================================================================

class ChatService:
    """
    Main chat service coordinator.

    Wraps a TutorAgent for the UI and keeps the transcript consistent
    around each call.
    """

    def __init__(self, tutor: Optional[TutorAgent] = None):
        """Initialize the chat service."""
        self.tutor = tutor or TutorAgent()
        logger.info("✅ ChatService initialized")

    def process_message(
        self,
        query: str,
        history: Optional[List[HistoryItem]] = None,
        session_id: Optional[str] = None,
    ) -> ChatResponse:
        """
        Process a user query and generate a response.

        Args:
            query: The user's input text
            history: Turns before this query, oldest first
            session_id: Session identifier

        Returns:
            ChatResponse with the agent's reply and metadata
        """
        # Generate session ID if not provided
        if not session_id:
            session_id = str(uuid.uuid4())

        logger.info(f"💬 Processing message (session: {session_id}): {(query or '')[:50]}...")

        try:
            result = self.tutor.process_query(query, history, session_id=session_id)

        except Exception as e:
            logger.error(f"❌ ChatService error: {e}", exc_info=True)
            return ChatResponse(
                message=PROCESSING_ERROR_MESSAGE.format(details=str(e)),
                success=False,
                metadata={"intent": "error", "error": str(e), "session_id": session_id},
            )

        return ChatResponse(
            message=result.text,
            success=not result.is_error,
            metadata={
                **result.metadata,
                "intent": result.intent,
                "session_id": session_id,
            },
            suggestions=self.generate_suggestions(result.intent),
        )

    def submit(
        self,
        transcript: Transcript,
        query: str,
        session_id: Optional[str] = None,
    ) -> Message:
        """
        Run one full turn against a transcript.

        The history sent to the agent is captured before the user message is
        appended, so it never contains the current query.

        Args:
            transcript: Conversation to update
            query: The user's input text
            session_id: Session identifier

        Returns:
            The resolved assistant message

        Raises:
            RuntimeError: If the transcript already has a reply pending
        """
        if transcript.is_pending:
            raise RuntimeError("Wait for the current reply before sending another message")

        history = transcript.history()
        transcript.add_user_message(query)
        transcript.start_reply()

        try:
            response = self.process_message(query, history, session_id=session_id)
        except Exception as e:
            logger.error(f"❌ Turn failed before a reply was produced: {e}", exc_info=True)
            return transcript.fail_reply(PROCESSING_ERROR_MESSAGE.format(details=str(e)))

        return transcript.resolve_reply(response.intent, response.message)

    def generate_suggestions(self, intent: str) -> Optional[List[str]]:
        """
        Generate follow-up suggestions based on the answering specialist.

        Args:
            intent: Intent of the reply

        Returns:
            List of suggestion strings, or None for errors
        """
        if intent == "math":
            suggestions = [
                "Give me a similar practice problem",
                "Explain the idea behind this step",
                "Is there another way to solve this?",
            ]

        elif intent == "physics":
            suggestions = [
                "What is the formula for this?",
                "Give me a real-world example",
                "What is the speed of light?",
            ]

        elif intent == "other":
            suggestions = [
                "What is Newton's second law?",
                "Solve 2x + 5 = 11",
                "What is 25 into 11?",
            ]

        else:
            return None

        return suggestions[:3]  # Limit to 3 suggestions


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

def process_user_message(
    query: str,
    history: Optional[List[HistoryItem]] = None,
    session_id: Optional[str] = None,
) -> ChatResponse:
    """
    Convenience function to process a user message.

    Args:
        query: The user's message
        history: Previous conversation
        session_id: Session ID

    Returns:
        ChatResponse
    """
    service = ChatService()
    return service.process_message(
        query=query,
        history=history,
        session_id=session_id,
    )
