"""
Application Services Module

This module sits between the Streamlit UI and the core agents:
- Chat service: Main coordinator for user interactions
- Conversation: Transcript of messages with the pending-reply lifecycle
"""

from .chat_service import (
    ChatService,
    ChatResponse,
    process_user_message,
)

from .conversation import (
    Message,
    Transcript,
)

__all__ = [
    # Chat Service
    "ChatService",
    "ChatResponse",
    "process_user_message",

    # Conversation
    "Message",
    "Transcript",
]
