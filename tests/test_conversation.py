"""
Unit Tests for the Conversation Transcript
"""

import pytest

from config import GREETING_MESSAGE
from core.history import HistoryItem
from services.conversation import Transcript


class TestTranscript:
    """Test the transcript lifecycle."""

    @pytest.fixture
    def transcript(self):
        return Transcript()

    def test_seeded_with_greeting(self, transcript):
        assert len(transcript) == 1
        greeting = transcript.messages[0]
        assert greeting.role == "assistant"
        assert greeting.content == GREETING_MESSAGE
        assert greeting.intent == "greeting"
        assert transcript.is_pending is False

    def test_ids_are_monotonic(self, transcript):
        user = transcript.add_user_message("hi")
        placeholder = transcript.start_reply()

        assert transcript.messages[0].id < user.id < placeholder.id

    def test_placeholder_replaced_in_place(self, transcript):
        transcript.add_user_message("What is 2 + 2?")
        placeholder = transcript.start_reply()
        position = transcript.messages.index(placeholder)

        assert transcript.is_pending
        assert placeholder.is_loading

        reply = transcript.resolve_reply("math", "4")

        assert reply.id == placeholder.id
        assert transcript.messages[position] is reply
        assert reply.content == "4"
        assert reply.intent == "math"
        assert reply.is_loading is False
        assert len(transcript) == 3
        assert transcript.is_pending is False

    def test_only_one_pending_reply(self, transcript):
        transcript.start_reply()

        with pytest.raises(RuntimeError):
            transcript.start_reply()

        assert sum(m.is_loading for m in transcript) == 1

    def test_resolve_without_pending(self, transcript):
        with pytest.raises(RuntimeError):
            transcript.resolve_reply("math", "4")

    def test_fail_reply(self, transcript):
        transcript.start_reply()

        reply = transcript.fail_reply("Something went wrong")

        assert reply.intent == "error"
        assert not transcript.is_pending

    def test_history_excludes_placeholder(self, transcript):
        transcript.add_user_message("what is gravity")
        transcript.start_reply()

        assert transcript.history() == [
            HistoryItem(role="assistant", content=GREETING_MESSAGE),
            HistoryItem(role="user", content="what is gravity"),
        ]

    def test_clear_reseeds_greeting(self, transcript):
        transcript.add_user_message("hi")
        last_id = transcript.messages[-1].id

        transcript.clear()

        assert len(transcript) == 1
        assert transcript.messages[0].content == GREETING_MESSAGE
        assert transcript.messages[0].id > last_id

    def test_without_greeting(self):
        assert len(Transcript(greeting=None)) == 0
