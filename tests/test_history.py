"""
Unit Tests for Conversation History Helpers
"""

from core.history import HistoryItem, normalize_history, format_history
from config import NO_HISTORY_TEXT


class TestNormalizeHistory:
    """Test normalize_history."""

    def test_accepts_dicts_and_items(self):
        history = normalize_history([
            {"role": "user", "content": "what is gravity"},
            HistoryItem(role="assistant", content="Gravity is a force."),
        ])

        assert history == [
            HistoryItem(role="user", content="what is gravity"),
            HistoryItem(role="assistant", content="Gravity is a force."),
        ]

    def test_drops_invalid_entries(self):
        history = normalize_history([
            {"role": "system", "content": "ignored"},
            {"role": "user", "content": None},
            "not a turn",
            {"role": "assistant", "content": "kept"},
        ])

        assert history == [HistoryItem(role="assistant", content="kept")]

    def test_none_is_empty(self):
        assert normalize_history(None) == []


class TestFormatHistory:
    """Test format_history."""

    def test_empty_history(self):
        assert format_history([]) == NO_HISTORY_TEXT

    def test_role_tagged_lines_in_order(self):
        text = format_history([
            HistoryItem(role="user", content="what is gravity"),
            HistoryItem(role="assistant", content="Gravity is a force."),
        ])

        assert text == "user: what is gravity\nassistant: Gravity is a force."

    def test_keeps_most_recent_turns(self):
        history = [HistoryItem(role="user", content=f"q{i}") for i in range(5)]

        text = format_history(history, limit=2)

        assert text == "user: q3\nuser: q4"
