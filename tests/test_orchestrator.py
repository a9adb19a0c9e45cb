"""
Unit Tests for the Tutor Agent Orchestrator

Covers input validation, routing, the specialty reminder and the single
fault boundary, plus end-to-end turns with the LLM client patched.
"""

import pytest
from unittest.mock import Mock, patch

from config import (
    EMPTY_QUERY_MESSAGE,
    GENERAL_FALLBACK,
    SPECIALTY_REMINDER,
    MAX_QUERY_LENGTH,
)
from core.agents import AgentRun
from core.orchestrator import TutorAgent, ProcessedResponse, process_query
from core.router import IntentType, IntentResult


def stub_agent(output_field, text, tools_used=()):
    """Specialist double whose run() returns a fixed AgentRun."""
    agent = Mock()
    agent.name = output_field
    agent.output_field = output_field
    agent.run.return_value = AgentRun(
        question="q",
        history=[],
        output={output_field: text},
    )
    return agent


@pytest.fixture
def agents():
    return {
        IntentType.MATH: stub_agent("answer", "275"),
        IntentType.PHYSICS: stub_agent("explanation", "F = ma"),
        IntentType.OTHER: stub_agent("response", "Paris."),
    }


@pytest.fixture
def tutor(agents):
    return TutorAgent(agents=agents)


class TestValidation:
    """Queries rejected before any LLM call."""

    @pytest.mark.parametrize("query", ["", "   ", "\n\t", None])
    @patch('core.orchestrator.classify_intent')
    def test_blank_query(self, mock_classify, tutor, query):
        result = tutor.process_query(query, [])

        assert result == ProcessedResponse(intent="error", text=EMPTY_QUERY_MESSAGE)
        mock_classify.assert_not_called()

    @patch('core.orchestrator.classify_intent')
    def test_too_long_query(self, mock_classify, tutor):
        result = tutor.process_query("a" * (MAX_QUERY_LENGTH + 1), [])

        assert result.intent == "error"
        assert str(MAX_QUERY_LENGTH) in result.text
        mock_classify.assert_not_called()

    @patch('core.orchestrator.classify_intent')
    def test_length_is_measured_after_trimming(self, mock_classify, tutor):
        mock_classify.return_value = IntentResult(intent=IntentType.MATH)

        result = tutor.process_query("  " + "a" * MAX_QUERY_LENGTH + "  ", [])

        assert result.intent == "math"


class TestRouting:
    """Dispatch to exactly one specialist."""

    @patch('core.orchestrator.classify_intent')
    def test_math(self, mock_classify, tutor, agents):
        mock_classify.return_value = IntentResult(intent=IntentType.MATH)

        result = tutor.process_query("  What is 25 into 11?  ", [])

        assert result == ProcessedResponse(intent="math", text="275")
        agents[IntentType.MATH].run.assert_called_once_with("What is 25 into 11?", [])
        agents[IntentType.PHYSICS].run.assert_not_called()
        agents[IntentType.OTHER].run.assert_not_called()

    @patch('core.orchestrator.classify_intent')
    def test_physics(self, mock_classify, tutor):
        mock_classify.return_value = IntentResult(intent=IntentType.PHYSICS)

        result = tutor.process_query("Newton's second law?", [])

        assert result.to_dict() == {"intent": "physics", "text": "F = ma"}

    @patch('core.orchestrator.classify_intent')
    def test_other_gets_specialty_reminder(self, mock_classify, tutor):
        mock_classify.return_value = IntentResult(intent=IntentType.OTHER)

        result = tutor.process_query("capital of France?", [])

        assert result.intent == "other"
        assert result.text == f"Paris.\n\n{SPECIALTY_REMINDER}"

    @patch('core.orchestrator.classify_intent')
    def test_history_is_normalized_before_dispatch(self, mock_classify, tutor, agents):
        from core.history import HistoryItem

        mock_classify.return_value = IntentResult(intent=IntentType.MATH)
        history = [
            {"role": "user", "content": "hi"},
            {"role": "tool", "content": "dropped"},
        ]

        tutor.process_query("2 + 2", history)

        expected = [HistoryItem(role="user", content="hi")]
        mock_classify.assert_called_once_with("2 + 2", expected)
        agents[IntentType.MATH].run.assert_called_once_with("2 + 2", expected)


class TestFaultBoundary:
    """Exceptions become error responses."""

    @patch('core.orchestrator.classify_intent')
    def test_classifier_exception(self, mock_classify, tutor):
        mock_classify.side_effect = RuntimeError("API key invalid")

        result = tutor.process_query("2 + 2", [])

        assert result.intent == "error"
        assert result.text.startswith("Sorry, I encountered an error")
        assert result.text.endswith("Details: API key invalid")

    @patch('core.orchestrator.classify_intent')
    def test_agent_exception(self, mock_classify, tutor, agents):
        mock_classify.return_value = IntentResult(intent=IntentType.MATH)
        agents[IntentType.MATH].run.side_effect = TimeoutError("timed out")

        result = tutor.process_query("2 + 2", [])

        assert result.is_error
        assert "Details: timed out" in result.text


class TestEndToEnd:
    """Full turns with only the LLM client patched."""

    @patch('core.agents.base.call_llm_with_tools')
    @patch('core.router.generate_structured_output')
    def test_natural_language_multiplication(self, mock_router, mock_tools):
        mock_router.return_value = {"intent": "math"}
        mock_tools.side_effect = [
            {
                "response_text": None,
                "tool_calls": [{"name": "calculator", "args": {"expression": "25 * 11"}}],
                "model_content": "model turn",
            },
            {
                "response_text": '{"answer": "25 into 11 is 25 * 11 = 275."}',
                "tool_calls": [],
                "model_content": "final turn",
            },
        ]

        result = TutorAgent().process_query("What is 25 into 11?", [])

        assert result.intent == "math"
        assert "275" in result.text
        assert result.metadata["tools_used"] == ["calculator"]

    @patch('core.agents.base.call_llm_with_tools')
    @patch('core.router.generate_structured_output')
    def test_follow_up_uses_history(self, mock_router, mock_tools):
        mock_router.return_value = {"intent": "physics"}
        mock_tools.return_value = {
            "response_text": '{"explanation": "F = G * m1 * m2 / r**2"}',
            "tool_calls": [],
            "model_content": "final turn",
        }
        history = [
            {"role": "user", "content": "what is gravity"},
            {"role": "assistant", "content": "Gravity is the attraction between masses."},
        ]

        result = TutorAgent().process_query("what about its formula?", history)

        assert result.intent == "physics"
        router_prompt = mock_router.call_args.kwargs["prompt"]
        assert "user: what is gravity" in router_prompt
        assert "what about its formula?" in router_prompt

    @patch('core.agents.base.generate_structured_output')
    @patch('core.router.generate_structured_output')
    def test_nonsense_goes_to_general_agent(self, mock_router, mock_general):
        mock_router.return_value = {"intent": "gibberish"}
        mock_general.return_value = None

        result = TutorAgent().process_query("asdfghjkl", [])

        assert result.intent == "other"
        assert result.text == f"{GENERAL_FALLBACK}\n\n{SPECIALTY_REMINDER}"
        assert result.metadata["classifier_fallback"] is True

    @patch('core.router.generate_structured_output')
    def test_module_level_process_query(self, mock_router):
        mock_router.side_effect = RuntimeError("boom")

        result = process_query("2 + 2")

        assert result.intent == "error"
