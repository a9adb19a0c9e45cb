"""
Unit Tests for the LLM Service

The Gemini SDK is patched; no network calls are made.
"""

import os
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from google.api_core import exceptions as google_exceptions

from ai import llm_service
from ai.llm_service import (
    call_llm,
    call_llm_with_tools,
    generate_structured_output,
    parse_json_output,
    retry_on_error,
    health_check,
    REQUEST_OPTIONS,
)


def text_part(text):
    return SimpleNamespace(function_call=None, text=text)


def call_part(name, **args):
    return SimpleNamespace(function_call=SimpleNamespace(name=name, args=args), text="")


def fake_response(parts=None, text=None):
    """Gemini response double with one candidate."""
    response = MagicMock()
    response.candidates = [SimpleNamespace(content=SimpleNamespace(parts=parts or []))]
    response.text = text
    return response


@pytest.fixture
def api_key():
    with patch.object(llm_service, "GOOGLE_API_KEY", "test-key"):
        yield


@pytest.fixture
def mock_model(api_key):
    with patch('ai.llm_service.genai.GenerativeModel') as model_cls:
        yield model_cls.return_value


class TestParseJsonOutput:
    """Test parse_json_output."""

    def test_plain_json(self):
        assert parse_json_output('{"answer": "4"}') == {"answer": "4"}

    def test_fenced_json(self):
        assert parse_json_output('```json\n{"answer": "4"}\n```') == {"answer": "4"}

    def test_json_with_surrounding_prose(self):
        text = 'Here is the result: {"explanation": "F = ma"} Hope that helps!'
        assert parse_json_output(text) == {"explanation": "F = ma"}

    @pytest.mark.parametrize("text", [None, "", "   ", "no json here", "[1, 2]", "{broken"])
    def test_unparseable_returns_none(self, text):
        assert parse_json_output(text) is None


class TestRetryOnError:
    """Test retry_on_error decorator."""

    @patch('ai.llm_service.time.sleep')
    def test_retries_transient_errors(self, mock_sleep):
        calls = {"n": 0}

        @retry_on_error(max_retries=2, delay=1.0)
        def flaky():
            calls["n"] += 1
            if calls["n"] == 1:
                raise google_exceptions.ResourceExhausted("429 quota exceeded")
            return "ok"

        assert flaky() == "ok"
        assert calls["n"] == 2
        mock_sleep.assert_called_once_with(1.0)

    @patch('ai.llm_service.time.sleep')
    def test_gives_up_after_max_retries(self, mock_sleep):
        func = MagicMock(side_effect=google_exceptions.ServiceUnavailable("503 Service Unavailable"))
        func.__name__ = "func"

        with pytest.raises(google_exceptions.ServiceUnavailable):
            retry_on_error(max_retries=2, delay=0.5)(func)()

        assert func.call_count == 2

    @patch('ai.llm_service.time.sleep')
    @pytest.mark.parametrize("error", [
        ValueError("bad request"),
        ValueError("LLM did not return valid JSON: Expecting value (char 500)"),
        RuntimeError("429 in the message only"),
        google_exceptions.InvalidArgument("400 API key not valid"),
    ])
    def test_non_transient_errors_raise_immediately(self, mock_sleep, error):
        func = MagicMock(side_effect=error)
        func.__name__ = "func"

        with pytest.raises(type(error)):
            retry_on_error(max_retries=3)(func)()

        assert func.call_count == 1
        mock_sleep.assert_not_called()


class TestCallLlm:
    """Test plain text calls."""

    def test_missing_api_key(self):
        with patch.object(llm_service, "GOOGLE_API_KEY", None):
            with pytest.raises(RuntimeError, match="GOOGLE_API_KEY"):
                call_llm("hello")

    def test_returns_text_with_timeout(self, mock_model):
        mock_model.generate_content.return_value = fake_response(text="OK")

        assert call_llm("Say OK") == "OK"
        assert mock_model.generate_content.call_args.kwargs["request_options"] == REQUEST_OPTIONS


class TestCallLlmWithTools:
    """Test function-calling responses."""

    def test_tool_calls_extracted(self, mock_model):
        mock_model.generate_content.return_value = fake_response(
            parts=[call_part("calculator", expression="25 * 11")]
        )

        result = call_llm_with_tools("What is 25 into 11?", tools=[{"name": "calculator"}])

        assert result["tool_calls"] == [{"name": "calculator", "args": {"expression": "25 * 11"}}]
        assert result["response_text"] is None
        assert result["model_content"] is not None

    def test_text_parts_joined(self, mock_model):
        mock_model.generate_content.return_value = fake_response(
            parts=[text_part('{"answer": '), text_part('"4"}')]
        )

        result = call_llm_with_tools([{"role": "user", "parts": ["2+2"]}], tools=[])

        assert result["tool_calls"] == []
        assert result["response_text"] == '{"answer": "4"}'

    def test_no_candidates(self, mock_model):
        response = MagicMock()
        response.candidates = []
        mock_model.generate_content.return_value = response

        result = call_llm_with_tools("hi", tools=[])

        assert result["response_text"] is None
        assert result["tool_calls"] == []


class TestGenerateStructuredOutput:
    """Test JSON-mode calls."""

    def test_valid_object(self, mock_model):
        mock_model.generate_content.return_value = fake_response(text='{"intent": "math"}')

        assert generate_structured_output("2+2", schema={}) == {"intent": "math"}

    def test_invalid_json_raises_value_error(self, mock_model):
        mock_model.generate_content.return_value = fake_response(text="not json")

        with pytest.raises(ValueError):
            generate_structured_output("2+2", schema={})

    @patch('ai.llm_service.time.sleep')
    def test_invalid_json_is_requested_once(self, mock_sleep, mock_model):
        # Long enough that the decode error mentions a 3-digit char offset
        text = '{"intent": "math"' + " " * 480 + "x"
        mock_model.generate_content.return_value = fake_response(text=text)

        with pytest.raises(ValueError):
            generate_structured_output("2+2", schema={"type": "object"})

        assert mock_model.generate_content.call_count == 1
        mock_sleep.assert_not_called()

    @patch('ai.llm_service.time.sleep')
    def test_rate_limit_is_retried(self, mock_sleep, mock_model):
        mock_model.generate_content.side_effect = [
            google_exceptions.TooManyRequests("429 Too Many Requests"),
            fake_response(text='{"intent": "physics"}'),
        ]

        assert generate_structured_output("g?", schema={}) == {"intent": "physics"}
        assert mock_model.generate_content.call_count == 2

    def test_non_object_raises_value_error(self, mock_model):
        mock_model.generate_content.return_value = fake_response(text='["math"]')

        with pytest.raises(ValueError):
            generate_structured_output("2+2", schema={})


class TestHealthCheck:
    """Test health_check."""

    @patch('ai.llm_service.validate_model_available', return_value=True)
    @patch('ai.llm_service.call_llm', return_value="4")
    def test_healthy(self, mock_call, mock_available):
        status = health_check()

        assert "healthy" in status["gemini_api"]
        assert status["model_available"] is True

    @patch('ai.llm_service.validate_model_available', return_value=False)
    @patch('ai.llm_service.call_llm', side_effect=RuntimeError("no key"))
    def test_error(self, mock_call, mock_available):
        status = health_check()

        assert status["gemini_api"].startswith("❌")


@pytest.mark.integration
@pytest.mark.skipif(not os.getenv("GOOGLE_API_KEY"), reason="GOOGLE_API_KEY not set")
class TestLiveGemini:
    """Live API checks; deselected by default."""

    def test_classify_math(self):
        from core import classify_intent, IntentType

        assert classify_intent("What is 25 times 11?").intent == IntentType.MATH

    def test_math_turn(self):
        from core import process_query

        result = process_query("What is 25 into 11?")

        assert result.intent == "math"
        assert "275" in result.text
