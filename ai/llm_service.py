"""
LLM Service - Gemini API Wrapper with Langfuse Observability

This service provides a robust interface to Google's Gemini API with:
- Automatic retry logic with exponential backoff
- An explicit per-request timeout
- Langfuse tracing for all LLM calls
- Token usage tracking
- Support for function calling (tools)
- Structured JSON output

All LLM interactions in TutorVerse should use this service.
"""

import re
import time
import json
import logging
from typing import Optional, Dict, List, Any
from functools import wraps

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import GenerationConfig, HarmCategory, HarmBlockThreshold
from langfuse import Langfuse, observe, get_client

from config import (
    GOOGLE_API_KEY,
    GEMINI_MODEL,
    TEMPERATURE,
    MAX_TOKENS,
    TOP_P,
    TOP_K,
    MAX_RETRIES,
    RETRY_DELAY,
    TIMEOUT,
    LANGFUSE_PUBLIC_KEY,
    LANGFUSE_SECRET_KEY,
    LANGFUSE_HOST,
    LANGFUSE_ENABLED,
)

logger = logging.getLogger(__name__)

# ============================================================================
# INITIALIZATION
# ============================================================================

# Configure Gemini API (calls fail with a clear error if the key is missing)
if GOOGLE_API_KEY:
    genai.configure(api_key=GOOGLE_API_KEY)

# Initialize Langfuse client (if enabled)
_langfuse_client: Optional[Langfuse] = None

if LANGFUSE_ENABLED:
    try:
        _langfuse_client = Langfuse(
            public_key=LANGFUSE_PUBLIC_KEY,
            secret_key=LANGFUSE_SECRET_KEY,
            host=LANGFUSE_HOST,
        )
        logger.info("✅ Langfuse observability initialized")
    except Exception as e:
        logger.warning(f"⚠️  Langfuse initialization failed: {e}. Continuing without tracing.")
        _langfuse_client = None
else:
    logger.info("ℹ️  Langfuse observability disabled")


def get_langfuse_client() -> Optional[Langfuse]:
    """Get the Langfuse client instance."""
    return _langfuse_client


def _record_usage(response: Any, model_name: str) -> None:
    """Attach token usage to the current Langfuse generation."""
    usage = getattr(response, "usage_metadata", None)
    if usage is None:
        return

    if _langfuse_client:
        get_client().update_current_generation(
            model=model_name,
            usage_details={
                "input": usage.prompt_token_count,
                "output": usage.candidates_token_count,
                "total": usage.total_token_count,
            },
        )

    logger.debug(
        f"📊 Tokens: {usage.prompt_token_count} in, "
        f"{usage.candidates_token_count} out"
    )


def _require_api_key() -> None:
    if not GOOGLE_API_KEY:
        raise RuntimeError(
            "GOOGLE_API_KEY not found in environment variables. "
            "Please set it in your .env file."
        )


# ============================================================================
# SAFETY SETTINGS
# ============================================================================

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}

REQUEST_OPTIONS = {"timeout": TIMEOUT}


# ============================================================================
# GENERATION CONFIGURATION
# ============================================================================

def get_generation_config(
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    top_p: Optional[float] = None,
    top_k: Optional[int] = None,
    response_mime_type: Optional[str] = None,
    response_schema: Optional[Dict] = None,
) -> GenerationConfig:
    """
    Create a generation configuration for Gemini API calls.

    Args:
        temperature: Sampling temperature (0.0 - 2.0). Defaults to config value.
        max_tokens: Maximum tokens to generate. Defaults to config value.
        top_p: Nucleus sampling parameter. Defaults to config value.
        top_k: Top-k sampling parameter. Defaults to config value.
        response_mime_type: MIME type for structured output (e.g., "application/json")
        response_schema: JSON schema for structured output validation

    Returns:
        GenerationConfig object
    """
    config_dict = {
        "temperature": TEMPERATURE if temperature is None else temperature,
        "max_output_tokens": max_tokens or MAX_TOKENS,
        "top_p": top_p or TOP_P,
        "top_k": top_k or TOP_K,
    }

    # Add structured output configuration if provided
    if response_mime_type:
        config_dict["response_mime_type"] = response_mime_type
    if response_schema:
        config_dict["response_schema"] = response_schema

    return GenerationConfig(**config_dict)


# ============================================================================
# RETRY DECORATOR
# ============================================================================

RETRYABLE_ERRORS = (
    google_exceptions.TooManyRequests,
    google_exceptions.ResourceExhausted,
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
    TimeoutError,
)


def _is_retryable(error: Exception) -> bool:
    # Invalid or empty model output surfaces as ValueError and is never retried
    return isinstance(error, RETRYABLE_ERRORS)


def retry_on_error(max_retries: int = MAX_RETRIES, delay: float = RETRY_DELAY):
    """
    Decorator to retry function calls on transient backend errors.
    Implements exponential backoff.

    Only the API errors in RETRYABLE_ERRORS (rate limits, timeouts, 5xx)
    are retried; anything else is re-raised immediately.

    Args:
        max_retries: Maximum number of attempts (including the first)
        delay: Initial delay between retries (seconds)
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            current_delay = delay

            while True:
                attempt += 1
                try:
                    return func(*args, **kwargs)

                except Exception as e:
                    error_type = type(e).__name__

                    if not _is_retryable(e) or attempt >= max_retries:
                        logger.error(f"❌ {func.__name__} failed: {error_type}: {e}")
                        raise

                    logger.warning(
                        f"⚠️  {func.__name__} failed (attempt {attempt}/{max_retries}): "
                        f"{error_type}. Retrying in {current_delay}s..."
                    )

                    time.sleep(current_delay)
                    current_delay *= 2  # Exponential backoff

        return wrapper
    return decorator


# ============================================================================
# CORE LLM FUNCTIONS
# ============================================================================

@observe(name="call_llm", as_type="generation")
@retry_on_error()
def call_llm(
    prompt: str,
    system_instruction: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    model_name: Optional[str] = None,
) -> str:
    """
    Make a basic LLM call to Gemini API with Langfuse tracing.

    Args:
        prompt: The user prompt/query
        system_instruction: System prompt to set agent behavior
        temperature: Sampling temperature (overrides default)
        max_tokens: Max output tokens (overrides default)
        model_name: Model to use (overrides default)

    Returns:
        Generated text response

    Raises:
        Exception: If API call fails after retries
    """
    _require_api_key()
    model_name = model_name or GEMINI_MODEL

    model = genai.GenerativeModel(
        model_name=model_name,
        generation_config=get_generation_config(temperature, max_tokens),
        safety_settings=SAFETY_SETTINGS,
        system_instruction=system_instruction,
    )

    start_time = time.time()
    response = model.generate_content(prompt, request_options=REQUEST_OPTIONS)
    latency = time.time() - start_time

    if not response.candidates:
        raise Exception("No response candidates returned from Gemini API")

    _record_usage(response, model_name)
    logger.debug(f"⏱️  call_llm completed in {latency:.2f}s")

    return response.text


@observe(name="call_llm_with_tools", as_type="generation", capture_output=False)
@retry_on_error()
def call_llm_with_tools(
    contents: Any,
    tools: List[Dict],
    system_instruction: Optional[str] = None,
    temperature: Optional[float] = None,
    model_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Make an LLM call with function calling (tools) enabled.

    `contents` may be a single prompt string or the running list of turns
    of a tool round-trip: the user prompt, the model's function-call
    content, and the function responses fed back to it.

    Args:
        contents: Prompt string or list of Gemini content entries
        tools: List of tool definitions (function calling schemas)
        system_instruction: System prompt
        temperature: Sampling temperature
        model_name: Model to use

    Returns:
        Dict with:
            - response_text: The text response (if any)
            - tool_calls: List of {"name", "args"} requested by the LLM
            - model_content: The model turn, to append before function responses
            - raw_response: Full API response object
            - latency: Seconds spent in the API call
    """
    _require_api_key()
    model_name = model_name or GEMINI_MODEL

    model = genai.GenerativeModel(
        model_name=model_name,
        generation_config=get_generation_config(temperature),
        safety_settings=SAFETY_SETTINGS,
        system_instruction=system_instruction,
        tools=tools or None,
    )

    start_time = time.time()
    response = model.generate_content(contents, request_options=REQUEST_OPTIONS)
    latency = time.time() - start_time

    result = {
        "response_text": None,
        "tool_calls": [],
        "model_content": None,
        "raw_response": response,
        "latency": latency,
    }

    if response.candidates:
        candidate = response.candidates[0]
        result["model_content"] = candidate.content

        text_parts = []
        for part in candidate.content.parts:
            if getattr(part, "function_call", None) and part.function_call.name:
                func_call = part.function_call
                result["tool_calls"].append({
                    "name": func_call.name,
                    "args": dict(func_call.args),
                })
            elif getattr(part, "text", None):
                text_parts.append(part.text)

        if text_parts:
            result["response_text"] = "".join(text_parts)

    _record_usage(response, model_name)
    logger.debug(f"🔧 Tool call: {len(result['tool_calls'])} functions, ⏱️  {latency:.2f}s")

    return result


@observe(name="generate_structured_output", as_type="generation")
@retry_on_error()
def generate_structured_output(
    prompt: str,
    schema: Dict,
    system_instruction: Optional[str] = None,
    temperature: Optional[float] = None,
    model_name: Optional[str] = None,
) -> Dict:
    """
    Generate structured JSON output conforming to a specific schema.

    Args:
        prompt: The user prompt/query
        schema: JSON schema defining the expected output structure
        system_instruction: System prompt
        temperature: Sampling temperature
        model_name: Model to use

    Returns:
        Parsed JSON object matching the schema

    Raises:
        ValueError: If the response has no text or is not a JSON object
    """
    _require_api_key()
    model_name = model_name or GEMINI_MODEL

    model = genai.GenerativeModel(
        model_name=model_name,
        generation_config=get_generation_config(
            temperature=temperature,
            response_mime_type="application/json",
            response_schema=schema,
        ),
        safety_settings=SAFETY_SETTINGS,
        system_instruction=system_instruction,
    )

    start_time = time.time()
    response = model.generate_content(prompt, request_options=REQUEST_OPTIONS)
    latency = time.time() - start_time

    _record_usage(response, model_name)

    # response.text raises ValueError when the candidate was blocked or empty
    text = response.text

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"❌ Invalid JSON from LLM: {text[:200]}...")
        raise ValueError(f"LLM did not return valid JSON: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"LLM returned JSON {type(data).__name__}, expected an object")

    logger.debug(f"📋 Structured output generated in {latency:.2f}s")

    return data


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def parse_json_output(text: Optional[str]) -> Optional[Dict]:
    """
    Extract a JSON object from free-form model text.

    Tool-using calls cannot run in JSON mode, so the model is asked to
    reply with a JSON object and may wrap it in a Markdown fence or add
    prose around it.

    Args:
        text: Raw model text

    Returns:
        The parsed object, or None if no JSON object could be recovered
    """
    if not text or not text.strip():
        return None

    candidates = [text.strip()]

    fenced = _FENCE_RE.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())

    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    return None


def validate_model_available(model_name: str) -> bool:
    """
    Check if a specific model is available via the API.

    Args:
        model_name: Name of the model to check

    Returns:
        True if model is available, False otherwise
    """
    try:
        available_models = [m.name for m in genai.list_models()]
        full_name = f"models/{model_name}"
        return full_name in available_models
    except Exception as e:
        logger.error(f"Failed to check model availability: {e}")
        return False


# ============================================================================
# HEALTH CHECK
# ============================================================================

def health_check() -> Dict[str, Any]:
    """
    Probe Gemini with a one-line arithmetic question and report tracing state.

    Returns:
        Dict with keys gemini_api, model, model_available, timeout, langfuse
    """
    status = {
        "gemini_api": "unknown",
        "model": GEMINI_MODEL,
        "model_available": False,
        "timeout": TIMEOUT,
        "langfuse": "➖ disabled",
    }

    try:
        reply = call_llm("What is 2 + 2? Reply with the number only.", temperature=0.0)
        status["gemini_api"] = "✅ healthy" if "4" in reply else f"⚠️  unexpected reply: {reply[:40]!r}"
    except Exception as e:
        status["gemini_api"] = f"❌ error: {str(e)[:100]}"

    status["model_available"] = validate_model_available(GEMINI_MODEL)

    if _langfuse_client:
        try:
            status["langfuse"] = "✅ connected" if _langfuse_client.auth_check() else "⚠️  auth failed"
        except Exception as e:
            status["langfuse"] = f"⚠️  {str(e)[:50]}"

    return status
