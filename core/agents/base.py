"""
Specialist Agent Base

Shared machinery for the math, physics and general specialists:
1. Render the specialist's prompt with the question and prior turns
2. Call the LLM, executing any tool calls it requests and feeding the
   results back until it produces a final answer
3. Validate the structured output (one required string field)
4. Substitute a fixed fallback when the output is missing or malformed

Agents hold no per-turn state; everything about a single turn lives in
the AgentRun returned by `run()`.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ai import call_llm_with_tools, generate_structured_output, parse_json_output
from config import SYSTEM_PROMPT, MAX_TOOL_CALLS, format_prompt, get_tool_by_name
from tools import get_tool_registry
from ..history import HistoryItem, format_history

logger = logging.getLogger(__name__)

TOOL_LIMIT_MESSAGE = "Tool call limit reached. Answer with the results you already have."


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class ToolResult:
    """
    Result from a tool execution.

    Attributes:
        tool_name: Name of the tool that was called
        success: Whether the tool executed successfully
        result: The actual result data
        error: Error message if unsuccessful
        execution_time: Time taken to execute (seconds)
        args: Arguments the LLM supplied
    """
    tool_name: str
    success: bool
    result: Any = None
    error: Optional[str] = None
    execution_time: float = 0.0
    args: Dict[str, Any] = field(default_factory=dict)

    def to_response(self) -> Dict[str, Any]:
        """Payload sent back to the LLM as the function response."""
        if not self.success:
            return {"error": self.error}
        if isinstance(self.result, dict):
            return self.result
        return {"result": self.result}


@dataclass
class AgentRun:
    """Everything that happened while an agent answered one question."""
    question: str
    history: List[HistoryItem]
    output: Dict[str, str] = field(default_factory=dict)
    tool_results: List[ToolResult] = field(default_factory=list)
    raw_output: Any = None
    used_fallback: bool = False
    execution_time: float = 0.0

    @property
    def tools_used(self) -> List[str]:
        return [tr.tool_name for tr in self.tool_results]


def validate_agent_output(data: Any, output_field: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a specialist's structured output.

    Args:
        data: Parsed model output (may be None)
        output_field: The single required string field

    Returns:
        Tuple of (is_valid, error_message)
    """
    if data is None:
        return False, "No structured output returned"

    if not isinstance(data, dict):
        return False, f"Output must be an object, got {type(data).__name__}"

    value = data.get(output_field)

    if not isinstance(value, str):
        return False, f"Missing string field '{output_field}'"

    if not value.strip():
        return False, f"Field '{output_field}' is empty"

    return True, None


# ============================================================================
# SPECIALIST AGENT
# ============================================================================

class SpecialistAgent:
    """
    Base class for prompt-driven specialist agents.

    Subclasses set the prompt template, the output field and schema, the
    tools they may call and their fallback text.
    """

    name = "specialist"
    prompt_template = ""
    query_placeholder = "question"
    output_field = ""
    schema: Dict = {}
    tool_names: Tuple[str, ...] = ()
    fallback_text = ""
    temperature = 0.5

    def __init__(
        self,
        tool_registry: Optional[Dict[str, Callable]] = None,
        max_tool_calls: int = MAX_TOOL_CALLS,
    ):
        """
        Initialize the agent.

        Args:
            tool_registry: Mapping of tool names to callables (defaults to
                tools.get_tool_registry())
            max_tool_calls: Maximum tool executions per question
        """
        registry = tool_registry if tool_registry is not None else get_tool_registry()
        self.tool_registry = {n: registry[n] for n in self.tool_names if n in registry}
        self.tool_definitions = [get_tool_by_name(n) for n in self.tool_registry]
        self.max_tool_calls = max_tool_calls

    def generate(self, question: str, history: Optional[List[HistoryItem]] = None) -> Dict[str, str]:
        """
        Answer a question.

        Args:
            question: The user's question
            history: Prior turns, oldest first

        Returns:
            Single-field dict, e.g. {"answer": "..."}
        """
        return self.run(question, history).output

    def run(self, question: str, history: Optional[List[HistoryItem]] = None) -> AgentRun:
        """Answer a question and return the full run record."""
        state = AgentRun(question=question, history=list(history or []))
        start_time = time.time()

        prompt = self.build_prompt(question, state.history)

        if self.tool_registry:
            state.raw_output = self._run_tool_loop(prompt, state)
        else:
            state.raw_output = self._request_structured_output(prompt)

        is_valid, error = validate_agent_output(state.raw_output, self.output_field)

        if is_valid:
            state.output = {self.output_field: state.raw_output[self.output_field]}
        else:
            self._log_fallback(state, error)
            state.output = {self.output_field: self.fallback_text}
            state.used_fallback = True

        state.execution_time = time.time() - start_time
        logger.info(
            f"✅ {self.name} agent finished in {state.execution_time:.2f}s "
            f"({len(state.tool_results)} tool calls, fallback={state.used_fallback})"
        )
        return state

    def build_prompt(self, question: str, history: List[HistoryItem]) -> str:
        return format_prompt(
            self.prompt_template,
            history=format_history(history),
            **{self.query_placeholder: question},
        )

    # ------------------------------------------------------------------------
    # LLM interaction
    # ------------------------------------------------------------------------

    def _request_structured_output(self, prompt: str) -> Optional[Dict]:
        """Single JSON-mode call for agents without tools."""
        try:
            return generate_structured_output(
                prompt=prompt,
                schema=self.schema,
                system_instruction=SYSTEM_PROMPT,
                temperature=self.temperature,
            )
        except ValueError as e:
            logger.warning(f"⚠️  {self.name} agent got unusable output: {e}")
            return None

    def _run_tool_loop(self, prompt: str, state: AgentRun) -> Optional[Dict]:
        """
        Call the LLM with tools until it stops requesting them.

        Each round appends the model's function-call turn and the function
        responses to the running contents. Calls beyond the tool budget are
        answered with an error payload instead of being executed.
        """
        contents: List[Any] = [{"role": "user", "parts": [prompt]}]

        for _ in range(self.max_tool_calls + 1):
            result = call_llm_with_tools(
                contents=contents,
                tools=self.tool_definitions,
                system_instruction=SYSTEM_PROMPT,
                temperature=self.temperature,
            )

            tool_calls = result.get("tool_calls") or []

            if not tool_calls:
                text = result.get("response_text")
                parsed = parse_json_output(text)
                return parsed if parsed is not None else text

            contents.append(result["model_content"])

            response_parts = []
            for tool_call in tool_calls:
                tool_name = tool_call["name"]
                tool_args = tool_call.get("args") or {}

                if len(state.tool_results) >= self.max_tool_calls:
                    logger.warning(f"⚠️  {self.name} agent hit the tool call limit ({self.max_tool_calls})")
                    payload = {"error": TOOL_LIMIT_MESSAGE}
                else:
                    logger.info(f"🔧 Calling tool: {tool_name} with args: {tool_args}")
                    tool_result = self._execute_tool(tool_name, tool_args)
                    state.tool_results.append(tool_result)
                    payload = tool_result.to_response()

                response_parts.append({
                    "function_response": {"name": tool_name, "response": payload}
                })

            contents.append({"role": "user", "parts": response_parts})

        logger.warning(f"⚠️  {self.name} agent did not produce a final answer")
        return None

    def _execute_tool(self, tool_name: str, tool_args: Dict[str, Any]) -> ToolResult:
        """
        Execute a specific tool with given arguments.

        Args:
            tool_name: Name of the tool to execute
            tool_args: Arguments to pass to the tool

        Returns:
            ToolResult with execution outcome
        """
        start_time = time.time()

        if tool_name not in self.tool_registry:
            return ToolResult(
                tool_name=tool_name,
                success=False,
                error=f"Tool '{tool_name}' not found in registry",
                execution_time=time.time() - start_time,
                args=tool_args,
            )

        tool_func = self.tool_registry[tool_name]

        try:
            result = tool_func(**tool_args)

            return ToolResult(
                tool_name=tool_name,
                success=True,
                result=result,
                execution_time=time.time() - start_time,
                args=tool_args,
            )

        except Exception as e:
            logger.error(f"Tool {tool_name} execution failed: {e}", exc_info=True)

            return ToolResult(
                tool_name=tool_name,
                success=False,
                error=str(e),
                execution_time=time.time() - start_time,
                args=tool_args,
            )

    # ------------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------------

    def _log_fallback(self, state: AgentRun, reason: Optional[str]) -> None:
        logger.error(
            f"❌ {self.name} agent output invalid for question {state.question!r} "
            f"(history: {serialize_history(state.history)}): {reason}. "
            f"Raw output: {state.raw_output!r}. Falling back to a default message."
        )


def serialize_history(history: List[HistoryItem]) -> str:
    """JSON rendering of history for log lines."""
    return json.dumps([item.to_dict() for item in history], ensure_ascii=False)
