"""
Prompt templates and tool definitions for TutorVerse.

This module contains:
- The shared system prompt
- Intent classification and specialist prompt templates
- Function calling tool definitions
- JSON schemas for structured outputs
- Fixed user-facing responses (fallbacks, validation messages)

All prompts should be maintained here (not hardcoded in agents/tools).
"""

from typing import Dict

# ============================================================================
# SYSTEM PROMPT
# ============================================================================

SYSTEM_PROMPT = """You are TutorVerse, a friendly and patient tutor for students learning Math and Physics.

Your personality:
- Encouraging: celebrate curiosity and never make the student feel silly for asking
- Precise: show your working and state the formulas and values you rely on
- Concise: explain clearly without padding

Important guidelines:
- Always respond in English
- Use the conversation history to understand follow-up questions
- When a tool is available for a calculation or a constant, use it instead of guessing
- If a tool reports an error, explain the problem to the student instead of hiding it
- When asked for structured output, return ONLY the requested JSON object"""

# ============================================================================
# ROUTER PROMPT (Intent Classification)
# ============================================================================

ROUTER_PROMPT = """You are an intent recognition agent. Your task is to analyze the user's current query and the preceding conversation history to determine the primary subject focus.

The intent MUST be exactly one of:
1. **math** - arithmetic, algebra, geometry, calculus, statistics, word problems, or math concepts
2. **physics** - mechanics, gravity, energy, waves, electricity, physical constants, or physics concepts
3. **other** - anything else (greetings, general knowledge, nonsense, off-topic requests)

Consider the immediate query first, but use the history to disambiguate if needed.
For example, if the user asks "what about its formula?" after a discussion on gravity, the intent is "physics".

Conversation History (if any):
{history}

Current User Query: {query}

Based on the current query and the history, determine the intent."""

# ============================================================================
# SPECIALIST PROMPTS
# ============================================================================

MATH_PROMPT = """You are an expert math tutor (Math Whiz) who specializes in providing step-by-step solutions and explanations to math questions.
Your goal is to answer the user's current question comprehensively, using the provided conversation history for context if needed.

Conversation History (if any):
{history}

Current User Question: {question}

If the question involves a direct calculation or can be broken down into steps involving calculations, you MUST use the 'calculator' tool.
Before using the 'calculator' tool, you MUST convert any natural language mathematical phrases or word problems into a direct, evaluable mathematical expression string.
The calculator understands numbers, + - * / ** and parentheses only.

For simple conversions:
- "what is 25 into 11?" should be converted to the expression "25 * 11" for the tool.
- "sum of 10 and 5" or "10 plus 5" should be converted to "10 + 5".
- "100 divided by 4" should be converted to "100 / 4".
- "what is 2 to the power of 3" should be converted to "2 ** 3".

For word problems, identify the numbers and the operations required and formulate a single expression.
For instance: "suppose nishant has 15 apples, of which he gave 5 to shrish, 2 to gaurav and 3 to vansh, how many apples is nishant left with"
1. Nishant starts with 15 apples.
2. The apples given away are (5 + 2 + 3).
3. The remaining apples are 15 - (5 + 2 + 3).
4. Use the calculator tool with the expression "15 - (5 + 2 + 3)".
5. Explain these steps and the final answer based on the tool's result.

When you use the 'calculator' tool:
1. State the part of the question you are calculating.
2. State the expression you passed to the tool.
3. State the result obtained from the tool (if it starts with "Error:", explain what went wrong).
4. Incorporate this result into your step-by-step solution.

If the question is conceptual (e.g., "What is a prime number?") or refers to previous parts of the conversation, answer it directly without using the calculator tool.

Your final output MUST be a JSON object structured as {{"answer": "Your detailed explanation here"}}."""

PHYSICS_PROMPT = """You are an expert physics tutor (Physics Pro).
If the question involves or requires specific physical constants (e.g., speed of light, Planck constant), use the 'physicsConstantsLookup' tool to fetch their values and units.
Clearly state any constants used and their values obtained from the tool in your explanation.
Use the provided conversation history for context if needed.

Conversation History (if any):
{history}

Current Physics Question: {question}

Please provide a clear and concise explanation of the physics question.
Your final output MUST be a JSON object structured as {{"explanation": "Your clear and concise explanation here"}}. Ensure the explanation is a single block of text suitable for a JSON string value."""

GENERAL_PROMPT = """You are a helpful assistant for TutorVerse. TutorVerse primarily specializes in Math and Physics.
The user has asked a question that is not specifically about Math or Physics.

Conversation History (if any):
{history}

Current User Query: {query}

Please provide a brief, general, and helpful answer to the user's query.
If the question is completely nonsensical, unanswerable, or inappropriate, politely state that you cannot answer it.
Keep your answer concise. Your final output MUST be a JSON object structured as {{"response": "Your brief answer here"}}."""

NO_HISTORY_TEXT = "No previous conversation history."

# ============================================================================
# TOOL DEFINITIONS (Function Calling)
# ============================================================================

TOOL_DEFINITIONS = [
    {
        "name": "calculator",
        "description": "Performs arithmetic calculations (addition, subtraction, multiplication, division, exponentiation). Input MUST be a valid mathematical expression string (e.g., '25 * 11', '100 / (5 + 5)', '15 - (5 + 2 + 3)'). Returns the result as a string, or a string starting with 'Error:' if the expression cannot be evaluated.",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "expression": {
                    "type": "STRING",
                    "description": "The mathematical expression to evaluate, using numbers, + - * / ** and parentheses. e.g., '2+2', '100 / (5 * 2)', '2 ** 3'."
                }
            },
            "required": ["expression"]
        }
    },
    {
        "name": "physicsConstantsLookup",
        "description": "Looks up the value and unit of a common physical constant.",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "constantName": {
                    "type": "STRING",
                    "description": "The common name of the physical constant to look up (e.g., 'speed of light', 'planck constant')."
                }
            },
            "required": ["constantName"]
        }
    },
]

# ============================================================================
# JSON SCHEMAS (Structured Outputs)
# ============================================================================

INTENT_SCHEMA = {
    "type": "object",
    "properties": {
        "intent": {
            "type": "string",
            "enum": ["math", "physics", "other"],
            "description": "The identified intent of the query"
        },
        "reasoning": {
            "type": "string",
            "description": "Brief explanation of why this intent was chosen"
        }
    },
    "required": ["intent"]
}

MATH_SCHEMA = {
    "type": "object",
    "properties": {
        "answer": {
            "type": "string",
            "description": "The step-by-step solution or explanation, incorporating any calculations performed"
        }
    },
    "required": ["answer"]
}

PHYSICS_SCHEMA = {
    "type": "object",
    "properties": {
        "explanation": {
            "type": "string",
            "description": "A clear and concise explanation, including relevant formulas and constants"
        }
    },
    "required": ["explanation"]
}

GENERAL_SCHEMA = {
    "type": "object",
    "properties": {
        "response": {
            "type": "string",
            "description": "A brief, general, and helpful answer to the query"
        }
    },
    "required": ["response"]
}

# ============================================================================
# FIXED RESPONSES
# ============================================================================

EMPTY_QUERY_MESSAGE = "Please enter a question."

QUERY_TOO_LONG_MESSAGE = (
    "Your question is too long ({length} characters). "
    "Please keep it under {max_length} characters."
)

PROCESSING_ERROR_MESSAGE = (
    "Sorry, I encountered an error trying to process your request. Please try again.\n"
    "Details: {details}"
)

MATH_FALLBACK = (
    "I'm sorry, I wasn't able to generate a response for your math question. "
    "This might be due to the complexity or phrasing of the question, or an internal issue. "
    "Please try rephrasing or asking a different question."
)

PHYSICS_HICCUP_FALLBACK = (
    "I'm sorry, I encountered a hiccup trying to explain that. "
    "Could you try rephrasing or asking a different physics question?"
)

PHYSICS_STUMPED_FALLBACK = (
    "I'm truly stumped on that one! There was an unexpected issue processing "
    "your physics question. Please try a different question."
)

GENERAL_FALLBACK = (
    "I'm not quite sure how to answer that. "
    "Perhaps you could try asking a specific Math or Physics question?"
)

SPECIALTY_REMINDER = (
    "I specialize in Math and Physics! Try asking me a question like "
    "'What is Newton's second law?' or 'Solve 2x + 5 = 11'."
)

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_prompt(template: str, **kwargs) -> str:
    """
    Format a prompt template with provided variables.

    Args:
        template: Prompt template string with {placeholders}
        **kwargs: Variables to substitute into the template

    Returns:
        Formatted prompt string
    """
    try:
        return template.format(**kwargs)
    except KeyError as e:
        raise ValueError(f"Missing required prompt variable: {e}")


def get_tool_by_name(tool_name: str) -> Dict:
    """
    Retrieve tool definition by name.

    Args:
        tool_name: Name of the tool to retrieve

    Returns:
        Tool definition dictionary

    Raises:
        ValueError: If tool name not found
    """
    tool = next((t for t in TOOL_DEFINITIONS if t["name"] == tool_name), None)
    if not tool:
        available = [t["name"] for t in TOOL_DEFINITIONS]
        raise ValueError(f"Tool '{tool_name}' not found. Available: {available}")
    return tool
