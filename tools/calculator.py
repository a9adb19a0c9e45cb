"""
Calculator Tool

Arithmetic evaluation for the Math agent. Expressions are parsed by a small
recursive-descent parser that accepts numeric literals, + - * / **, unary
signs and parentheses. Any other token is rejected, so nothing the model
sends is ever executed as code.

Grammar:
    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("+" | "-") unary | power
    power      := primary ("**" unary)?
    primary    := NUMBER | "(" expression ")"

`**` binds tighter than unary minus and is right-associative, so
"-2 ** 2" is -4 and "2 ** 3 ** 2" is 512.
"""

import logging
import math
import re
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

MAX_EXPRESSION_LENGTH = 500
MAX_NESTING_DEPTH = 100

_NUMBER_RE = re.compile(r"(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class CalculationError(ValueError):
    """Raised when an expression cannot be evaluated to a finite real number."""


# ============================================================================
# TOKENIZER
# ============================================================================

def tokenize(expression: str) -> List[Tuple[str, str, int]]:
    """
    Split an expression into (kind, text, position) tokens.

    Kinds are "number" and "op". Whitespace is skipped.

    Raises:
        CalculationError: On any character that is not part of an arithmetic token
    """
    tokens = []
    pos = 0
    length = len(expression)

    while pos < length:
        char = expression[pos]

        if char.isspace():
            pos += 1
            continue

        if expression.startswith("**", pos):
            tokens.append(("op", "**", pos))
            pos += 2
            continue

        if char in "+-*/()":
            tokens.append(("op", char, pos))
            pos += 1
            continue

        match = _NUMBER_RE.match(expression, pos)
        if match:
            tokens.append(("number", match.group(0), pos))
            pos = match.end()
            continue

        raise CalculationError(f"Unexpected character '{char}' at position {pos}")

    return tokens


# ============================================================================
# PARSER
# ============================================================================

class _Parser:
    """Recursive-descent evaluator over a token list."""

    def __init__(self, tokens: List[Tuple[str, str, int]]):
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    def parse(self) -> float:
        if not self.tokens:
            raise CalculationError("Expression is empty")

        value = self._expression()

        if self.index < len(self.tokens):
            _, text, pos = self.tokens[self.index]
            raise CalculationError(f"Unexpected '{text}' at position {pos}")

        return value

    def _peek(self) -> str:
        if self.index < len(self.tokens):
            kind, text, _ = self.tokens[self.index]
            return text if kind == "op" else ""
        return ""

    def _advance(self) -> Tuple[str, str, int]:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _expression(self) -> float:
        value = self._term()
        while self._peek() in ("+", "-"):
            _, op, _ = self._advance()
            right = self._term()
            value = value + right if op == "+" else value - right
        return value

    def _term(self) -> float:
        value = self._unary()
        while self._peek() in ("*", "/"):
            _, op, _ = self._advance()
            right = self._unary()
            if op == "*":
                value = value * right
            else:
                if right == 0:
                    raise CalculationError("Division by zero")
                value = value / right
        return value

    def _unary(self) -> float:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise CalculationError("Expression is nested too deeply")
        try:
            if self._peek() in ("+", "-"):
                _, op, _ = self._advance()
                operand = self._unary()
                return -operand if op == "-" else operand
            return self._power()
        finally:
            self.depth -= 1

    def _power(self) -> float:
        base = self._primary()
        if self._peek() == "**":
            self._advance()
            exponent = self._unary()
            return _power(base, exponent)
        return base

    def _primary(self) -> float:
        if self.index >= len(self.tokens):
            raise CalculationError("Unexpected end of expression")

        kind, text, pos = self._advance()

        if kind == "number":
            return float(text)

        if text == "(":
            value = self._expression()
            if self._peek() != ")":
                raise CalculationError(f"Missing closing parenthesis for '(' at position {pos}")
            self._advance()
            return value

        raise CalculationError(f"Unexpected '{text}' at position {pos}")


def _power(base: float, exponent: float) -> float:
    if base == 0 and exponent < 0:
        raise CalculationError("Division by zero")
    try:
        return math.pow(base, exponent)
    except OverflowError:
        raise CalculationError("Result is too large")
    except ValueError:
        raise CalculationError("Result is not a real number")


# ============================================================================
# PUBLIC API
# ============================================================================

def evaluate_expression(expression: str) -> float:
    """
    Evaluate an arithmetic expression to a finite float.

    Args:
        expression: Expression using numbers, + - * / ** and parentheses

    Returns:
        The numeric result

    Raises:
        CalculationError: On invalid syntax, division by zero, or a
            non-finite / non-real result
    """
    if not isinstance(expression, str):
        raise CalculationError("Expression must be a string")

    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise CalculationError(
            f"Expression is too long (maximum {MAX_EXPRESSION_LENGTH} characters)"
        )

    value = _Parser(tokenize(expression)).parse()

    if math.isnan(value):
        raise CalculationError("Result is not a number (NaN)")
    if math.isinf(value):
        raise CalculationError("Result is not finite (Infinity)")

    return value


def format_number(value: float) -> str:
    """
    Render a result as a decimal string.

    Integral values print without a fractional part ("275", not "275.0").
    """
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def calculator(expression: str) -> Dict[str, str]:
    """
    Evaluate an arithmetic expression for the Math agent.

    Never raises: failures come back in-band as a result string starting
    with "Error:" so the agent can explain them to the student.

    Args:
        expression: Self-contained arithmetic expression (e.g. "15 - (5 + 2 + 3)")

    Returns:
        Dictionary with:
            - result (str): Decimal string of the result, or "Error: ..."

    Example:
        >>> calculator("25 * 11")
        {'result': '275'}
        >>> calculator("10 / 0")
        {'result': 'Error: Division by zero'}
    """
    logger.info(f"🧮 Evaluating expression: {expression!r}")

    try:
        value = evaluate_expression(expression)
    except CalculationError as e:
        logger.warning(f"⚠️  Calculator rejected {expression!r}: {e}")
        return {"result": f"Error: {e}"}
    except Exception as e:
        logger.error(f"❌ Calculator failed on {expression!r}: {e}", exc_info=True)
        return {"result": f"Error: Calculation failed ({e})"}

    return {"result": format_number(value)}
