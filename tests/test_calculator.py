"""
Unit Tests for the Calculator Tool

Tests expression parsing, evaluation and the never-raising tool wrapper.
"""

import pytest

from tools.calculator import (
    CalculationError,
    calculator,
    evaluate_expression,
    format_number,
    tokenize,
)


class TestCalculator:
    """Test the calculator tool contract."""

    def test_simple_addition(self):
        assert calculator("2+2") == {"result": "4"}

    def test_word_problem_expression(self):
        assert calculator("25 * 11") == {"result": "275"}
        assert calculator("15 - (5 + 2 + 3)") == {"result": "5"}

    def test_fractional_result(self):
        assert calculator("7 / 2") == {"result": "3.5"}

    def test_division_by_zero(self):
        result = calculator("10/0")
        assert result["result"].startswith("Error:")
        assert "zero" in result["result"].lower()

    def test_invalid_syntax(self):
        assert calculator("not an expression")["result"].startswith("Error:")
        assert calculator("2 +")["result"].startswith("Error:")
        assert calculator("(1 + 2")["result"].startswith("Error:")

    def test_empty_expression(self):
        assert calculator("")["result"].startswith("Error:")
        assert calculator("   ")["result"].startswith("Error:")

    def test_non_real_result(self):
        assert calculator("(-8) ** 0.5")["result"].startswith("Error:")

    def test_overflow(self):
        assert calculator("10 ** 400")["result"].startswith("Error:")

    def test_rejects_names_and_calls(self):
        assert calculator("__import__('os')")["result"].startswith("Error:")
        assert calculator("abs(-3)")["result"].startswith("Error:")

    def test_non_string_input_never_raises(self):
        assert calculator(None)["result"].startswith("Error:")


class TestEvaluateExpression:
    """Test operator semantics."""

    def test_precedence(self):
        assert evaluate_expression("2 + 3 * 4") == 14
        assert evaluate_expression("(2 + 3) * 4") == 20

    def test_power_is_right_associative(self):
        assert evaluate_expression("2 ** 3 ** 2") == 512

    def test_power_binds_tighter_than_unary_minus(self):
        assert evaluate_expression("-2 ** 2") == -4
        assert evaluate_expression("(-2) ** 2") == 4

    def test_unary_signs(self):
        assert evaluate_expression("--3") == 3
        assert evaluate_expression("+4 - -1") == 5

    def test_decimals_and_exponents(self):
        assert evaluate_expression("1.5 * 2") == 3
        assert evaluate_expression("1e3 + .5") == 1000.5

    def test_zero_to_negative_power(self):
        with pytest.raises(CalculationError):
            evaluate_expression("0 ** -1")

    def test_unexpected_character(self):
        with pytest.raises(CalculationError):
            evaluate_expression("2 $ 3")


class TestHelpers:
    """Test tokenizer and formatting helpers."""

    def test_tokenize(self):
        tokens = tokenize("2 ** (3 + 4.5)")
        assert [text for _, text, _ in tokens] == ["2", "**", "(", "3", "+", "4.5", ")"]
        assert tokens[0] == ("number", "2", 0)
        assert tokens[1] == ("op", "**", 2)

    def test_format_number(self):
        assert format_number(4.0) == "4"
        assert format_number(-0.0) == "0"
        assert format_number(0.1 + 0.2) == repr(0.1 + 0.2)
