"""Tests for the left-to-right stack evaluator."""

import pytest

from twee_story.errors import (
    ArithmeticFault,
    MalformedExpression,
    TypeMismatch,
    UnresolvedVariable,
)
from twee_story.evaluator import evaluate
from twee_story.tokens import tokenize
from twee_story.values import FloatValue, IntValue, TextValue


def ev(expr: str, env: dict | None = None):
    return evaluate(tokenize(expr), env or {})


def test_no_precedence():
    """Operators apply in token order: (1 + 2) * 3."""
    assert ev("1 + 2 * 3") == IntValue(value=9)


def test_left_to_right_subtraction():
    assert ev("10 - 4 - 3") == IntValue(value=3)


def test_string_concatenation():
    assert ev('"a" + "b"') == TextValue(value="ab")


def test_number_plus_string():
    assert ev('1 + "x"') == TextValue(value="1x")


def test_float_bitwise_mismatch():
    with pytest.raises(TypeMismatch):
        ev("1.5 & 2")


def test_float_arithmetic():
    assert ev("1.5 + 2.25") == FloatValue(value=3.75)


def test_logical_operators():
    assert ev("2 && 3") == IntValue(value=1)
    assert ev("0 || 0") == IntValue(value=0)


def test_variable_lookup():
    env = {"gold": IntValue(value=10)}
    assert ev("gold + 5", env) == IntValue(value=15)


def test_unresolved_variable():
    with pytest.raises(UnresolvedVariable) as exc:
        ev("silver + 1")
    assert exc.value.name == "silver"


def test_division_by_zero():
    with pytest.raises(ArithmeticFault):
        ev("5 / 0")


def test_single_literal():
    assert ev("42") == IntValue(value=42)
    assert ev('"hello world"') == TextValue(value="hello world")


def test_empty_expression_malformed():
    with pytest.raises(MalformedExpression):
        ev("")


def test_two_values_malformed():
    with pytest.raises(MalformedExpression):
        ev("1 2")


def test_operator_without_operands_malformed():
    with pytest.raises(MalformedExpression):
        ev("+ 1")


def test_assign_inside_expression_malformed():
    with pytest.raises(MalformedExpression):
        ev("1 = 2")


def test_call_like_token_is_unresolved():
    with pytest.raises(UnresolvedVariable):
        ev("random(1, 6)")
