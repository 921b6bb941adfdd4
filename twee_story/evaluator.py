"""Left-to-right stack evaluator for script expressions.

Operands push a value. An operator waits for its right operand; as soon as
that operand is pushed, the right then the left value are popped and the
combined result is pushed in their place. There is no precedence and no
grouping, so ``1 + 2 * 3`` is ``(1 + 2) * 3 == 9``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from twee_story.errors import MalformedExpression, UnresolvedVariable
from twee_story.tokens import Token, TokenKind
from twee_story.values import (
    FloatValue,
    IntValue,
    OPERATORS,
    TextValue,
    apply_operator,
    parse_number,
)

logger = logging.getLogger(__name__)

Value = IntValue | FloatValue | TextValue


def _operand(token: Token, env: Mapping[str, Value]) -> Value:
    if token.kind in (TokenKind.INTEGER_LITERAL, TokenKind.FLOAT_LITERAL):
        number = parse_number(token.text)
        if number is None:
            raise MalformedExpression(f"Bad numeric literal: {token.text}")
        return number
    if token.kind == TokenKind.STRING_LITERAL:
        return TextValue(value=token.text[1:-1])
    if token.kind == TokenKind.ASSIGN:
        raise MalformedExpression("Unexpected '=' inside an expression")
    if token.text in env:
        return env[token.text]
    raise UnresolvedVariable(token.text)


def evaluate(tokens: Sequence[Token], env: Mapping[str, Value]) -> Value:
    """Evaluate an expression and return its single resulting value.

    Raises:
        UnresolvedVariable: an identifier is not bound in ``env``.
        TypeMismatch: an operator was applied to unsupported operand types.
        ArithmeticFault: division or modulo by zero.
        MalformedExpression: the stack did not end with exactly one value.
    """
    stack: list[Value] = []
    pending: str | None = None

    for token in tokens:
        if token.kind == TokenKind.OPERATOR and token.text in OPERATORS:
            if pending is not None or not stack:
                raise MalformedExpression(f"Operator {token.text!r} is missing its left operand")
            pending = token.text
            continue

        stack.append(_operand(token, env))
        if pending is not None:
            right = stack.pop()
            left = stack.pop()
            stack.append(apply_operator(left, right, pending))
            pending = None
        logger.debug("evaluate token=%r stack_depth=%d", token.text, len(stack))

    if pending is not None:
        raise MalformedExpression(f"Operator {pending!r} is missing its right operand")
    if len(stack) != 1:
        raise MalformedExpression(
            f"Expression left {len(stack)} values on the stack, expected 1"
        )
    return stack[0]
