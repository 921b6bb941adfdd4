"""Interpreter values and operator semantics.

A value is one of three frozen pydantic models, discriminated by ``kind``:

    IntValue    — {"kind": "int",    "value": 3}
    FloatValue  — {"kind": "float",  "value": 1.5}
    TextValue   — {"kind": "text",   "value": "abc"}

Operator rules (left and right already popped from the stack):

    (int, int)      + - * / % & | ^ && ||    → int
    (float, float)  + - * / %                → float
    text on either  +                        → text (other side stringified)

Everything else is a TypeMismatch. There is no int/float promotion.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from twee_story.errors import ArithmeticFault, TypeMismatch

ADD = "+"
SUBTRACT = "-"
MULTIPLY = "*"
DIVIDE = "/"
MODULO = "%"
AND = "&"
OR = "|"
XOR = "^"
AND_ALSO = "&&"
OR_ELSE = "||"

OPERATORS: frozenset[str] = frozenset(
    {ADD, SUBTRACT, MULTIPLY, DIVIDE, MODULO, AND, OR, XOR, AND_ALSO, OR_ELSE}
)


class IntValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["int"] = "int"
    value: int

    def __str__(self) -> str:
        return str(self.value)


class FloatValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["float"] = "float"
    value: float

    def __str__(self) -> str:
        # 2.0 prints as "2", matching how stories expect numbers to read
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


class TextValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str

    def __str__(self) -> str:
        return self.value


InterpreterValue = Annotated[
    Union[IntValue, FloatValue, TextValue], Field(discriminator="kind")
]


def parse_number(text: str) -> IntValue | FloatValue | None:
    """Parse a numeric literal: int when it has no fractional part, else float.

    Returns None when the text is not a number at all.
    """
    try:
        return IntValue(value=int(text))
    except ValueError:
        pass
    try:
        return FloatValue(value=float(text))
    except ValueError:
        return None


# ── Integer arithmetic ───────────────────────────────────


def _int_div(l: int, r: int) -> int:
    """Integer division truncating toward zero."""
    if r == 0:
        raise ArithmeticFault("Integer division by zero")
    q = abs(l) // abs(r)
    return q if (l >= 0) == (r >= 0) else -q


def _int_mod(l: int, r: int) -> int:
    """Remainder with the sign of the dividend."""
    if r == 0:
        raise ArithmeticFault("Integer modulo by zero")
    return l - r * _int_div(l, r)


_INT_OPS: dict[str, Callable[[int, int], int]] = {
    ADD: lambda l, r: l + r,
    SUBTRACT: lambda l, r: l - r,
    MULTIPLY: lambda l, r: l * r,
    DIVIDE: _int_div,
    MODULO: _int_mod,
    AND: lambda l, r: l & r,
    OR: lambda l, r: l | r,
    XOR: lambda l, r: l ^ r,
    AND_ALSO: lambda l, r: 1 if (l != 0 and r != 0) else 0,
    OR_ELSE: lambda l, r: 1 if (l != 0 or r != 0) else 0,
}


# ── Float arithmetic ─────────────────────────────────────


def _float_div(l: float, r: float) -> float:
    if r == 0:
        raise ArithmeticFault("Float division by zero")
    return l / r


def _float_mod(l: float, r: float) -> float:
    if r == 0:
        raise ArithmeticFault("Float modulo by zero")
    return math.fmod(l, r)


_FLOAT_OPS: dict[str, Callable[[float, float], float]] = {
    ADD: lambda l, r: l + r,
    SUBTRACT: lambda l, r: l - r,
    MULTIPLY: lambda l, r: l * r,
    DIVIDE: _float_div,
    MODULO: _float_mod,
}


def apply_operator(
    left: IntValue | FloatValue | TextValue,
    right: IntValue | FloatValue | TextValue,
    op: str,
) -> IntValue | FloatValue | TextValue:
    """Combine two values with a binary operator.

    Raises:
        TypeMismatch: the operand types do not support ``op``.
        ArithmeticFault: division or modulo by zero.
    """
    if isinstance(left, IntValue) and isinstance(right, IntValue):
        fn = _INT_OPS.get(op)
        if fn is None:
            raise TypeMismatch(f"Operator {op!r} is not defined for int")
        return IntValue(value=fn(left.value, right.value))

    if isinstance(left, FloatValue) and isinstance(right, FloatValue):
        fn = _FLOAT_OPS.get(op)
        if fn is None:
            raise TypeMismatch(f"Operator {op!r} is not defined for float")
        return FloatValue(value=fn(left.value, right.value))

    if isinstance(left, TextValue) or isinstance(right, TextValue):
        if op != ADD:
            raise TypeMismatch(f"Operator {op!r} is not defined for text")
        return TextValue(value=str(left) + str(right))

    raise TypeMismatch(f"Type mismatch: {left.kind} {op} {right.kind}")
