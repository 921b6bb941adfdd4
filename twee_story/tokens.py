"""Script line tokenizer.

One line of script text becomes a flat list of tokens. The pattern is a
single alternation tried left to right at each position; the first
alternative that matches wins, so order matters:

    Store.SetInt        dotted identifier (command name)
    random(1, 6)        call-like, captured whole and never looked into
    1.5                 float literal
    42                  integer literal
    "gold"              string literal, no escapes
    && ||               must come before & and |
    + - * / % & | ^     single-character operators
    =                   assignment
    gold                bare identifier

Anything else (whitespace, stray punctuation) is skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    DOTTED_IDENTIFIER = "dotted_identifier"
    PAREN_CALL = "paren_call"
    FLOAT_LITERAL = "float_literal"
    INTEGER_LITERAL = "integer_literal"
    STRING_LITERAL = "string_literal"
    OPERATOR = "operator"
    ASSIGN = "assign"
    IDENTIFIER = "identifier"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str


_IDENT = r"[A-Za-z_]\w*"

TOKEN_PATTERN = re.compile(
    "|".join([
        rf"(?P<dotted_identifier>{_IDENT}\.{_IDENT})",
        rf"(?P<paren_call>{_IDENT}\(.*?\))",
        r"(?P<float_literal>\d+\.\d+)",
        r"(?P<integer_literal>\d+)",
        r'(?P<string_literal>".*?")',
        r"(?P<operator>&&|\|\||[+\-*/%&|^])",
        r"(?P<assign>=)",
        rf"(?P<identifier>{_IDENT})",
    ])
)


def tokenize(line: str) -> list[Token]:
    """Split one line of script into tokens, skipping unmatched characters."""
    return [
        Token(TokenKind(match.lastgroup), match.group())
        for match in TOKEN_PATTERN.finditer(line)
    ]
