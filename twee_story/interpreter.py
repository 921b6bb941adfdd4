"""Script executor.

Runs the statements of one passage script, line by line:

    Store.SetInt "gold" 10      → command dispatch (registered dotted name)
    Store.Nope "x"              → UnknownCommand, logged, line skipped
    total = gold + 5            → evaluate the right-hand side, bind ``total``
    anything else               → ignored

Every ScriptError is scoped to the line that raised it: the line has no
effect, the error is logged and recorded in its StatementResult, and the
next line runs. Variables live in ``Interpreter.env`` and survive across
``execute`` calls on the same instance.

One interpreter per call site; there is no internal locking.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from twee_story.commands import DEFAULT_NAMESPACES, KeyValueStore, build_registry
from twee_story.errors import ScriptError, UnknownCommand
from twee_story.evaluator import Value, evaluate
from twee_story.models import StatementResult
from twee_story.tokens import TokenKind, tokenize

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"[\r\n]+")


class Interpreter:
    def __init__(
        self,
        store: KeyValueStore,
        namespaces: Iterable[str] = DEFAULT_NAMESPACES,
    ) -> None:
        self.store = store
        self.commands = build_registry(store, namespaces)
        self.env: dict[str, Value] = {}

    def execute(self, script: str) -> list[StatementResult]:
        """Execute every non-empty line of ``script`` in order."""
        results: list[StatementResult] = []
        for line in _LINE_BREAK.split(script):
            if not line.strip():
                continue
            logger.debug("execute line=%r", line)
            results.append(self.execute_line(line))
        return results

    def execute_line(self, line: str) -> StatementResult:
        tokens = tokenize(line)
        if not tokens:
            return StatementResult(line=line, outcome="ignored")

        head = tokens[0]
        try:
            if head.kind == TokenKind.DOTTED_IDENTIFIER:
                handler = self.commands.get(head.text)
                if handler is None:
                    raise UnknownCommand(head.text)
                value = handler([t.text for t in tokens[1:]])
                return StatementResult(
                    line=line, outcome="command", target=head.text, value=value
                )

            if (
                head.kind == TokenKind.IDENTIFIER
                and len(tokens) >= 2
                and tokens[1].kind == TokenKind.ASSIGN
            ):
                value = evaluate(tokens[2:], self.env)
                self.env[head.text] = value
                logger.debug("assign %s = %r", head.text, value)
                return StatementResult(
                    line=line, outcome="assignment", target=head.text, value=value
                )
        except ScriptError as e:
            logger.warning("Script line skipped: %s (line: %r)", e, line)
            return StatementResult(
                line=line, outcome="error", target=head.text, error=str(e)
            )

        return StatementResult(line=line, outcome="ignored")

    def evaluate(self, expression: str) -> Value:
        """Evaluate a bare expression against the current environment.

        Unlike ``execute``, errors propagate to the caller.
        """
        return evaluate(tokenize(expression), self.env)
