"""Exception types raised by the story toolchain.

Script errors are scoped to a single statement: the interpreter logs them,
drops that line's effect and carries on with the next line. Document-level
errors (bad StoryData metadata) are logged by the parser, which keeps going.
MissingPassage is the only one the caller is expected to handle.
"""

from __future__ import annotations


class TweeStoryError(Exception):
    """Base class for all story toolchain errors."""


# ---------------------------------------------------------------------------
# Script execution
# ---------------------------------------------------------------------------

class ScriptError(TweeStoryError):
    """Raised while executing one script statement."""


class UnresolvedVariable(ScriptError):
    """An identifier was used before anything was assigned to it."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unresolved variable: {name}")
        self.name = name


class TypeMismatch(ScriptError):
    """Operand types do not support the operator."""


class ArithmeticFault(ScriptError):
    """Integer division or modulo by zero."""


class MalformedExpression(ScriptError):
    """The evaluation stack did not reduce to exactly one value."""


class UnknownCommand(ScriptError):
    """A dotted command name has no registered handler."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name


class CommandArgumentError(ScriptError):
    """A command handler was called with unusable arguments."""


class StoreError(ScriptError):
    """The key-value store could not be read or written."""


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

class MetadataParseFailure(TweeStoryError):
    """The StoryData passage could not be read as JSON metadata."""


class MissingPassage(TweeStoryError, KeyError):
    """The requested passage is not part of the document."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Passage not found: {name}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class StorySourceError(TweeStoryError):
    """A Twee file could not be read or fetched."""


class RenderError(TweeStoryError):
    """Raised when a Handlebars passage template fails to compile or render."""
