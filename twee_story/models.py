"""Core domain models.

The parser, interpreter and story player all exchange these types.
Pydantic is used for validation and serialisation at every data boundary
(StoryData JSON, config.json, HTTP and MCP responses).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from twee_story.commands import DEFAULT_NAMESPACES
from twee_story.errors import MissingPassage
from twee_story.values import InterpreterValue

STORY_TITLE = "StoryTitle"
STORY_DATA = "StoryData"


class Passage(BaseModel):
    """One ``:: name`` section of a Twee document."""

    name: str
    text: str = ""    # renderable body, may hold [[choice]] markers
    script: str = ""  # contents of <script> blocks, one statement per line
    div: str = ""     # contents of <div> blocks


class StoryData(BaseModel):
    """JSON metadata from the reserved StoryData passage."""

    model_config = ConfigDict(populate_by_name=True)

    ifid: str = ""
    format: str = ""
    format_version: str = Field(default="", alias="formatVersion")
    start: str = ""
    zoom: float = 1.0


class Document(BaseModel):
    """A parsed Twee story."""

    title: str = ""
    start: str = ""
    passages: dict[str, Passage] = Field(default_factory=dict)

    def get_passage(self, name: str) -> Passage:
        """Return the named passage or raise MissingPassage."""
        try:
            return self.passages[name]
        except KeyError:
            raise MissingPassage(name) from None


StatementOutcome = Literal["command", "assignment", "ignored", "error"]


class StatementResult(BaseModel):
    """What happened to one script line."""

    line: str
    outcome: StatementOutcome
    target: str | None = None  # command name or assigned variable
    value: InterpreterValue | None = None
    error: str | None = None


class Choice(BaseModel):
    number: int  # 1-based, as shown to the player
    label: str
    target: str


class PassageView(BaseModel):
    """Everything a display layer needs to show one passage."""

    name: str
    text: str
    display: str
    choices: list[Choice] = Field(default_factory=list)
    script: list[StatementResult] = Field(default_factory=list)


class PlayerSettings(BaseModel):
    """Story player behaviour, stored in config.json."""

    add_back_choice: bool = True
    reset_to_start: bool = True
    prompt_prefix: str = "Choices:\n"
    back_label: str = "Back"
    command_namespaces: list[str] = Field(default_factory=lambda: list(DEFAULT_NAMESPACES))
    passage_template: str | None = None  # None → built-in template
