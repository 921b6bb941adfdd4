"""Twee document parser.

A Twee file is a sequence of passages, each introduced by a header line:

    :: StoryTitle
    The Lighthouse

    :: StoryData
    {
      "ifid": "D674C58C-DEFA-4F70-B7A2-27742230C0FC",
      "format": "Harlowe",
      "start": "Shore"
    }

    :: Shore {"position":"100,100"}
    Waves break on the rocks. [[Climb the stairs]] or [[Leave]].
    <script>
    Store.SetInt "visited_shore" 1
    </script>

Parsing is a single pass over the lines with one explicit state:

    IDLE      between passages, lines ignored
    TITLE     next line is the story title
    METADATA  collecting StoryData JSON until its closing brace
    PASSAGE   collecting body text
    SCRIPT    collecting <script> contents
    DIV       collecting <div> contents

A header line always ends the passage being collected (if any) and starts a
new one. The text after ``{`` on a header line is tag metadata and ignored.
Re-declaring a passage name replaces the earlier one.

Bad StoryData JSON is logged and skipped; the rest of the document is still
parsed and ``Document.start`` stays empty.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from enum import Enum

from pydantic import ValidationError

from twee_story.errors import MetadataParseFailure
from twee_story.models import STORY_DATA, STORY_TITLE, Document, Passage, StoryData

logger = logging.getLogger(__name__)

HEADER_PREFIX = ":: "

SCRIPT_OPEN = "<script"
SCRIPT_CLOSE = "</script>"
DIV_OPEN = "<div"
DIV_CLOSE = "</div>"

_SCRIPT_TAG = re.compile(r"<script.*?>|</script>")
_DIV_TAG = re.compile(r"<div.*?>|</div>")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ParseState(Enum):
    IDLE = "idle"
    TITLE = "title"
    METADATA = "metadata"
    PASSAGE = "passage"
    SCRIPT = "script"
    DIV = "div"


_PASSAGE_STATES = (ParseState.PASSAGE, ParseState.SCRIPT, ParseState.DIV)


def split_lines(text: str) -> list[str]:
    """Split on any of ``\\r\\n``, ``\\r`` or ``\\n``, keeping empty lines."""
    return _LINE_BREAK.split(text)


def passage_name(header: str) -> str:
    """Name from a header line, without the ``::`` marker or ``{...}`` tags."""
    name = header[len(HEADER_PREFIX):]
    brace = name.find("{")
    if brace > -1:
        name = name[:brace]
    return name.strip()


def _strip_tag(pattern: re.Pattern[str], line: str) -> str:
    return pattern.sub("", line).strip()


def parse_story_data(text: str) -> StoryData:
    """Validate StoryData JSON.

    A JSON object whose other fields do not validate still yields its
    ``start`` when that is a string; the bad fields are logged and dropped.

    Raises:
        MetadataParseFailure: not valid JSON, or no usable start passage.
    """
    try:
        return StoryData.model_validate_json(text)
    except ValidationError as e:
        error = e

    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        raw = None
    start = raw.get("start") if isinstance(raw, dict) else None
    if not isinstance(start, str):
        raise MetadataParseFailure(f"Invalid StoryData: {error}") from error
    logger.warning("StoryData fields ignored: %s", error)
    return StoryData(start=start)


class TweeParser:
    """Line-at-a-time Twee parser. Use ``parse_twee`` for whole documents."""

    def __init__(self) -> None:
        self.state = ParseState.IDLE
        self.document = Document()
        self._name: str | None = None
        self._text: list[str] = []
        self._script: list[str] = []
        self._div: list[str] = []
        self._metadata: list[str] = []

    def feed(self, line: str) -> None:
        if line.startswith(HEADER_PREFIX):
            self._start_passage(passage_name(line))
            return

        if self.state == ParseState.TITLE:
            self.document.title = line.strip()
            logger.debug("Story title: %s", self.document.title)
            self.state = ParseState.IDLE

        elif self.state == ParseState.METADATA:
            self._metadata.append(line)
            if "}" in line and _braces_closed(self._metadata):
                self._read_metadata()
                self.state = ParseState.IDLE

        elif self.state == ParseState.PASSAGE:
            if SCRIPT_OPEN in line:
                self._script.append(_strip_tag(_SCRIPT_TAG, line))
                if SCRIPT_CLOSE not in line:
                    self.state = ParseState.SCRIPT
            elif DIV_OPEN in line:
                self._div.append(_strip_tag(_DIV_TAG, line))
                if DIV_CLOSE not in line:
                    self.state = ParseState.DIV
            else:
                self._text.append(line)

        elif self.state == ParseState.SCRIPT:
            if SCRIPT_CLOSE in line:
                self._script.append(_strip_tag(_SCRIPT_TAG, line))
                self.state = ParseState.PASSAGE
            else:
                self._script.append(line)

        elif self.state == ParseState.DIV:
            if DIV_CLOSE in line:
                self._div.append(_strip_tag(_DIV_TAG, line))
                self.state = ParseState.PASSAGE
            else:
                self._div.append(line)

    def finish(self) -> Document:
        """Flush the passage still being collected and return the document."""
        self._flush()
        if self.state == ParseState.METADATA:
            logger.warning("StoryData passage was never closed; start passage unknown")
        self.state = ParseState.IDLE
        return self.document

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _start_passage(self, name: str) -> None:
        self._flush()
        if self.state == ParseState.METADATA:
            logger.warning("StoryData passage was never closed; start passage unknown")

        self._name = name
        self._text = []
        self._script = []
        self._div = []
        self._metadata = []

        if name == STORY_TITLE:
            self.state = ParseState.TITLE
        elif name == STORY_DATA:
            self.state = ParseState.METADATA
        else:
            self.state = ParseState.PASSAGE
        logger.debug("Passage header: %s → %s", name, self.state.value)

    def _flush(self) -> None:
        if self._name is None or self.state not in _PASSAGE_STATES:
            return
        passage = Passage(
            name=self._name,
            text="\n".join(self._text).strip(),
            script="\n".join(self._script).strip(),
            div="\n".join(self._div).strip(),
        )
        if passage.name in self.document.passages:
            logger.warning("Passage %r declared twice; keeping the last one", passage.name)
        self.document.passages[passage.name] = passage
        logger.debug(
            "Parsed passage name=%s text_len=%d script_len=%d div_len=%d",
            passage.name, len(passage.text), len(passage.script), len(passage.div),
        )
        self._name = None

    def _read_metadata(self) -> None:
        try:
            data = parse_story_data("\n".join(self._metadata).strip())
        except MetadataParseFailure as e:
            logger.error("Failed to parse StoryData: %s", e)
            return
        self.document.start = data.start
        logger.debug("Start passage: %s", data.start)


def _braces_closed(lines: list[str]) -> bool:
    text = "".join(lines)
    return text.count("{") <= text.count("}")


def parse_lines(lines: Iterable[str]) -> Document:
    parser = TweeParser()
    for line in lines:
        parser.feed(line)
    return parser.finish()


def parse_twee(text: str) -> Document:
    """Parse a whole Twee document."""
    return parse_lines(split_lines(text))
