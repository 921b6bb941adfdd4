"""Tests for the Twee document parser."""

import pytest

from twee_story.errors import MetadataParseFailure
from twee_story.models import Passage
from twee_story.twee import (
    ParseState,
    TweeParser,
    parse_story_data,
    parse_twee,
    passage_name,
    split_lines,
)

STORY = """\
:: StoryTitle
  The Lighthouse

:: StoryData
{
  "ifid": "D674C58C-DEFA-4F70-B7A2-27742230C0FC",
  "format": "Harlowe",
  "formatVersion": "3.3.8",
  "start": "Shore"
}

:: Shore {"position":"100,100"}
Waves break on the rocks.
[[Climb]] or [[Beach]]
<script>
Store.SetInt "visited" 1
x = 2
</script>

:: Climb
The stairs creak.
<div class="note">
Go back to the [[Shore]].
</div>

:: Beach
Cold sand."""


def test_title_and_start():
    doc = parse_twee(STORY)
    assert doc.title == "The Lighthouse"
    assert doc.start == "Shore"


def test_start_from_minimal_story_data():
    doc = parse_twee(':: StoryData\n{"start":"Start"}\n\n:: Start\nHello')
    assert doc.start == "Start"


def test_one_record_per_header():
    doc = parse_twee(STORY)
    assert list(doc.passages) == ["Shore", "Climb", "Beach"]


def test_reserved_passages_not_in_mapping():
    doc = parse_twee(STORY)
    assert "StoryTitle" not in doc.passages
    assert "StoryData" not in doc.passages


def test_passage_text_and_script():
    shore = parse_twee(STORY).passages["Shore"]
    assert shore.text == "Waves break on the rocks.\n[[Climb]] or [[Beach]]"
    assert shore.script == 'Store.SetInt "visited" 1\nx = 2'
    assert shore.div == ""


def test_div_block():
    climb = parse_twee(STORY).passages["Climb"]
    assert climb.text == "The stairs creak."
    assert climb.div == "Go back to the [[Shore]]."


def test_last_passage_flushed_at_end_of_input():
    doc = parse_twee(STORY)
    assert doc.passages["Beach"] == Passage(name="Beach", text="Cold sand.")


def test_deterministic():
    assert parse_twee(STORY) == parse_twee(STORY)


def test_tag_metadata_ignored_in_name():
    assert passage_name(':: Shore {"position":"100,100"}') == "Shore"
    assert passage_name("::  Spaced name  ") == "Spaced name"


def test_redeclared_passage_last_write_wins():
    doc = parse_twee(":: A\nfirst\n:: B\nb\n:: A\nsecond")
    assert doc.passages["A"].text == "second"
    assert len(doc.passages) == 2


def test_malformed_metadata_does_not_abort():
    doc = parse_twee(":: StoryTitle\nT\n:: StoryData\n{not json}\n:: Start\nHello")
    assert doc.title == "T"
    assert doc.start == ""
    assert doc.passages["Start"].text == "Hello"


def test_unclosed_metadata():
    doc = parse_twee(':: StoryData\n{"start": "A"\n:: A\ntext')
    assert doc.start == ""
    assert doc.passages["A"].text == "text"


def test_nested_braces_in_metadata():
    source = (
        ':: StoryData\n{\n  "start": "A",\n  "tag-colors": {"x": "red"},\n  "zoom": 0.6\n}\n'
        ":: A\ntext"
    )
    assert parse_twee(source).start == "A"


def test_single_line_script_block():
    doc = parse_twee(':: A\nBefore\n<script>x = 1</script>\nAfter')
    passage = doc.passages["A"]
    assert passage.script == "x = 1"
    assert passage.text == "Before\nAfter"


def test_script_tag_with_attributes():
    doc = parse_twee(':: A\n<script type="text/twine">\ny = 2\n</script>')
    assert doc.passages["A"].script == "y = 2"


def test_lines_before_first_header_ignored():
    doc = parse_twee("stray text\n:: A\nbody")
    assert doc.passages == {"A": Passage(name="A", text="body")}


def test_empty_input():
    doc = parse_twee("")
    assert doc.title == ""
    assert doc.start == ""
    assert doc.passages == {}


def test_crlf_line_endings():
    doc = parse_twee(":: StoryTitle\r\nT\r\n:: A\r\none\r\ntwo")
    assert doc.title == "T"
    assert doc.passages["A"].text == "one\ntwo"


def test_split_lines_mixed():
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


def test_parser_states():
    parser = TweeParser()
    assert parser.state == ParseState.IDLE
    parser.feed(":: StoryTitle")
    assert parser.state == ParseState.TITLE
    parser.feed("Title")
    assert parser.state == ParseState.IDLE
    parser.feed(":: A")
    assert parser.state == ParseState.PASSAGE
    parser.feed("<script>")
    assert parser.state == ParseState.SCRIPT
    parser.feed("</script>")
    assert parser.state == ParseState.PASSAGE
    parser.feed("<div>")
    assert parser.state == ParseState.DIV
    doc = parser.finish()
    assert "A" in doc.passages


def test_bad_secondary_metadata_keeps_start():
    doc = parse_twee(':: StoryData\n{"start": "A", "zoom": null, "ifid": 7}\n:: A\ntext')
    assert doc.start == "A"


def test_story_data_bad_zoom_string():
    data = parse_story_data('{"start": "Shore", "zoom": "wide"}')
    assert data.start == "Shore"
    assert data.zoom == 1.0


def test_story_data_without_usable_start():
    with pytest.raises(MetadataParseFailure):
        parse_story_data('{"start": 5}')
    with pytest.raises(MetadataParseFailure):
        parse_story_data("[1, 2]")
