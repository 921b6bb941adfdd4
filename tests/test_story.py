"""Tests for StoryPlayer navigation, back choice and script execution."""

import pytest

from twee_story.commands import MemoryStore
from twee_story.errors import MissingPassage
from twee_story.models import PlayerSettings
from twee_story.story import StoryPlayer
from twee_story.twee import parse_twee
from twee_story.values import IntValue

STORY = """\
:: StoryTitle
Caves

:: StoryData
{"start": "Entrance"}

:: Entrance
A dark cave. Go [[Left]] or [[Right]].
<script>
Store.SetInt "entered" 1
</script>

:: Left
A dead end.
<script>
Store.GetInt "entered"
</script>

:: Right
An underground lake.
<div>
Swim to the [[Island]] or take the [[Ghost Path]].
</div>

:: Island
Treasure!
<script>
Store.SetString "found" "treasure"
</script>"""


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def player(store: MemoryStore) -> StoryPlayer:
    return StoryPlayer(parse_twee(STORY), store)


def test_starts_at_start_passage(player):
    assert player.current == "Entrance"


def test_show_start_passage(player, store):
    view = player.show()
    assert view.name == "Entrance"
    assert [c.label for c in view.choices] == ["Left", "Right"]
    assert [c.number for c in view.choices] == [1, 2]
    assert store.get_int("entered") == 1
    assert view.script[0].outcome == "command"


def test_no_back_choice_on_start(player):
    view = player.show()
    assert all(c.label != "Back" for c in view.choices)


def test_back_choice_away_from_start(player):
    player.show()
    view = player.choose(1)
    assert view.name == "Left"
    assert [(c.label, c.target) for c in view.choices] == [("Back", "Entrance")]
    assert "Choices:" in view.display
    assert "1. <color=blue>Back</color>" in view.display


def test_script_reads_store(player):
    player.show()
    view = player.choose(1)
    assert view.script[0].value == IntValue(value=1)


def test_div_choices_included(player):
    view = player.show("Right")
    assert [c.label for c in view.choices] == ["Island", "Ghost Path", "Back"]


def test_choose_follows_target(player, store):
    player.show("Right")
    view = player.choose(1)
    assert view.name == "Island"
    assert player.current == "Island"
    assert store.get_string("found") == "treasure"


def test_back_returns_to_start(player):
    player.show("Left")
    view = player.choose(1)
    assert view.name == "Entrance"


def test_choice_to_missing_passage_stays(player):
    player.show("Right")
    with pytest.raises(MissingPassage):
        player.choose(2)
    assert player.current == "Right"


def test_choice_out_of_range(player):
    player.show()
    with pytest.raises(IndexError):
        player.choose(5)
    with pytest.raises(IndexError):
        player.choose(0)


def test_show_missing_passage(player):
    with pytest.raises(MissingPassage) as exc:
        player.show("Nowhere")
    assert exc.value.name == "Nowhere"
    assert player.current == "Entrance"


def test_missing_passage_is_a_key_error(player):
    with pytest.raises(KeyError):
        player.show("Nowhere")


def test_hide_resets_to_start(player):
    player.show("Island")
    player.hide()
    assert player.current == "Entrance"
    assert player.choices == []


def test_hide_without_reset(store):
    player = StoryPlayer(parse_twee(STORY), store, PlayerSettings(reset_to_start=False))
    player.show("Island")
    player.hide()
    assert player.current == "Island"


def test_back_choice_disabled(store):
    player = StoryPlayer(parse_twee(STORY), store, PlayerSettings(add_back_choice=False))
    view = player.show("Left")
    assert view.choices == []
    assert "Choices:" not in view.display


def test_custom_back_label_and_prefix(store):
    settings = PlayerSettings(back_label="Return", prompt_prefix="Options:\n")
    player = StoryPlayer(parse_twee(STORY), store, settings)
    view = player.show("Left")
    assert view.choices[0].label == "Return"
    assert "Options:\n1. <color=blue>Return</color>" in view.display


def test_resume_does_not_run_script(player, store):
    choices = player.resume("Entrance")
    assert [c.label for c in choices] == ["Left", "Right"]
    assert store.get_int("entered") == 0


def test_script_variables_not_shared_between_passages(store):
    source = (
        ':: StoryData\n{"start": "A"}\n'
        ":: A\n[[B]]\n<script>\nx = 1\n</script>\n"
        ":: B\n<script>\ny = x + 1\n</script>"
    )
    player = StoryPlayer(parse_twee(source), store)
    player.show()
    view = player.choose(1)
    assert view.script[0].outcome == "error"
