"""Tests for story storage (presets + user uploads)."""

import pytest
from unittest.mock import AsyncMock, patch

from twee_story.errors import StorySourceError

from backend import storage

SOURCE = """\
:: StoryTitle
Moon Base

:: StoryData
{"start": "Airlock"}

:: Airlock
Hiss. [[Corridor]]

:: Corridor
Quiet."""


def test_preset_listed():
    slugs = [s["slug"] for s in storage.list_stories()]
    assert "the-lighthouse" in slugs


def test_preset_summary():
    summary = storage.get_story_summary("the-lighthouse")
    assert summary["title"] == "The Lighthouse"
    assert summary["start"] == "Shore"
    assert summary["source"] == "preset"
    assert "Climb the stairs" in summary["passages"]


def test_save_story_slug_from_title():
    summary = storage.save_story(SOURCE)
    assert summary["slug"] == "moon-base"
    assert summary["passages"] == ["Airlock", "Corridor"]
    assert (storage.stories_dir() / "moon-base.twee").is_file()


def test_save_story_explicit_slug():
    summary = storage.save_story(SOURCE, slug="luna")
    assert summary["slug"] == "luna"
    assert storage.get_story("luna").start == "Airlock"


def test_get_story_unknown():
    assert storage.get_story("nope") is None
    assert storage.get_story_source("nope") is None
    assert storage.get_story_summary("nope") is None


def test_user_story_overrides_preset():
    storage.save_story(SOURCE, slug="the-lighthouse")
    summary = storage.get_story_summary("the-lighthouse")
    assert summary["source"] == "user"
    assert summary["title"] == "Moon Base"
    listed = [s for s in storage.list_stories() if s["slug"] == "the-lighthouse"]
    assert len(listed) == 1
    assert listed[0]["source"] == "user"


def test_delete_user_story_reveals_preset():
    storage.save_story(SOURCE, slug="the-lighthouse")
    assert storage.delete_story("the-lighthouse") is True
    assert storage.get_story_summary("the-lighthouse")["source"] == "preset"


def test_delete_preset_refused():
    assert storage.delete_story("the-lighthouse") is False
    assert storage.get_story("the-lighthouse") is not None


async def test_import_story():
    with patch("backend.storage.stories.fetch_twee", AsyncMock(return_value=SOURCE)):
        summary = await storage.import_story("http://example.com/moon.twee")
    assert summary["slug"] == "moon-base"
    assert storage.get_story("moon-base").title == "Moon Base"


async def test_import_story_failure():
    failing = AsyncMock(side_effect=StorySourceError("Cannot connect"))
    with patch("backend.storage.stories.fetch_twee", failing):
        with pytest.raises(StorySourceError):
            await storage.import_story("http://example.com/moon.twee")
