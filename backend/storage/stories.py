"""Twee story files (merged presets + user uploads)."""

from pathlib import Path
from typing import Any

from twee_story.models import Document
from twee_story.sources import fetch_twee
from twee_story.twee import parse_twee

from .core import preset_stories_dir, slugify, stories_dir


def _summary(slug: str, document: Document, source: str) -> dict[str, Any]:
    return {
        "slug": slug,
        "title": document.title,
        "start": document.start,
        "passages": list(document.passages),
        "source": source,
    }


def _story_path(slug: str) -> Path | None:
    """User file first, preset fallback. None when neither exists."""
    user_path = stories_dir() / f"{slug}.twee"
    if user_path.is_file():
        return user_path
    preset_path = preset_stories_dir() / f"{slug}.twee"
    if preset_path.is_file():
        return preset_path
    return None


def list_stories() -> list[dict[str, Any]]:
    by_slug: dict[str, dict[str, Any]] = {}
    # Presets first (lower priority)
    if preset_stories_dir().is_dir():
        for path in sorted(preset_stories_dir().glob("*.twee")):
            by_slug[path.stem] = _summary(path.stem, parse_twee(path.read_text()), "preset")
    # User stories override
    for path in sorted(stories_dir().glob("*.twee")):
        by_slug[path.stem] = _summary(path.stem, parse_twee(path.read_text()), "user")
    return list(by_slug.values())


def get_story_source(slug: str) -> str | None:
    path = _story_path(slug)
    if path is None:
        return None
    return path.read_text()


def get_story(slug: str) -> Document | None:
    """Parse a stored story. Returns None if the slug is unknown."""
    source = get_story_source(slug)
    if source is None:
        return None
    return parse_twee(source)


def get_story_summary(slug: str) -> dict[str, Any] | None:
    path = _story_path(slug)
    if path is None:
        return None
    source = "user" if path.parent == stories_dir() else "preset"
    return _summary(slug, parse_twee(path.read_text()), source)


def save_story(source: str, slug: str | None = None) -> dict[str, Any]:
    """Store Twee source. The slug defaults to the slugified story title."""
    document = parse_twee(source)
    slug = slug or slugify(document.title)
    (stories_dir() / f"{slug}.twee").write_text(source)
    return _summary(slug, document, "user")


async def import_story(url: str, slug: str | None = None) -> dict[str, Any]:
    """Fetch Twee source over HTTP and store it."""
    source = await fetch_twee(url)
    return save_story(source, slug)


def delete_story(slug: str) -> bool:
    """Delete a user story. Presets cannot be deleted."""
    path = stories_dir() / f"{slug}.twee"
    if not path.is_file():
        return False
    path.unlink()
    return True
