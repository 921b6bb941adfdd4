"""Story player wiring shared by the HTTP routes, the MCP server and the CLI.

Every call builds a fresh StoryPlayer from stored data:
  story source   → storage.get_story(slug)
  key-value store → storage.prefs_store() (data/prefs.json)
  settings       → storage.get_player_settings() (data/config.json)

Nothing is kept between calls; the client tracks the current passage.
"""

import logging
from typing import Any

from twee_story.interpreter import Interpreter
from twee_story.models import PassageView
from twee_story.story import StoryPlayer

from backend import storage

logger = logging.getLogger(__name__)


class StoryNotFound(LookupError):
    """No stored story has the requested slug."""


def open_player(slug: str) -> StoryPlayer:
    document = storage.get_story(slug)
    if document is None:
        raise StoryNotFound(slug)
    return StoryPlayer(document, storage.prefs_store(), storage.get_player_settings())


def show_passage(slug: str, passage: str | None = None) -> PassageView:
    """Show a passage (the start passage by default) and run its script."""
    return open_player(slug).show(passage)


def choose_passage(slug: str, current: str, choice: int) -> PassageView:
    """Follow choice number ``choice`` from passage ``current``.

    The current passage's script is not re-run.
    """
    player = open_player(slug)
    player.resume(current)
    return player.choose(choice)


def run_script(script: str) -> dict[str, Any]:
    """Execute a free-standing script against the prefs store."""
    settings = storage.get_player_settings()
    interpreter = Interpreter(storage.prefs_store(), settings.command_namespaces)
    results = interpreter.execute(script)
    logger.debug("run_script lines=%d env=%s", len(results), list(interpreter.env))
    return {
        "results": [r.model_dump() for r in results],
        "env": {name: value.model_dump() for name, value in interpreter.env.items()},
    }
