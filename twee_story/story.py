"""Story player — navigation over a parsed Document.

    player = StoryPlayer(document, store)
    view = player.show()          # start passage
    view = player.choose(1)       # follow the first choice of the last view
    player.hide()                 # back to start if reset_to_start is set

Showing a passage:
  1. Look up the current passage (MissingPassage if absent).
  2. Extract choices from body text + div markup.
  3. Append a "Back" choice to the start passage when away from the start.
  4. Render display text through the passage template.
  5. Run the passage script with a fresh Interpreter bound to the store.

The store is shared across passages; script variables are not.
"""

from __future__ import annotations

import logging

from twee_story.choices import extract_choices
from twee_story.commands import KeyValueStore
from twee_story.errors import MissingPassage
from twee_story.interpreter import Interpreter
from twee_story.models import Choice, Document, Passage, PassageView, PlayerSettings
from twee_story.render import render_passage

logger = logging.getLogger(__name__)


class StoryPlayer:
    def __init__(
        self,
        document: Document,
        store: KeyValueStore,
        settings: PlayerSettings | None = None,
    ) -> None:
        self.document = document
        self.store = store
        self.settings = settings or PlayerSettings()
        self.current = document.start
        self.choices: list[Choice] = []

    def build_choices(self, passage: Passage) -> list[Choice]:
        labels = extract_choices(passage.text + passage.div)
        choices = [
            Choice(number=i, label=label, target=label)
            for i, label in enumerate(labels, start=1)
        ]
        if self.settings.add_back_choice and passage.name != self.document.start:
            choices.append(Choice(
                number=len(choices) + 1,
                label=self.settings.back_label,
                target=self.document.start,
            ))
        return choices

    def show(self, name: str | None = None) -> PassageView:
        """Show a passage (the current one by default) and run its script."""
        name = self.current if name is None else name
        try:
            passage = self.document.get_passage(name)
        except MissingPassage:
            logger.error(
                "Passage %r not found. Available: [%s]",
                name, ", ".join(self.document.passages),
            )
            raise

        self.current = name
        self.choices = self.build_choices(passage)
        display = render_passage(
            passage,
            self.choices,
            self.settings.prompt_prefix,
            self.settings.passage_template,
        )

        results = []
        if passage.script:
            logger.debug("Running script for passage %s", passage.name)
            interpreter = Interpreter(self.store, self.settings.command_namespaces)
            results = interpreter.execute(passage.script)

        return PassageView(
            name=passage.name,
            text=passage.text,
            display=display,
            choices=list(self.choices),
            script=results,
        )

    def resume(self, name: str) -> list[Choice]:
        """Position the player on a passage without showing it or running its script."""
        passage = self.document.get_passage(name)
        self.current = name
        self.choices = self.build_choices(passage)
        return list(self.choices)

    def choose(self, number: int) -> PassageView:
        """Follow choice ``number`` (1-based) from the last shown passage.

        Raises:
            IndexError: no such choice.
            MissingPassage: the choice names a passage the story lacks;
                the player stays where it is.
        """
        if number < 1 or number > len(self.choices):
            raise IndexError(f"Choice {number} out of range (1-{len(self.choices)})")
        target = self.choices[number - 1].target
        if target not in self.document.passages:
            logger.warning(
                "Choice %d → %r does not match a passage. Available: [%s]",
                number, target, ", ".join(self.document.passages),
            )
            raise MissingPassage(target)
        logger.debug("Choice %d → %s", number, target)
        return self.show(target)

    def hide(self) -> None:
        if self.settings.reset_to_start:
            self.current = self.document.start
        self.choices = []
