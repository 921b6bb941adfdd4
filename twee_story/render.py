"""Handlebars rendering of passage display text.

Template variables:

    name           passage name
    text           raw passage body, still holding [[choice]] markers
    choices        [{"number": 1, "label": "north", "target": "north"}, ...]
    prompt_prefix  heading shown before the choice list

Custom helpers:

    {{#links text}}...{{label}}...{{/links}}
        Re-renders every [[label]] marker in ``text`` through the block.
"""

from collections.abc import Callable
from typing import Any

import pybars

from twee_story.choices import replace_choices
from twee_story.errors import RenderError
from twee_story.models import Choice, Passage

DEFAULT_PASSAGE_TEMPLATE = (
    "{{#links text}}<color=blue>{{{label}}}</color>{{/links}}"
    "{{#if choices}}\n{{{prompt_prefix}}}"
    "{{#each choices}}{{number}}. <color=blue>{{{label}}}</color>\n{{/each}}"
    "{{/if}}"
)

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


# ── Custom Handlebars helpers ────────────────────────────


def _helper_links(this, options, text):
    """{{#links text}}...{{/links}} — render each [[label]] through the block."""
    def render(label: str) -> str:
        return "".join(options["fn"]({"label": label}))
    return replace_choices(str(text or ""), render)


_HELPERS: dict[str, Callable] = {
    "links": _helper_links,
}


def render_template(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context, helpers=_HELPERS))
    except Exception as e:
        raise RenderError(f"Template error: {e}") from e


def build_context(
    passage: Passage, choices: list[Choice], prompt_prefix: str
) -> dict[str, Any]:
    return {
        "name": passage.name,
        "text": passage.text,
        "choices": [c.model_dump() for c in choices],
        "prompt_prefix": prompt_prefix,
    }


def render_passage(
    passage: Passage,
    choices: list[Choice],
    prompt_prefix: str,
    template: str | None = None,
) -> str:
    """Render display text for a passage with the default or a custom template."""
    context = build_context(passage, choices, prompt_prefix)
    return render_template(template or DEFAULT_PASSAGE_TEMPLATE, context)
