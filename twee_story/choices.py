"""Choice markers in passage text: ``[[target]]``."""

import re
from collections.abc import Callable

CHOICE_PATTERN = re.compile(r"\[\[(.*?)\]\]")


def extract_choices(text: str) -> list[str]:
    """Return the inner text of every ``[[...]]`` marker, in order.

    Duplicates are kept. The first ``]]`` after ``[[`` closes the marker.
    """
    return [match.group(1) for match in CHOICE_PATTERN.finditer(text)]


def replace_choices(text: str, replace: Callable[[str], str]) -> str:
    """Replace every ``[[label]]`` marker with ``replace(label)``."""
    return CHOICE_PATTERN.sub(lambda m: replace(m.group(1)), text)
