"""Persistent key-value store for script commands.

Layout of data/prefs.json:

    {"int": {"gold": 10}, "float": {"speed": 1.5}, "string": {"name": "Ada"}}

Every get/set reads and rewrites the whole file; there is one writer per
process and nothing is cached between calls.
"""

import json
from pathlib import Path
from typing import Any, Literal

from twee_story.commands import DEFAULT_FLOAT, DEFAULT_INT, DEFAULT_STRING
from twee_story.errors import StoreError

from .core import data_dir

PrefKind = Literal["int", "float", "string"]
PREF_KINDS: tuple[str, ...] = ("int", "float", "string")


def _empty() -> dict[str, dict[str, Any]]:
    return {kind: {} for kind in PREF_KINDS}


class PrefsStore:
    """JSON file implementation of twee_story.commands.KeyValueStore."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> dict[str, dict[str, Any]]:
        """Read every section. Raises StoreError if the file is unreadable."""
        data = _empty()
        if self.path.is_file():
            try:
                stored = json.loads(self.path.read_text())
            except (OSError, ValueError) as e:
                raise StoreError(f"Cannot read {self.path}: {e}") from e
            if not isinstance(stored, dict):
                raise StoreError(f"Cannot read {self.path}: not a JSON object")
            for kind in PREF_KINDS:
                data[kind].update(stored.get(kind, {}))
        return data

    def _get(self, kind: str, key: str, default: Any) -> Any:
        return self.load()[kind].get(key, default)

    def _set(self, kind: str, key: str, value: Any) -> None:
        data = self.load()
        data[kind][key] = value
        self._write(data)

    def _write(self, data: dict[str, dict[str, Any]]) -> None:
        try:
            self.path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            raise StoreError(f"Cannot write {self.path}: {e}") from e

    def get_int(self, key: str, default: int = DEFAULT_INT) -> int:
        return int(self._get("int", key, default))

    def set_int(self, key: str, value: int) -> None:
        self._set("int", key, value)

    def get_float(self, key: str, default: float = DEFAULT_FLOAT) -> float:
        return float(self._get("float", key, default))

    def set_float(self, key: str, value: float) -> None:
        self._set("float", key, value)

    def get_string(self, key: str, default: str = DEFAULT_STRING) -> str:
        return str(self._get("string", key, default))

    def set_string(self, key: str, value: str) -> None:
        self._set("string", key, value)

    def delete_all(self) -> None:
        self._write(_empty())


def prefs_store() -> PrefsStore:
    return PrefsStore(data_dir() / "prefs.json")


def get_prefs() -> dict[str, dict[str, Any]]:
    """All stored prefs grouped by kind."""
    return prefs_store().load()


def set_pref(kind: PrefKind, key: str, value: Any) -> dict[str, dict[str, Any]]:
    """Set one pref, coercing ``value`` to its kind. Returns all prefs.

    Raises ValueError for an unknown kind or a value that does not coerce.
    """
    store = prefs_store()
    if kind == "int":
        store.set_int(key, int(value))
    elif kind == "float":
        store.set_float(key, float(value))
    elif kind == "string":
        store.set_string(key, str(value))
    else:
        raise ValueError(f"Unknown pref kind: {kind}")
    return store.load()


def clear_prefs() -> None:
    """Delete every stored pref."""
    prefs_store().delete_all()
