"""Command registry for dotted script commands.

Script lines such as

    Store.SetInt "gold" 10
    Store.GetString "name"

are dispatched through an immutable name → handler mapping built once per
interpreter. Handlers operate on a key-value store matching the
``KeyValueStore`` protocol:

    get_int(key, default) / set_int(key, value)
    get_float(key, default) / set_float(key, value)
    get_string(key, default) / set_string(key, value)
    delete_all()

Two stores ship with the core:

    MemoryStore  — dict-backed, nothing persisted. Used by tests and for
                   throwaway play sessions.
    PrefsStore   — JSON file under the data dir (backend.storage.prefs).

Every command is registered under each configured namespace, so stories
written against ``PlayerPrefs.SetInt`` keep working next to ``Store.SetInt``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from functools import partial
from types import MappingProxyType
from typing import Protocol

from twee_story.errors import CommandArgumentError
from twee_story.values import FloatValue, IntValue, TextValue

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACES: tuple[str, ...] = ("Store", "PlayerPrefs")

DEFAULT_INT = 0
DEFAULT_FLOAT = 0.0
DEFAULT_STRING = ""


# ---------------------------------------------------------------------------
# Protocol: every key-value store must match these signatures
# ---------------------------------------------------------------------------

class KeyValueStore(Protocol):
    """Typed slots read and written by script commands.

    Backing failures are raised as StoreError so the interpreter can skip
    just the line that hit them.
    """

    def get_int(self, key: str, default: int = DEFAULT_INT) -> int: ...

    def set_int(self, key: str, value: int) -> None: ...

    def get_float(self, key: str, default: float = DEFAULT_FLOAT) -> float: ...

    def set_float(self, key: str, value: float) -> None: ...

    def get_string(self, key: str, default: str = DEFAULT_STRING) -> str: ...

    def set_string(self, key: str, value: str) -> None: ...

    def delete_all(self) -> None: ...


# ---------------------------------------------------------------------------
# MemoryStore: in-process store, nothing persisted
# ---------------------------------------------------------------------------

class MemoryStore:
    """Dict-backed key-value store. Each slot type has its own namespace."""

    def __init__(self) -> None:
        self.ints: dict[str, int] = {}
        self.floats: dict[str, float] = {}
        self.strings: dict[str, str] = {}

    def get_int(self, key: str, default: int = DEFAULT_INT) -> int:
        return self.ints.get(key, default)

    def set_int(self, key: str, value: int) -> None:
        self.ints[key] = value

    def get_float(self, key: str, default: float = DEFAULT_FLOAT) -> float:
        return self.floats.get(key, default)

    def set_float(self, key: str, value: float) -> None:
        self.floats[key] = value

    def get_string(self, key: str, default: str = DEFAULT_STRING) -> str:
        return self.strings.get(key, default)

    def set_string(self, key: str, value: str) -> None:
        self.strings[key] = value

    def delete_all(self) -> None:
        self.ints.clear()
        self.floats.clear()
        self.strings.clear()


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

Value = IntValue | FloatValue | TextValue
Handler = Callable[[list[str]], Value | None]
CommandRegistry = Mapping[str, Handler]


def _unquote(arg: str) -> str:
    return arg.strip('"')


def _expect(command: str, args: list[str], count: int) -> None:
    if len(args) != count:
        raise CommandArgumentError(
            f"{command} expects {count} argument(s), got {len(args)}: {args}"
        )


def _set_int(store: KeyValueStore, args: list[str]) -> None:
    _expect("SetInt", args, 2)
    key = _unquote(args[0])
    try:
        value = int(args[1])
    except ValueError as e:
        raise CommandArgumentError(f"SetInt value is not an integer: {args[1]}") from e
    store.set_int(key, value)
    logger.debug("SetInt key=%s value=%d", key, value)


def _set_float(store: KeyValueStore, args: list[str]) -> None:
    _expect("SetFloat", args, 2)
    key = _unquote(args[0])
    try:
        value = float(args[1])
    except ValueError as e:
        raise CommandArgumentError(f"SetFloat value is not a number: {args[1]}") from e
    store.set_float(key, value)
    logger.debug("SetFloat key=%s value=%s", key, value)


def _set_string(store: KeyValueStore, args: list[str]) -> None:
    _expect("SetString", args, 2)
    key = _unquote(args[0])
    value = _unquote(args[1])
    store.set_string(key, value)
    logger.debug("SetString key=%s value=%s", key, value)


def _get_int(store: KeyValueStore, args: list[str]) -> IntValue:
    _expect("GetInt", args, 1)
    key = _unquote(args[0])
    value = store.get_int(key, DEFAULT_INT)
    logger.debug("GetInt key=%s value=%d", key, value)
    return IntValue(value=value)


def _get_float(store: KeyValueStore, args: list[str]) -> FloatValue:
    _expect("GetFloat", args, 1)
    key = _unquote(args[0])
    value = store.get_float(key, DEFAULT_FLOAT)
    logger.debug("GetFloat key=%s value=%s", key, value)
    return FloatValue(value=value)


def _get_string(store: KeyValueStore, args: list[str]) -> TextValue:
    _expect("GetString", args, 1)
    key = _unquote(args[0])
    value = store.get_string(key, DEFAULT_STRING)
    logger.debug("GetString key=%s value=%s", key, value)
    return TextValue(value=value)


_HANDLERS: dict[str, Callable[[KeyValueStore, list[str]], Value | None]] = {
    "SetInt": _set_int,
    "SetFloat": _set_float,
    "SetString": _set_string,
    "GetInt": _get_int,
    "GetFloat": _get_float,
    "GetString": _get_string,
}


def build_registry(
    store: KeyValueStore, namespaces: Iterable[str] = DEFAULT_NAMESPACES
) -> CommandRegistry:
    """Bind every handler to ``store`` under each namespace.

    The returned mapping is read-only.
    """
    registry: dict[str, Handler] = {}
    for namespace in namespaces:
        for name, handler in _HANDLERS.items():
            registry[f"{namespace}.{name}"] = partial(handler, store)
    return MappingProxyType(registry)
