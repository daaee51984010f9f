"""Per-type accessor tables.

Classes declare named accessors with decorators instead of relying on method
naming conventions:

    class Door:
        @getter("state")
        def current_state(self):
            return self._state

        @predicate("open")
        def check_open(self):
            return self._state == "open"

        @setter("state")
        def change_state(self, value):
            self._state = value

The resolver looks accessors up by key in a table built once per class from
its MRO. A subclass declaration for the same key and kind wins over its base.
Tables are cached on first use; accessors added to a class afterwards are not
picked up.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar
from weakref import WeakKeyDictionary

F = TypeVar("F", bound=Callable[..., Any])

_MARKER = "_keyvo_accessors"

GET = "get"
PREDICATE = "predicate"
SET = "set"


def _declare(kind: str, key: str) -> Callable[[F], F]:
    if not isinstance(key, str) or not key:
        raise ValueError(f"accessor key must be a non-empty string, got {key!r}")

    def decorator(fn: F) -> F:
        declared = getattr(fn, _MARKER, ())
        setattr(fn, _MARKER, (*declared, (kind, key)))
        return fn

    return decorator


def getter(key: str) -> Callable[[F], F]:
    """Mark a zero-argument method as the reader for ``key``."""
    return _declare(GET, key)


def predicate(key: str) -> Callable[[F], F]:
    """Mark a zero-argument method as the boolean-style reader for ``key``.

    Consulted after getters. The result is coerced with bool().
    """
    return _declare(PREDICATE, key)


def setter(key: str) -> Callable[[F], F]:
    """Mark a one-argument method as the writer for ``key``."""
    return _declare(SET, key)


@dataclass(frozen=True)
class AccessorTable:
    getters: dict[str, Callable] = field(default_factory=dict)
    predicates: dict[str, Callable] = field(default_factory=dict)
    setters: dict[str, Callable] = field(default_factory=dict)


_EMPTY = AccessorTable()
_tables: WeakKeyDictionary[type, AccessorTable] = WeakKeyDictionary()


def _build(cls: type) -> AccessorTable:
    table = AccessorTable()
    by_kind = {GET: table.getters, PREDICATE: table.predicates, SET: table.setters}
    # Base classes first so that subclasses overwrite.
    for klass in reversed(cls.__mro__):
        for member in vars(klass).values():
            if not inspect.isfunction(member):
                continue
            for kind, key in getattr(member, _MARKER, ()):
                by_kind[kind][key] = member
    if not (table.getters or table.predicates or table.setters):
        return _EMPTY
    return table


def accessor_table(cls: type) -> AccessorTable:
    """Return the accessor table for ``cls``, building it on first use."""
    try:
        return _tables[cls]
    except KeyError:
        pass
    except TypeError:
        # Not weak-referenceable; build without caching.
        return _build(cls)
    table = _build(cls)
    _tables[cls] = table
    return table
