"""Key-value coding: read and write named properties by convention.

A key is resolved against an object through a fixed precedence chain.

Reads (get_value_for_key):
    1. KeyPathCoding        -> obj.get_value_for_key_path([key]), nothing else
    2. @getter(key)         -> method()
    3. @predicate(key)      -> bool(method())
    4. KeyedGetter          -> obj.get(key)
    5. raw field            -> mapping.get(key) / getattr(obj, key, None)

Writes (set_value_for_key):
    1. KeyPathCoding        -> obj.set_value_for_key_path([key], value)
    2. @setter(key)         -> method(value)
    3. KeyedSetter          -> obj.set(key, value)
    4. raw field            -> mapping[key] = value / setattr(obj, key, value)

Missing values read as None and short-circuit path traversal. Writes never
announce a change; the caller is responsible for calling announce().
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from keyvo.accessors import accessor_table
from keyvo.errors import InvalidKeyError, MissingPathSegmentError
from keyvo.interfaces import KeyedGetter, KeyedSetter, KeyPathCoding
from keyvo.keypath import split_key_path


def _check_key(key: object) -> None:
    if not isinstance(key, str) or not key:
        raise InvalidKeyError(key)


def _get_by_convention(obj: Any, key: str) -> Any:
    """Steps 2-5 of the read chain. The empty key is the receiver."""
    if key == "":
        return obj
    table = accessor_table(type(obj))
    fn = table.getters.get(key)
    if fn is not None:
        return fn(obj)
    fn = table.predicates.get(key)
    if fn is not None:
        return bool(fn(obj))
    if isinstance(obj, KeyedGetter):
        return obj.get(key)
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def _set_by_convention(obj: Any, key: str, value: Any) -> None:
    """Steps 2-4 of the write chain."""
    _check_key(key)
    fn = accessor_table(type(obj)).setters.get(key)
    if fn is not None:
        fn(obj, value)
    elif isinstance(obj, KeyedSetter):
        obj.set(key, value)
    elif isinstance(obj, MutableMapping):
        obj[key] = value
    else:
        setattr(obj, key, value)


def _get_path(obj: Any, keys: list[str]) -> Any:
    value = obj
    for index, key in enumerate(keys):
        if index and isinstance(value, KeyPathCoding):
            return value.get_value_for_key_path(keys[index:])
        value = _get_by_convention(value, key)
        if value is None:
            return None
    return value


def _set_path(obj: Any, keys: list[str], value: Any) -> None:
    _check_key(keys[-1])
    target = obj
    for index, key in enumerate(keys[:-1]):
        child = _get_by_convention(target, key)
        if child is None:
            raise MissingPathSegmentError(keys, key)
        if isinstance(child, KeyPathCoding):
            child.set_value_for_key_path(keys[index + 1:], value)
            return
        target = child
    _set_by_convention(target, keys[-1], value)


def get_value_for_key(obj: Any, key: str) -> Any:
    """Read one key. Returns None when the value is missing."""
    if key == "":
        return obj
    if isinstance(obj, KeyPathCoding):
        return obj.get_value_for_key_path([key])
    return _get_by_convention(obj, key)


def set_value_for_key(obj: Any, key: str, value: Any) -> None:
    """Write one key. Raises InvalidKeyError for an empty or non-string key."""
    _check_key(key)
    if isinstance(obj, KeyPathCoding):
        obj.set_value_for_key_path([key], value)
    else:
        _set_by_convention(obj, key, value)


def get_value_for_key_path(obj: Any, key_path: str | Sequence[str]) -> Any:
    """Read a key path, or None as soon as any segment is missing.

        get_value_for_key_path({"foo": {"bar": 1}}, "foo.bar")  # 1
        get_value_for_key_path({"foo": {}}, "foo.bar.baz")      # None
    """
    keys = split_key_path(key_path)
    if isinstance(obj, KeyPathCoding):
        return obj.get_value_for_key_path(keys)
    return _get_path(obj, keys)


def set_value_for_key_path(obj: Any, key_path: str | Sequence[str], value: Any) -> None:
    """Write the last segment of a key path on the object its prefix resolves to.

    Raises MissingPathSegmentError when an intermediate segment is missing.
    """
    keys = split_key_path(key_path)
    if isinstance(obj, KeyPathCoding):
        obj.set_value_for_key_path(keys, value)
    else:
        _set_path(obj, keys, value)


class KeyValueCoding(KeyPathCoding):
    """Base class giving hosts bound key path accessors.

    Resolution of the host's own keys uses the same convention chain as for
    any other object, minus the path-aware step (which is this class).
    """

    def get_value_for_key_path(self, key_path: str | Sequence[str]) -> Any:
        return _get_path(self, split_key_path(key_path))

    def set_value_for_key_path(self, key_path: str | Sequence[str], value: Any):
        _set_path(self, split_key_path(key_path), value)
        return self
