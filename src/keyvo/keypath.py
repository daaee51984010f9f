"""Key path splitting."""

from __future__ import annotations

from collections.abc import Sequence


def split_key_path(key_path: str | Sequence[str]) -> list[str]:
    """Split a key path into its segments.

    Strings are split on ``.``; sequences of strings are returned as a list.
    An empty sequence is the receiver key, the same as the empty string.

        split_key_path("foo.bar")       # ["foo", "bar"]
        split_key_path(["foo", "bar"])  # ["foo", "bar"]
        split_key_path([])              # [""]
    """
    if isinstance(key_path, str):
        return key_path.split(".")
    if isinstance(key_path, Sequence) and not isinstance(key_path, (bytes, bytearray)):
        keys = list(key_path)
        if all(isinstance(key, str) for key in keys):
            return keys or [""]
    raise TypeError(
        f"key path must be a string or a sequence of strings, got {key_path!r}"
    )
