"""Exception types raised by keyvo.

Reads never raise for missing data (absence is ``None``). Errors are reserved
for structurally invalid calls and for observer faults surfaced after a
delivery pass.
"""

from __future__ import annotations


class KeyValueError(Exception):
    """Base class for all keyvo errors."""


class InvalidKeyError(KeyValueError, ValueError):
    """A write was attempted with an empty or non-string key."""

    def __init__(self, key: object) -> None:
        super().__init__(f"key must be a non-empty string, got {key!r}")
        self.key = key


class MissingPathSegmentError(KeyValueError, LookupError):
    """An intermediate segment of a key path resolved to nothing during a write."""

    def __init__(self, path: list[str], segment: str) -> None:
        super().__init__(
            f"cannot set {'.'.join(path)!r}: segment {segment!r} is missing"
        )
        self.path = path
        self.segment = segment


class ObserverDeliveryError(KeyValueError):
    """One or more observers raised while a key change was being delivered.

    Delivery to the remaining observers always completes first; ``errors``
    holds every exception in delivery order.
    """

    def __init__(self, key: str, errors: list[Exception]) -> None:
        super().__init__(f"{len(errors)} observer(s) failed for key {key!r}")
        self.key = key
        self.errors = errors


class DerivationError(KeyValueError):
    """Derived keys were initialized twice on the same object."""
