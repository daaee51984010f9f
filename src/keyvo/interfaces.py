"""Optional capability interfaces.

The resolver and the path composer query these with isinstance(). An object
opts in by inheriting from the interface (or registering with it); nothing is
inferred from method names.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from keyvo.stream import Stream


class KeyPathCoding(ABC):
    """Objects that resolve whole key paths themselves.

    When present, the resolver hands the entire path to the object and does
    not consult any other convention.
    """

    @abstractmethod
    def get_value_for_key_path(self, key_path: str | Sequence[str]) -> Any: ...

    @abstractmethod
    def set_value_for_key_path(self, key_path: str | Sequence[str], value: Any) -> Any: ...


class KeyedGetter(ABC):
    """Objects with a generic ``get(key)`` reader."""

    @abstractmethod
    def get(self, key: str) -> Any: ...


class KeyedSetter(ABC):
    """Objects with a generic ``set(key, value)`` writer."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None: ...


class KeyPathObservable(ABC):
    """Objects that can produce a live stream for a key path."""

    @abstractmethod
    def observable_for_key_path(self, key_path: str | Sequence[str]) -> Stream: ...
