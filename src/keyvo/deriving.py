"""Derived keys: drive a property from an external stream.

Each value the stream emits is written with set_value_for_key(). The write
does not announce on its own; hosts that announce from their setters (for
example KeyValueStore) propagate derived values to their observers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable

from keyvo.coding import set_value_for_key
from keyvo.errors import DerivationError
from keyvo.stream import Stream, Subscription

logger = logging.getLogger("keyvo.deriving")


def derive_key_from_stream(obj: Any, key: str, stream: Stream) -> Subscription:
    """Write every value of ``stream`` to ``key`` on ``obj`` until disposed."""
    return stream.subscribe(lambda value: set_value_for_key(obj, key, value))


class KeyValueDeriving:
    """Base class for hosts with declared derived keys.

    Usage:
        class Thermostat(KeyValueStore, KeyValueDeriving):
            derived_keys = {
                "reading": lambda self: self.sensor.map(round),
            }

        t = Thermostat(...)
        t.init_derived_keys()
        ...
        t.dispose_derived_keys()
    """

    # key -> fn(self) returning the stream that drives the key
    derived_keys: Mapping[str, Callable[[Any], Stream]] = {}

    _derived_key_subscriptions: list[Subscription] | None = None

    def init_derived_keys(self) -> None:
        """Bind every entry of ``derived_keys``. May only be called once."""
        if self._derived_key_subscriptions is not None:
            raise DerivationError(f"derived keys of {self!r} are already initialized")
        self._derived_key_subscriptions = []
        for key, stream_fn in self.derived_keys.items():
            self.derive_key_from_stream(key, stream_fn(self))
        logger.debug("Initialized %d derived keys on %r", len(self.derived_keys), self)

    def derive_key_from_stream(self, key: str, stream: Stream) -> Subscription:
        if self._derived_key_subscriptions is None:
            self._derived_key_subscriptions = []
        subscription = derive_key_from_stream(self, key, stream)
        self._derived_key_subscriptions.append(subscription)
        return subscription

    def dispose_derived_keys(self) -> None:
        """Stop every derivation bound on this object."""
        subscriptions = self._derived_key_subscriptions or []
        self._derived_key_subscriptions = None
        for subscription in subscriptions:
            subscription.dispose()
