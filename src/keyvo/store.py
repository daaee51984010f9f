"""KeyValueStore: observable key container with subscription lifecycle.

A KeyValueStore wraps a fixed schema of named keys. set() writes and
announces, so observers (including key path observers reaching through the
store) see every change. Keys outside the schema are ignored on write and
read as None.
"""

from __future__ import annotations

import logging
from typing import Any

from keyvo.interfaces import KeyedGetter, KeyedSetter
from keyvo.observing import KeyValueObservable, announce
from keyvo.stream import Subscription

logger = logging.getLogger("keyvo.store")


class KeyValueStore(KeyValueObservable, KeyedGetter, KeyedSetter):
    """Key-based value container that announces its own writes."""

    def __init__(self, schema: dict[str, object], initial: dict | None = None) -> None:
        self._values: dict[str, object] = {}
        self._subscriptions: list[Subscription] = []
        for key, default in schema.items():
            self._values[key] = initial.get(key, default) if initial else default

    def keys(self) -> list[str]:
        return list(self._values)

    def get(self, key: str) -> object:
        return self._values.get(key)

    def set(self, key: str, value: object) -> None:
        if key not in self._values:
            logger.debug("Ignoring write to unknown key %r", key)
            return
        self._values[key] = value
        announce(self, key, value)

    def update(self, values: dict[str, Any]) -> None:
        """Write all known values first, then announce each key in order.

        Observers never see a state where only some of the keys were updated.
        """
        known = {}
        for key, value in values.items():
            if key in self._values:
                known[key] = value
            else:
                logger.debug("Ignoring write to unknown key %r", key)
        self._values.update(known)
        for key, value in known.items():
            announce(self, key, value)

    def own(self, subscription: Subscription) -> Subscription:
        """Tie a subscription's lifetime to this store."""
        self._subscriptions.append(subscription)
        return subscription

    def dispose(self) -> None:
        """Dispose every owned subscription."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.dispose()

    def __repr__(self) -> str:
        return f"KeyValueStore({self._values!r})"
