"""Key-value observing: per-object change notification and key path streams.

A KeyValueObservable owns a registry of observers, keyed by property name.
The registry is created on the first subscription and dropped again when the
last observer is disposed, so an unobserved object carries no state.

Changes are never detected automatically. After mutating a property that may
be observed, the mutator calls announce(obj, key); every observer registered
for that key receives the new value synchronously, in registration order.

Key paths are observed by chaining one key subscription per segment with
switch_map: when an intermediate value is replaced, the chain below it is
disposed and rebuilt against the new value.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Callable

from keyvo import config
from keyvo.coding import get_value_for_key, get_value_for_key_path
from keyvo.errors import ObserverDeliveryError
from keyvo.interfaces import KeyPathObservable
from keyvo.keypath import split_key_path
from keyvo.stream import Disposer, Emit, Stream, Subscription

logger = logging.getLogger("keyvo.observing")

_UNSET = object()


class _KeyObserver:
    __slots__ = ("emit", "active")

    def __init__(self, emit: Emit) -> None:
        self.emit = emit
        self.active = True


class KeyValueObservable(KeyPathObservable):
    """Base class for objects whose keys can be observed.

    Usage:
        class Person(KeyValueObservable):
            def __init__(self, name):
                self.name = name

            def rename(self, name):
                self.name = name
                self.did_change_value_for_key("name")

        p = Person("Ada")
        seen = []
        sub = p.observable_for_key("name").subscribe(seen.append)
        p.rename("Grace")
        # seen == ["Ada", "Grace"]
        sub.dispose()
    """

    # key -> observers in registration order; None while nothing is observed.
    _key_observers: dict[str, list[_KeyObserver]] | None = None

    def observable_for_key(self, key: str) -> Stream:
        return observable_for_key(self, key)

    def observable_for_key_path(self, key_path: str | Sequence[str]) -> Stream:
        return _compose(self, split_key_path(key_path))

    def did_change_value_for_key(self, key: str, value: Any = _UNSET) -> None:
        announce(self, key, value)


def _register(obj: KeyValueObservable, key: str, emit: Emit) -> _KeyObserver:
    registry = obj._key_observers
    if registry is None:
        registry = obj._key_observers = {}
        logger.debug("Created observer registry on %r", obj)
    observer = _KeyObserver(emit)
    registry.setdefault(key, []).append(observer)
    return observer


def _deregister(obj: KeyValueObservable, key: str, observer: _KeyObserver) -> None:
    if not observer.active:
        return
    observer.active = False
    registry = obj._key_observers
    observers = registry[key]
    observers.remove(observer)
    if not observers:
        del registry[key]
    if not registry:
        obj._key_observers = None
        logger.debug("Dropped observer registry on %r", obj)


def announce(obj: Any, key: str, value: Any = _UNSET) -> None:
    """Deliver the current value of ``key`` to its observers.

    Pass ``value`` to skip reading it back through get_value_for_key(). Does
    nothing when ``key`` has no observers. Observers that raise do not stop
    delivery to the others; their exceptions go to the configured error
    handler, or are raised together as ObserverDeliveryError once every
    observer has been called.
    """
    if not isinstance(obj, KeyValueObservable):
        return
    registry = obj._key_observers
    if not registry:
        return
    observers = registry.get(key)
    if not observers:
        return

    if value is _UNSET:
        value = get_value_for_key(obj, key)

    errors: list[Exception] = []
    # Snapshot: callbacks may subscribe, dispose or announce reentrantly.
    for observer in list(observers):
        if not observer.active:
            continue
        try:
            observer.emit(value)
        except Exception as exc:
            logger.exception("Observer for key %r on %r failed", key, obj)
            errors.append(exc)

    if errors:
        handler = config.get_error_handler()
        if handler is None:
            raise ObserverDeliveryError(key, errors) from errors[0]
        for exc in errors:
            handler(exc, obj, key)


def observable_for_key(obj: KeyValueObservable, key: str) -> Stream:
    """A stream of the values of one key.

    Each subscription registers its own observer, emits the current value
    before subscribe() returns, then every announced change until disposed.
    """
    if not isinstance(obj, KeyValueObservable):
        raise TypeError(f"{type(obj).__name__} is not a KeyValueObservable")

    def _on_subscribe(emit: Emit) -> Disposer:
        observer = _register(obj, key, emit)
        try:
            emit(get_value_for_key(obj, key))
        except BaseException:
            _deregister(obj, key, observer)
            raise
        return lambda: _deregister(obj, key, observer)

    return Stream(_on_subscribe)


def _follow(value: Any, keys: list[str]) -> Stream:
    """Inner stream for the rest of a key path below ``value``."""
    if value is None:
        return Stream.just(None)
    if isinstance(value, KeyPathObservable):
        return value.observable_for_key_path(keys)
    return Stream.just(get_value_for_key_path(value, keys))


def _compose(obj: KeyValueObservable, keys: list[str]) -> Stream:
    head = observable_for_key(obj, keys[0])
    if len(keys) == 1:
        return head
    rest = keys[1:]
    return head.switch_map(lambda value: _follow(value, rest))


def observable_for_key_path(obj: KeyPathObservable, key_path: str | Sequence[str]) -> Stream:
    """A stream of the values of a key path, rebuilt whenever a link changes.

        obj.foo = Foo(bar="baz")
        observable_for_key_path(obj, "foo.bar").subscribe(print)  # baz
        obj.foo = None
        announce(obj, "foo")                                      # None
    """
    keys = split_key_path(key_path)
    if isinstance(obj, KeyPathObservable):
        return obj.observable_for_key_path(keys)
    raise TypeError(f"{type(obj).__name__} is not a KeyPathObservable")


def subscribe(obj: KeyValueObservable, key: str, callback: Callable[[Any], None]) -> Subscription:
    """Subscribe ``callback`` to one key. Shorthand for observable_for_key(...).subscribe()."""
    return observable_for_key(obj, key).subscribe(callback)


def subscribe_path(
    obj: KeyPathObservable, key_path: str | Sequence[str], callback: Callable[[Any], None]
) -> Subscription:
    """Subscribe ``callback`` to a key path."""
    return observable_for_key_path(obj, key_path).subscribe(callback)


def observer_count(obj: Any, key: str | None = None) -> int:
    """Number of live observers on ``obj`` (for one key, or in total)."""
    registry = obj._key_observers if isinstance(obj, KeyValueObservable) else None
    if not registry:
        return 0
    if key is not None:
        return len(registry.get(key, ()))
    return sum(len(observers) for observers in registry.values())


def has_observers(obj: Any) -> bool:
    """True while ``obj`` holds an observer registry."""
    return isinstance(obj, KeyValueObservable) and obj._key_observers is not None
