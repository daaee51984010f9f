"""Push-based streams with operator chaining.

A Stream is cold: nothing happens until subscribe(), which runs the stream's
subscribe function synchronously on the caller's stack. That function may
emit straight away (emit-on-subscribe) and returns a disposer that undoes
whatever it set up. Operators return new streams; disposing a subscription
to an operator stream disposes everything upstream of it.

EventStream is the hot variant: values are pushed in with emit() and fan out
to whoever is subscribed at that moment.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Disposer = Callable[[], None]
Emit = Callable[[T], None]


class Subscription:
    """Handle for a live subscription. dispose() is idempotent."""

    __slots__ = ("_disposer", "_disposed")

    def __init__(self, disposer: Disposer | None = None) -> None:
        self._disposer = disposer
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        disposer, self._disposer = self._disposer, None
        if disposer is not None:
            disposer()

    def _attach(self, disposer: Disposer | None) -> None:
        # Disposed while the stream was still subscribing: tear down now.
        if self._disposed:
            if disposer is not None:
                disposer()
        else:
            self._disposer = disposer

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Subscription({state})"


class Stream(Generic[T]):
    """Cold push stream built from a subscribe function."""

    __slots__ = ("_on_subscribe",)

    def __init__(self, on_subscribe: Callable[[Emit[T]], Disposer | None]) -> None:
        self._on_subscribe = on_subscribe

    @staticmethod
    def just(value: T) -> Stream[T]:
        """A stream that emits ``value`` once on every subscription."""
        return Stream(lambda emit: emit(value))

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Start the stream. Values already emitted during this call are delivered."""
        subscription = Subscription()

        def _emit(value: T) -> None:
            if not subscription.disposed:
                callback(value)

        subscription._attach(self._on_subscribe(_emit))
        return subscription

    def map(self, fn: Callable[[T], U]) -> Stream[U]:
        """Transform values through fn."""
        return Stream(lambda emit: self.subscribe(lambda v: emit(fn(v))).dispose)

    def filter(self, fn: Callable[[T], bool]) -> Stream[T]:
        """Only pass values where fn returns True."""
        return Stream(
            lambda emit: self.subscribe(lambda v: emit(v) if fn(v) else None).dispose
        )

    def switch_map(self, fn: Callable[[T], Stream[U]]) -> Stream[U]:
        """Map each value to an inner stream and follow only the latest one.

        A new upstream value disposes the previous inner subscription before
        the next one is subscribed. Values from a superseded inner stream are
        dropped, including ones it was still emitting synchronously when it
        was superseded. If the downstream callback raises on the first value
        of a new inner stream, that inner subscription is kept and the error
        is raised to whoever emitted the upstream value.
        """

        def _on_subscribe(emit: Emit[U]) -> Disposer:
            inner: list[Subscription | None] = [None]
            generation = [0]

            def _drop_inner() -> None:
                previous, inner[0] = inner[0], None
                if previous is not None:
                    previous.dispose()

            def _on_outer(value: T) -> None:
                generation[0] += 1
                current = generation[0]
                _drop_inner()
                subscribing = True
                deferred: list[Exception] = []

                def _on_inner(v: U) -> None:
                    if generation[0] != current:
                        return
                    if not subscribing:
                        emit(v)
                        return
                    # A downstream fault on the first value must not abort the
                    # inner subscription; it is re-raised once that is in place.
                    try:
                        emit(v)
                    except Exception as exc:
                        deferred.append(exc)

                try:
                    subscription = fn(value).subscribe(_on_inner)
                finally:
                    subscribing = False
                if generation[0] == current:
                    inner[0] = subscription
                else:
                    # Superseded while subscribing (reentrant upstream emit).
                    subscription.dispose()
                if deferred:
                    raise deferred[0]

            try:
                outer = self.subscribe(_on_outer)
            except BaseException:
                generation[0] += 1
                _drop_inner()
                raise

            def _dispose() -> None:
                generation[0] += 1
                outer.dispose()
                _drop_inner()

            return _dispose

        return Stream(_on_subscribe)


class EventStream(Stream[T]):
    """Hot stream: emit() pushes a value to all current subscribers."""

    __slots__ = ("_subscribers", "_subscriptions", "_disposed")

    def __init__(self) -> None:
        super().__init__(self._add_subscriber)
        self._subscribers: list[Emit[T]] = []
        self._subscriptions: list[Subscription] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _add_subscriber(self, emit: Emit[T]) -> Disposer | None:
        if self._disposed:
            return None
        self._subscribers.append(emit)

        def _remove() -> None:
            try:
                self._subscribers.remove(emit)
            except ValueError:
                pass  # already removed by dispose()

        return _remove

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        subscription = super().subscribe(callback)
        if self._disposed:
            subscription.dispose()
        else:
            self._subscriptions = [s for s in self._subscriptions if not s.disposed]
            self._subscriptions.append(subscription)
        return subscription

    def emit(self, value: T) -> None:
        """Push a value to all subscribers."""
        if self._disposed:
            return
        # Snapshot: callbacks may subscribe or dispose while we iterate.
        for emit in list(self._subscribers):
            emit(value)

    def dispose(self) -> None:
        """Tear down this stream and every subscription to it."""
        self._disposed = True
        self._subscribers.clear()
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.dispose()
