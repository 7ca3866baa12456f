"""
Reactive Stores - Observable Containers for Form State

🔄 Replay-on-Subscribe Observables:
This module implements the observable containers every form is built from.
A store holds one value, notifies its subscribers synchronously on change,
and replays the current value to every new subscriber immediately.

Key Features:
- Writable stores with set/update
- Derived stores recomputed from one or more sources
- Multi-level derivation (derived stores can feed other derived stores)
- Unsubscribe handles instead of a global registry
- Batched writes: subscribers are notified once every write has settled
"""

from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterator, List, Sequence, TypeVar, Union

T = TypeVar("T")

Subscriber = Callable[[Any], None]
Unsubscriber = Callable[[], None]

_MUTABLE_TYPES = (dict, list, set)

# Stores are single-threaded; a batch is never held across an await
_batch_depth = 0
_pending: List["Readable"] = []


def _safe_not_equal(a: Any, b: Any) -> bool:
    """Mutable containers always count as changed, they may be edited in place."""
    if isinstance(a, _MUTABLE_TYPES) or isinstance(b, _MUTABLE_TYPES):
        return True
    return a != b


@contextmanager
def batch() -> Iterator[None]:
    """
    Defer notifications of writable stores until the block exits.

    Every write inside the block is committed immediately, so ``get()``
    already returns the new value, but subscribers (and therefore derived
    stores) only hear about it once all writes are done.

    Usage:
        with batch():
            values.set({...})
            touched.set({...})
    """
    global _batch_depth
    _batch_depth += 1
    try:
        yield
    finally:
        _batch_depth -= 1
        if _batch_depth == 0:
            _flush()


def _flush() -> None:
    """Notify every queued store, even if one of the subscribers raises."""
    stores = list(_pending)
    _pending.clear()
    failure = None
    for store in stores:
        try:
            store._notify()
        except Exception as exc:
            if failure is None:
                failure = exc
    if failure is not None:
        raise failure


class Readable(Generic[T]):
    """
    Read-only observable value.

    Subscribers are called once immediately with the current value and then
    after every change, in subscription order.
    """

    def __init__(self, value: T = None):
        self._value = value
        self._subscribers: List[Subscriber] = []

    def get(self) -> T:
        """Current value, no side effects"""
        return self._value

    def subscribe(self, callback: Subscriber) -> Unsubscriber:
        """
        Register a callback and replay the current value to it.

        Args:
            callback: Function receiving each new value

        Returns:
            Function that removes the callback again
        """
        self._subscribers.append(callback)
        callback(self.get())

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)

    def _emit(self, value: T) -> None:
        if not _safe_not_equal(self._value, value):
            return
        self._value = value
        self._notify()

    def _notify(self) -> None:
        value = self._value
        # Copy so callbacks may unsubscribe while being notified
        for callback in list(self._subscribers):
            callback(value)

    def __repr__(self):
        return f"{self.__class__.__name__}({self._value!r})"


class Writable(Readable[T]):
    """Observable value that callers may replace or update."""

    def set(self, value: T) -> None:
        """Replace the value and notify every subscriber before returning"""
        if not _safe_not_equal(self._value, value):
            return
        self._value = value
        if _batch_depth:
            if self not in _pending:
                _pending.append(self)
            return
        self._notify()

    def update(self, fn: Callable[[T], T]) -> None:
        """Read-modify-write; subscribers only ever see the final value"""
        self.set(fn(self._value))


class Derived(Readable[T]):
    """
    Read-only store computed from other stores.

    The value is recomputed whenever any source notifies. ``get()`` always
    computes from the sources' current values, so a derived store read from
    inside another computation never returns a stale intermediate.
    """

    def __init__(self, sources: Union[Readable, Sequence[Readable]], fn: Callable[..., T]):
        super().__init__()
        self._single = isinstance(sources, Readable)
        self._sources: List[Readable] = [sources] if self._single else list(sources)
        self._fn = fn
        self._ready = False
        self._unsubscribers = [source.subscribe(self._on_source_change) for source in self._sources]
        self._ready = True
        self._value = self._compute()

    @property
    def sources(self) -> List[Readable]:
        return list(self._sources)

    def get(self) -> T:
        if not self._unsubscribers:
            return self._value
        return self._compute()

    def _compute(self) -> T:
        values = [source.get() for source in self._sources]
        if self._single:
            return self._fn(values[0])
        return self._fn(tuple(values))

    def _on_source_change(self, _value: Any) -> None:
        # Sources replay while being attached; compute once they are all in place
        if not self._ready:
            return
        self._emit(self._compute())

    def dispose(self) -> None:
        """Detach from all sources. The value is frozen afterwards."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()


def writable(value: T = None) -> Writable[T]:
    """Create a writable store"""
    return Writable(value)


def derived(sources: Union[Readable, Sequence[Readable]], fn: Callable[..., T]) -> Derived[T]:
    """
    Create a derived store.

    Usage:
        count = writable(1)
        doubled = derived(count, lambda value: value * 2)

        total = derived([count, doubled], lambda values: sum(values))
    """
    return Derived(sources, fn)


def get(store: Readable[T]) -> T:
    """Read a store's current value through a throwaway subscription"""
    captured = []
    unsubscribe = store.subscribe(captured.append)
    unsubscribe()
    return captured[0]


# Export main components
__all__ = [
    "Readable", "Writable", "Derived",
    "writable", "derived", "get", "batch",
    "Subscriber", "Unsubscriber",
]
