"""
ListenerRegistry — the ordered set of active listeners.

Insertion order is dispatch order. Only objects that expose the listener
capability are accepted; anything else raises TypeError at registration
time rather than failing later in the middle of a broadcast.
"""

import threading
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

from .listeners import is_listener


def _check_listener(obj: Any) -> Any:
    if not is_listener(obj):
        raise TypeError(
            f"{type(obj).__name__} is not a trace listener "
            "(needs write, write_line, flush, close, indent_level, indent_size)"
        )
    return obj


class ListenerRegistry:
    """Thread-safe ordered collection of listeners.

    Supports index access (``registry[0]``), lookup by listener name
    (``registry['audit']``), item assignment, ``add``/``insert``/``remove``
    and ``clear``. Iteration walks a snapshot, so a listener may safely
    mutate the registry while a broadcast is in progress.

    Usage::

        registry = ListenerRegistry()
        registry.add(ConsoleListener())
        registry.add(FileListener('trace.log'))
        for listener in registry:
            listener.write_line("hello")
    """

    def __init__(self, listeners: Optional[Iterable[Any]] = None):
        self._lock = threading.RLock()
        self._items: List[Any] = []
        for listener in listeners or ():
            self.add(listener)

    # -- mutation ----------------------------------------------------------

    def add(self, listener: Any) -> int:
        """Append a listener; returns its index."""
        _check_listener(listener)
        with self._lock:
            self._items.append(listener)
            return len(self._items) - 1

    append = add

    def extend(self, listeners: Iterable[Any]) -> None:
        for listener in listeners:
            self.add(listener)

    def insert(self, index: int, listener: Any) -> None:
        _check_listener(listener)
        with self._lock:
            self._items.insert(index, listener)

    def remove(self, listener: Union[Any, str]) -> None:
        """Remove a listener by identity or by name.

        Raises:
            ValueError: if no such listener is registered.
        """
        with self._lock:
            if isinstance(listener, str):
                target = self.get(listener)
                if target is None:
                    raise ValueError(f"No listener named {listener!r}")
                listener = target
            for i, item in enumerate(self._items):
                if item is listener:
                    del self._items[i]
                    return
            raise ValueError(f"{listener!r} is not registered")

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def discard_all(self, listeners: Iterable[Any]) -> None:
        """Remove each of ``listeners`` that is still registered."""
        doomed = {id(item) for item in listeners}
        with self._lock:
            self._items = [item for item in self._items
                           if id(item) not in doomed]

    def __setitem__(self, index: int, listener: Any) -> None:
        _check_listener(listener)
        with self._lock:
            self._items[index] = listener

    def __delitem__(self, index: int) -> None:
        with self._lock:
            del self._items[index]

    # -- access ------------------------------------------------------------

    def get(self, name: str) -> Optional[Any]:
        """Return the first listener with the given name, or None."""
        with self._lock:
            for item in self._items:
                if getattr(item, 'name', None) == name:
                    return item
        return None

    def __getitem__(self, key: Union[int, str]) -> Any:
        if isinstance(key, str):
            found = self.get(key)
            if found is None:
                raise KeyError(key)
            return found
        with self._lock:
            return self._items[key]

    def index(self, listener: Any) -> int:
        with self._lock:
            for i, item in enumerate(self._items):
                if item is listener:
                    return i
        raise ValueError(f"{listener!r} is not registered")

    def snapshot(self) -> Tuple[Any, ...]:
        """The listeners in dispatch order, as an immutable tuple."""
        with self._lock:
            return tuple(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __contains__(self, listener: Any) -> bool:
        with self._lock:
            return any(item is listener for item in self._items)

    def __repr__(self):
        return f"ListenerRegistry({list(self.snapshot())!r})"
