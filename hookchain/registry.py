"""Hook storage: hook name -> ordered list of callbacks.

The registry is a plain, single-threaded store. It does no locking of its
own; ``HookServer`` owns one instance and funnels every access through its
worker thread. It can also be used directly where no concurrency is involved,
e.g. in tests or a single-threaded script.
"""

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from rich.markup import escape

from console import HookConsole

from .callbacks import Callback, as_callback


class HookRegistry:
    """Ordered callback lists keyed by hook name.

    Callbacks are kept in registration order; registering the same callback
    twice stores it twice. A name whose last callback is removed is dropped
    entirely, so it no longer shows up in ``snapshot()``.
    """

    def __init__(self):
        self._items: dict[Hashable, list[Callback]] = {}

    def __contains__(self, name: Hashable) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)

    def get(self, name: Hashable, default: Any = None) -> list[Callback] | Any:
        """Return the callback list for *name*, or *default* if unregistered."""
        return self._items.get(name, default)

    def names(self) -> list[Hashable]:
        """Registered hook names, in first-registration order."""
        return list(self._items)

    def insert(self, name: Hashable, callback: Any) -> None:
        """Append a callback (or each callback in a list) to *name*.

        Values go through ``as_callback``, so plain functions and reference
        shorthands are accepted. A list is coerced in full before anything is
        stored: one invalid item leaves *name* untouched.

        Raises:
            InvalidCallbackError: if a value cannot be coerced.
            TypeError: if *name* is not hashable.
        """
        items = callback if isinstance(callback, list) else [callback]
        coerced = [as_callback(item) for item in items]
        if not coerced:
            return
        # Rebuild rather than append so lists handed out earlier are not mutated.
        self._items[name] = self._items.get(name, []) + coerced

    def insert_many(self, entries: Mapping | Iterable) -> bool:
        """Bulk registration from a mapping or an iterable of (name, value) pairs.

        Entries are applied one by one. The first entry that fails stops the
        whole operation: entries before it remain registered, it and every
        entry after it are skipped. The failure is reported as a console
        warning and never raised.

        Returns:
            True if every entry was registered, False otherwise.
        """
        try:
            pairs = entries.items() if isinstance(entries, Mapping) else entries
            for name, value in pairs:
                self.insert(name, value)
        except Exception as e:
            HookConsole().print_warning(f"error registering callbacks: {escape(repr(e))}")
            return False
        return True

    def delete(self, name: Hashable, callback: Any) -> None:
        """Remove the first occurrence of *callback* under *name*.

        Unknown names and callbacks that are not registered are ignored.
        """
        items = self._items.get(name)
        if not items:
            return
        target = as_callback(callback)
        remaining = list(items)
        try:
            remaining.remove(target)
        except ValueError:
            return
        if remaining:
            self._items[name] = remaining
        else:
            del self._items[name]

    def clear(self) -> None:
        """Remove every hook."""
        self._items.clear()

    def snapshot(self) -> dict[Hashable, list[Callback]]:
        """Copy of the full mapping; later mutations do not affect it."""
        return {name: list(callbacks) for name, callbacks in self._items.items()}
