"""Dispatcher: run every callback of a hook as a left fold.

The accumulator starts as the caller's data and is replaced by each callback's
return value. A callback returning ``Halt(value)`` ends the fold early with
``value`` as the result; the remaining callbacks are skipped.

Exceptions raised by a callback, including ``ArityMismatchError`` when the
accumulator does not fit the callback, end the fold and propagate unchanged.
"""

from collections.abc import Hashable, Iterable
from typing import Any

from .callbacks import Callback
from .registry import HookRegistry
from .signals import Halt, interpret


def fold(callbacks: Iterable[Callback], data: Any = None) -> Any:
    """Invoke *callbacks* in order, threading the accumulator through them."""
    accumulator = data
    for callback in callbacks:
        signal = interpret(callback.invoke(accumulator))
        if isinstance(signal, Halt):
            return signal.value
        accumulator = signal.value
    return accumulator


class Dispatcher:
    """Looks up a hook's callbacks in a registry and folds over them."""

    def __init__(self, registry: HookRegistry):
        self._registry = registry

    @property
    def registry(self) -> HookRegistry:
        return self._registry

    def call(self, name: Hashable, data: Any = None) -> Any:
        """Run hook *name* with *data* as the initial accumulator.

        An unregistered name is not an error: *data* is returned unchanged.
        """
        return fold(self._registry.get(name, ()), data)
