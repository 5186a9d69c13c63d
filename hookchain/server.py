"""HookServer: the single serialization point for a hook registry.

Every operation is queued on one FIFO mailbox and executed by one worker
thread, so registrations, unregistrations, status reads, resets, and whole
``call`` folds (callback bodies included) are totally ordered. A slow callback
therefore holds up all other traffic until it returns.

``register`` and ``unregister`` are fire-and-forget: they return as soon as the
request is queued. ``call``, ``status``, and ``reset`` block until the worker
has processed them, so anything queued earlier (by any thread) is visible to
them. Exceptions raised while running a ``call`` are re-raised in the calling
thread.

Usage:
    with HookServer(HooksConfig(register={"on_save": audit})) as hooks:
        hooks.register("on_save", notify)
        result = hooks.call("on_save", document)
"""

import queue
import threading
from collections.abc import Hashable, Iterable, Mapping
from concurrent.futures import Future
from typing import Any, Callable, NamedTuple

from rich.markup import escape

from console import HookConsole

from .callbacks import Callback, as_callback
from .config import HooksConfig
from .dispatcher import Dispatcher
from .errors import HookServerError, ReentrantCallError
from .registry import HookRegistry


_MISSING = object()
_STOP = object()


class _Request(NamedTuple):
    handler: Callable[..., Any]
    args: tuple
    future: Future | None  # None for casts


class HookServer:
    """Owns a HookRegistry and serializes all access to it through a worker thread.

    Args:
        config: Initial registrations, applied as the first request when the
            server starts. Failures there are reported like any bulk
            ``register`` (console warning, partial effect).
        registry: Store to serve. A fresh, empty ``HookRegistry`` by default.
        name: Used for the worker thread name and in console messages.
    """

    def __init__(
        self,
        config: HooksConfig | None = None,
        registry: HookRegistry | None = None,
        name: str = "hookchain",
    ):
        self._config = config
        self._registry = registry if registry is not None else HookRegistry()
        self._dispatcher = Dispatcher(self._registry)
        self._name = name
        self._mailbox: queue.Queue = queue.Queue()
        self._thread: threading.Thread | None = None
        # Guards start/stop against concurrent submissions.
        self._lifecycle_lock = threading.Lock()

    def __enter__(self) -> 'HookServer':
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    @property
    def name(self) -> str:
        return self._name

    @property
    def running(self) -> bool:
        return self._thread is not None

    # --- Lifecycle ---

    def start(self) -> 'HookServer':
        """Start the worker thread and queue the configured registrations."""
        with self._lifecycle_lock:
            if self._thread is not None:
                raise HookServerError(f"{self._name} server is already running")
            self._thread = threading.Thread(
                target=self._run, name=f"{self._name}-server", daemon=True,
            )
            self._thread.start()
            if self._config is not None and self._config.register:
                self._mailbox.put(_Request(
                    self._registry.insert_many, (_freeze_entries(self._config.register),), None,
                ))
        return self

    def stop(self, timeout: float | None = None) -> None:
        """Process everything already queued, then stop the worker.

        Requests submitted after ``stop`` raise ``HookServerError``. The
        registry keeps its contents; starting again serves the same state.
        """
        with self._lifecycle_lock:
            thread = self._thread
            if thread is None:
                return
            self._mailbox.put(_STOP)
            self._thread = None
        if threading.current_thread() is not thread:
            thread.join(timeout)

    # --- Mutations (fire-and-forget) ---

    def register(self, name_or_entries: Any, callback: Any = _MISSING) -> None:
        """Register callbacks.

        Forms:
            register(name, callback)
            register(name, [callback, ...])
            register({name: callback_or_list, ...})   # or [(name, value), ...]

        The single-name forms validate their callbacks immediately and raise
        ``InvalidCallbackError`` in the caller. The bulk form is validated
        entry by entry on the worker: the first bad entry stops it, earlier
        entries stay registered, and the failure is reported on the console.
        """
        if callback is _MISSING:
            self._cast(self._registry.insert_many, _freeze_entries(name_or_entries))
            return
        hash(name_or_entries)
        if isinstance(callback, list):
            value: Callback | list[Callback] = [as_callback(c) for c in callback]
        else:
            value = as_callback(callback)
        self._cast(self._registry.insert, name_or_entries, value)

    def unregister(self, name: Hashable, callback: Any) -> None:
        """Remove the first registration of *callback* under *name*, if any."""
        hash(name)
        self._cast(self._registry.delete, name, as_callback(callback))

    # --- Synchronous requests ---

    def call(self, name: Hashable, data: Any = None) -> Any:
        """Run hook *name* and return the final accumulator or halted value.

        Blocks until the worker has run every callback. Any exception from a
        callback is raised here.
        """
        return self._call(self._dispatcher.call, name, data)

    def status(self) -> dict[Hashable, list[Callback]]:
        """Point-in-time copy of every hook name and its callbacks."""
        return self._call(self._registry.snapshot)

    def reset(self) -> None:
        """Remove every registration; returns once the registry is empty."""
        self._call(self._registry.clear)

    # --- Mailbox ---

    def _cast(self, handler: Callable[..., Any], *args: Any) -> None:
        self._submit(_Request(handler, args, None))

    def _call(self, handler: Callable[..., Any], *args: Any) -> Any:
        if threading.current_thread() is self._thread:
            raise ReentrantCallError(
                f"{handler.__name__} was requested from inside a {self._name} callback; "
                f"only register/unregister may be used there"
            )
        future: Future = Future()
        self._submit(_Request(handler, args, future))
        return future.result()

    def _submit(self, request: _Request) -> None:
        with self._lifecycle_lock:
            if self._thread is None:
                raise HookServerError(f"{self._name} server is not running")
            self._mailbox.put(request)

    def _run(self) -> None:
        while True:
            request = self._mailbox.get()
            if request is _STOP:
                return
            if request.future is None:
                self._handle_cast(request)
            else:
                self._handle_call(request)

    def _handle_cast(self, request: _Request) -> None:
        # No caller waits on a cast; report the failure and keep serving.
        try:
            request.handler(*request.args)
        except BaseException as e:
            HookConsole().print_error(
                f"{self._name}: {request.handler.__name__} failed: {escape(repr(e))}"
            )

    def _handle_call(self, request: _Request) -> None:
        if not request.future.set_running_or_notify_cancel():
            return
        try:
            result = request.handler(*request.args)
        except BaseException as e:
            request.future.set_exception(e)
        else:
            request.future.set_result(result)


def _freeze_entries(entries: Mapping | Iterable) -> list:
    """Copy bulk entries so later changes by the caller do not leak in.

    List values inside (name, value) pairs are copied too. Values that are
    not iterable, and entries that are not pairs, are passed through
    untouched; the worker then reports them as a failed bulk registration.
    """
    if isinstance(entries, Mapping):
        pairs = list(entries.items())
    else:
        try:
            pairs = list(entries)
        except TypeError:
            return entries
    return [_freeze_entry(entry) for entry in pairs]


def _freeze_entry(entry: Any) -> Any:
    if isinstance(entry, (list, tuple)) and len(entry) == 2 and isinstance(entry[1], list):
        return (entry[0], list(entry[1]))
    return entry
