"""Callback representation.

A registered callback is one of four variants:

    Thunk(fn)                          fn()
    Unary(fn)                          fn(acc)
    Binary(fn)                         fn(acc[0], acc[1])
    DeferredRef(target, member, arity) resolved when invoked, any arity

Variants are frozen dataclasses, so two callbacks are equal when they wrap the
same function object (or name the same target, member, and arity). That
equality is what ``unregister`` uses to find the entry to remove.

``as_callback`` turns the shorthand forms accepted by ``register`` into a
variant: plain callables (wrapped by their positional arity), 3-tuples,
``"module:member/arity"`` strings, and ``{"target", "member", "arity"}``
mappings.
"""

import inspect
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from importlib import import_module
from typing import Any, Callable, ClassVar

from .errors import ArityMismatchError, InvalidCallbackError


_REFERENCE_RE = re.compile(r"^(?P<target>[\w.]+):(?P<member>[\w.]+)/(?P<arity>\d+)$")


class Callback(ABC):
    """Base class for the callback variants."""

    arity: int

    @abstractmethod
    def invoke(self, accumulator: Any) -> Any:
        """Run the callback against the current accumulator."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable form, e.g. ``audit.hooks:record/1``."""
        ...

    @property
    def is_deferred(self) -> bool:
        return False


@dataclass(frozen=True)
class Thunk(Callback):
    """Immediate function taking no arguments; the accumulator is not passed."""
    fn: Callable[[], Any]
    arity: ClassVar[int] = 0

    def invoke(self, accumulator: Any) -> Any:
        return self.fn()

    def describe(self) -> str:
        return f"{_qualified_name(self.fn)}/0"


@dataclass(frozen=True)
class Unary(Callback):
    """Immediate function called with the accumulator."""
    fn: Callable[[Any], Any]
    arity: ClassVar[int] = 1

    def invoke(self, accumulator: Any) -> Any:
        return self.fn(accumulator)

    def describe(self) -> str:
        return f"{_qualified_name(self.fn)}/1"


@dataclass(frozen=True)
class Binary(Callback):
    """Immediate function called with the two items of a 2-item accumulator.

    By convention the callback returns the updated first item, or a fresh
    ``[first, second]`` pair; whatever it returns is the next accumulator.
    """
    fn: Callable[[Any, Any], Any]
    arity: ClassVar[int] = 2

    def invoke(self, accumulator: Any) -> Any:
        first, second = _positional_args(self, accumulator, 2)
        return self.fn(first, second)

    def describe(self) -> str:
        return f"{_qualified_name(self.fn)}/2"


@dataclass(frozen=True)
class DeferredRef(Callback):
    """Reference to ``target.member`` looked up every time it is invoked.

    ``target`` is either a dotted module path, imported on demand, or any
    object. ``member`` may itself be dotted (``"Class.method"``).

    Arity 0 calls ``fn()``, arity 1 calls ``fn(acc)``, and any other arity
    unpacks the accumulator, which must then be a list or tuple of exactly
    ``arity`` items.
    """
    target: Any
    member: str
    arity: int

    def __post_init__(self):
        if not isinstance(self.member, str) or not self.member:
            raise InvalidCallbackError(f"DeferredRef member must be a non-empty string, got {self.member!r}")
        if isinstance(self.arity, bool) or not isinstance(self.arity, int) or self.arity < 0:
            raise InvalidCallbackError(f"DeferredRef arity must be an integer >= 0, got {self.arity!r}")

    @property
    def is_deferred(self) -> bool:
        return True

    def resolve(self) -> Callable[..., Any]:
        """Import the target (if given by name) and look up the member."""
        obj = import_module(self.target) if isinstance(self.target, str) else self.target
        for part in self.member.split('.'):
            obj = getattr(obj, part)
        return obj

    def invoke(self, accumulator: Any) -> Any:
        fn = self.resolve()
        if self.arity == 1:
            return fn(accumulator)
        if self.arity == 0:
            return fn()
        return fn(*_positional_args(self, accumulator, self.arity))

    def describe(self) -> str:
        target = self.target if isinstance(self.target, str) else _qualified_name(self.target)
        return f"{target}:{self.member}/{self.arity}"


def as_callback(value: Any) -> Callback:
    """Coerce a registration value into a Callback variant.

    Raises:
        InvalidCallbackError: if the value is not a callback, a reference
            in one of the accepted shapes, or a callable of arity 0 to 2.
    """
    if isinstance(value, Callback):
        return value
    if isinstance(value, str):
        return parse_reference(value)
    if isinstance(value, tuple):
        if len(value) != 3:
            raise InvalidCallbackError(
                f"Reference tuples must be (target, member, arity), got {value!r}"
            )
        return DeferredRef(*value)
    if isinstance(value, Mapping):
        missing = {'target', 'member', 'arity'} - set(value)
        if missing:
            raise InvalidCallbackError(
                f"Reference mapping is missing {', '.join(sorted(missing))}: {value!r}"
            )
        return DeferredRef(value['target'], value['member'], value['arity'])
    if callable(value):
        arity = _infer_arity(value)
        if arity == 0:
            return Thunk(value)
        if arity == 1:
            return Unary(value)
        return Binary(value)
    raise InvalidCallbackError(f"Cannot register {value!r} as a callback")


def parse_reference(text: str) -> DeferredRef:
    """Parse ``"package.module:member/arity"`` into a DeferredRef."""
    match = _REFERENCE_RE.match(text.strip())
    if match is None:
        raise InvalidCallbackError(
            f"Invalid callback reference {text!r}; expected 'module:member/arity'"
        )
    return DeferredRef(match['target'], match['member'], int(match['arity']))


def _infer_arity(fn: Callable[..., Any]) -> int:
    """Number of required positional parameters of ``fn`` (0, 1, or 2).

    Callables whose signature cannot be inspected, or that only take
    ``*args``, are treated as unary.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1

    required = 0
    variadic = False
    for param in signature.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            if param.default is param.empty:
                required += 1
        elif param.kind is param.VAR_POSITIONAL:
            variadic = True
        elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
            raise InvalidCallbackError(
                f"{_qualified_name(fn)} has required keyword-only parameter '{param.name}'"
            )

    if required == 0 and variadic:
        return 1
    if required > 2:
        raise InvalidCallbackError(
            f"{_qualified_name(fn)} takes {required} arguments; functions may take 0, 1, "
            f"or 2. Register a DeferredRef for higher arities."
        )
    return required


def _positional_args(callback: Callback, accumulator: Any, count: int) -> tuple:
    if not isinstance(accumulator, (list, tuple)) or len(accumulator) != count:
        raise ArityMismatchError(callback, accumulator, f"a list of {count} arguments")
    return tuple(accumulator)


def _qualified_name(obj: Any) -> str:
    module = getattr(obj, '__module__', None)
    name = getattr(obj, '__qualname__', None) or getattr(obj, '__name__', None)
    if name is None:
        return repr(obj)
    return f"{module}.{name}" if module else name
