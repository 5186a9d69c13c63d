"""Callback result signals.

A callback's return value is either a ``Halt`` (stop the chain, this is the
final result) or anything else, which continues the chain with that value as
the next accumulator. ``Continue`` exists for callers that want to be explicit.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Continue:
    """Continue the fold with ``value`` as the next accumulator."""
    value: Any


@dataclass(frozen=True)
class Halt:
    """Stop the fold; ``value`` becomes the result of ``call``."""
    value: Any


def halt(value: Any) -> Halt:
    """Shorthand for returning ``Halt(value)`` from a callback."""
    return Halt(value)


def interpret(result: Any) -> Continue | Halt:
    """Normalize a raw callback return value into a signal."""
    if isinstance(result, (Halt, Continue)):
        return result
    return Continue(result)
