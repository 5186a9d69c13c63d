"""Exception hierarchy for hook registration, dispatch, and the server."""


class HookError(Exception):
    """Base class for all hookchain errors."""


class InvalidCallbackError(HookError, TypeError):
    """Raised when a value cannot be turned into a callback."""


class ArityMismatchError(HookError, TypeError):
    """Raised when the accumulator shape does not fit a callback's arity.

    Fatal to the ``call`` that hit it: the fold stops and the error reaches
    the caller unchanged.
    """

    def __init__(self, callback, accumulator, expected: str):
        self.callback = callback
        self.accumulator = accumulator
        super().__init__(
            f"{callback!r} expects {expected}, got accumulator {accumulator!r}"
        )


class HookServerError(HookError, RuntimeError):
    """Raised for requests a HookServer cannot accept (not running, etc.)."""


class ReentrantCallError(HookServerError):
    """Raised when a callback issues a synchronous request to its own server."""
