"""hookchain: named hook registry and dispatcher.

Callbacks are registered under a hook name and later run in registration
order, threading an accumulator through them. Any callback can stop the chain
early by returning ``Halt(value)``.

All access goes through a ``HookServer``, which serializes registrations and
calls on a single worker thread.
"""

from .callbacks import Callback, Thunk, Unary, Binary, DeferredRef, as_callback, parse_reference
from .signals import Continue, Halt, halt
from .registry import HookRegistry
from .dispatcher import Dispatcher, fold
from .server import HookServer
from .config import HooksConfig, load_config, config_from_dict
from .errors import (
    HookError,
    InvalidCallbackError,
    ArityMismatchError,
    HookServerError,
    ReentrantCallError,
)

__all__ = [
    'Callback',
    'Thunk',
    'Unary',
    'Binary',
    'DeferredRef',
    'as_callback',
    'parse_reference',
    'Continue',
    'Halt',
    'halt',
    'HookRegistry',
    'Dispatcher',
    'fold',
    'HookServer',
    'HooksConfig',
    'load_config',
    'config_from_dict',
    'HookError',
    'InvalidCallbackError',
    'ArityMismatchError',
    'HookServerError',
    'ReentrantCallError',
]
