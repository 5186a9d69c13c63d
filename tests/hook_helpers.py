"""Module-level callbacks used as deferred references ("hook_helpers:name/arity")."""

import threading

calls = {"answer": 0}


def answer():
    """Arity 0: records that it ran."""
    calls["answer"] += 1


def prepend_test(data):
    return ["test", *data]


def prepend_param(data, params):
    return [params["one"], *data]


def sum_three(a, b, c):
    return a + b + c


def explode():
    raise RuntimeError("hook exploded")


class Namespace:
    """Holder for testing dotted member references."""

    @staticmethod
    def double(value):
        return value * 2


class EchoService:
    """A stateful collaborator that registers its own method as a callback.

    ``hook1`` prepends the service's state to the accumulator. State access
    goes through the service's own lock, independent of the hook server.
    """

    def __init__(self, hooks, state):
        self._lock = threading.Lock()
        self._state = state
        hooks.register("hook1", self.hook1)

    def hook1(self, data):
        with self._lock:
            return [self._state, *data]

    def status(self):
        with self._lock:
            return self._state
