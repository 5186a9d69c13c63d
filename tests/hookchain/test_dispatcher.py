"""Tests for hookchain/dispatcher.py and signals.py — fold, halt, and arity dispatch."""

import pytest

import hook_helpers
from hookchain.callbacks import Binary, DeferredRef, Thunk, Unary
from hookchain.dispatcher import Dispatcher, fold
from hookchain.errors import ArityMismatchError
from hookchain.registry import HookRegistry
from hookchain.signals import Continue, Halt, halt, interpret


def put_one(data):
    return {**data, "one": True}


def put_two(data):
    return {**data, "two": 2}


def halt_one(data):
    return halt({**data, "one": True})


class TestSignals:

    def test_plain_value_continues(self):
        assert interpret({"a": 1}) == Continue({"a": 1})
        assert interpret(None) == Continue(None)

    def test_signals_pass_through(self):
        assert interpret(Halt(1)) == Halt(1)
        assert interpret(Continue(2)) == Continue(2)

    def test_halt_helper(self):
        assert halt([1]) == Halt([1])


class TestFold:

    def test_threads_accumulator_in_order(self):
        assert fold([Unary(put_one), Unary(put_two)], {}) == {"one": True, "two": 2}

    def test_empty_returns_data(self):
        data = {"untouched": True}
        assert fold([], data) is data

    def test_halt_skips_remaining(self):
        """Callbacks after a Halt never run."""
        ran = []

        def record(data):
            ran.append(data)
            return data

        assert fold([Unary(halt_one), Unary(record)], {}) == {"one": True}
        assert ran == []

    def test_halt_from_last_callback(self):
        assert fold([Unary(put_two), Unary(halt_one)], {}) == {"two": 2, "one": True}

    def test_explicit_continue_is_unwrapped(self):
        assert fold([Unary(lambda d: Continue(d + 1)), Unary(lambda d: d * 10)], 1) == 20

    def test_thunk_return_becomes_accumulator(self):
        assert fold([Thunk(lambda: "fresh"), Unary(lambda d: d.upper())], "old") == "FRESH"

    def test_binary_chain(self):
        """A binary callback returning a new pair feeds the next binary callback."""
        def step(acc, params):
            return [acc + params["inc"], params]

        assert fold([Binary(step), Binary(step)], [0, {"inc": 5}]) == [10, {"inc": 5}]

    def test_arity_mismatch_propagates(self):
        with pytest.raises(ArityMismatchError):
            fold([Unary(put_one), Binary(lambda a, b: a)], {})

    def test_callback_exception_propagates_unchanged(self):
        def fail(data):
            raise KeyError("missing")

        with pytest.raises(KeyError, match="missing"):
            fold([Unary(fail), Unary(put_one)], {})


class TestDispatcher:

    def setup_method(self):
        self.registry = HookRegistry()
        self.dispatcher = Dispatcher(self.registry)

    def test_call_runs_registered_callbacks(self):
        self.registry.insert("test1", [put_one, put_two])
        assert self.dispatcher.call("test1", {}) == {"one": True, "two": 2}

    @pytest.mark.parametrize("data", [{}, [], None, 0, "text", {"k": [1, 2]}])
    def test_unknown_hook_returns_data(self, data):
        assert self.dispatcher.call("never_registered", data) == data

    def test_call_without_data(self):
        """call(name) passes None as the accumulator."""
        self.registry.insert("a", lambda data: data is None)
        assert self.dispatcher.call("a") is True

    def test_deferred_arity_0(self):
        self.registry.insert("a", DeferredRef("hook_helpers", "answer", 0))
        before = hook_helpers.calls["answer"]
        self.dispatcher.call("a")
        assert hook_helpers.calls["answer"] == before + 1

    def test_deferred_arity_1(self):
        self.registry.insert("a", DeferredRef("hook_helpers", "prepend_test", 1))
        assert self.dispatcher.call("a", [0]) == ["test", 0]

    def test_deferred_arity_2(self):
        self.registry.insert("b", DeferredRef("hook_helpers", "prepend_param", 2))
        assert self.dispatcher.call("b", [[0], {"one": 1}]) == [1, 0]

    def test_function_arity_0(self):
        ran = []
        self.registry.insert("b", lambda: ran.append(True))
        self.dispatcher.call("b")
        assert ran == [True]

    def test_function_arity_2(self):
        self.registry.insert("c", hook_helpers.prepend_param)
        assert self.dispatcher.call("c", [[], {"one": 3}]) == [3]

    def test_mixed_arity_fails_only_at_call_time(self):
        """A unary then a binary callback fails once the accumulator stops fitting."""
        self.registry.insert("mixed", [put_one, hook_helpers.prepend_param])
        with pytest.raises(ArityMismatchError):
            self.dispatcher.call("mixed", {})
