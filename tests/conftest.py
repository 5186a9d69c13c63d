"""Shared fixtures for hookchain unit tests."""

import pytest

from console import HookConsole, ConsoleConfig, ConsoleMode
from hookchain import HookServer


# ---- Console singleton: force NULL mode before any test touches it ----

@pytest.fixture(autouse=True, scope="session")
def _silence_console():
    """Initialize HookConsole in NULL mode to suppress all output during tests.

    Session-scoped so the singleton is set once and stays NULL for the
    run. Tests that need to see console output use ``console_log``, which
    switches to LOGGING mode and restores NULL afterwards.
    """
    HookConsole(ConsoleConfig(mode=ConsoleMode.NULL))


@pytest.fixture
def console_log(tmp_path):
    """Route console output to a log file; yields a function returning its text."""
    log_path = tmp_path / "console.log"
    HookConsole(ConsoleConfig(mode=ConsoleMode.LOGGING, log_file=str(log_path), show_time=False))

    def read():
        return log_path.read_text(encoding="utf-8") if log_path.exists() else ""

    yield read
    HookConsole(ConsoleConfig(mode=ConsoleMode.NULL))


# ---- Server fixtures ----

@pytest.fixture
def server():
    """A started HookServer with an empty registry, stopped after the test."""
    hooks = HookServer(name="test-hooks").start()
    yield hooks
    hooks.stop(timeout=5)
