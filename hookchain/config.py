"""Static configuration for a HookServer.

``HooksConfig.register`` holds the initial registrations applied when the
server starts, in the same shapes ``HookServer.register`` accepts in bulk: a
mapping of hook name to callback (or list of callbacks), or a list of
``(name, callback_or_list)`` pairs.

Configs can be built in code or read from JSON with ``load_config``:

    {
      "register": {
        "on_save": ["audit.hooks:record/1", "audit.hooks:flush/0"]
      },
      "console": {"mode": "logging", "log_file": "hooks.log"}
    }
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from console import ConsoleConfig


@dataclass
class HooksConfig:
    """Initial registrations and console settings for a HookServer."""
    register: Mapping | list = field(default_factory=dict)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)

    def __post_init__(self):
        if isinstance(self.register, Mapping):
            return
        if not isinstance(self.register, (list, tuple)):
            raise ValueError(
                f"register must be a mapping or a list of (name, callbacks) pairs, "
                f"got {type(self.register).__name__}"
            )
        for i, entry in enumerate(self.register):
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise ValueError(f"register entry {i} must be a (name, callbacks) pair, got {entry!r}")


def load_config(path: str | Path) -> HooksConfig:
    """Read a HooksConfig from a JSON file.

    Raises:
        FileNotFoundError: if *path* does not exist.
        ValueError: if the file is not valid JSON or has an unexpected shape.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    return config_from_dict(data)


def config_from_dict(data: Any) -> HooksConfig:
    """Build a HooksConfig from already-parsed JSON data."""
    if not isinstance(data, dict):
        raise ValueError(f"Hook config must be a JSON object, got {type(data).__name__}")
    unknown = set(data) - {'register', 'console'}
    if unknown:
        raise ValueError(f"Unknown hook config keys: {', '.join(sorted(unknown))}")

    console_section = data.get('console') or {}
    if not isinstance(console_section, dict):
        raise ValueError("console section must be a JSON object")

    return HooksConfig(
        register=data.get('register') or {},
        console=ConsoleConfig.from_dict(console_section),
    )
