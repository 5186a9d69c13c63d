from .config import ConsoleConfig, ConsoleMode, ColorSystem, TimeFormat
from .themes import HookDarkTheme
from .utils import apply_style
from .dataclasses import ContentItem
from .hookconsole import HookConsole

__all__ = [
    "HookConsole",
    "ConsoleConfig",
    "ConsoleMode",
    "ColorSystem",
    "TimeFormat",
    "HookDarkTheme",
    "ContentItem",
    "apply_style",
]
