import datetime
import time
from typing import Any
from zoneinfo import ZoneInfo

from rich.console import Console, RenderableType
from rich.style import Style

from .config import ConsoleConfig, ConsoleMode
from .dataclasses import ContentItem
from .themes import HookDarkTheme


class HookConsole:
    """
    Process-wide console used for all hookchain reporting.

    The console is a singleton: every ``HookConsole()`` call returns the same
    instance, so library code can report warnings without having a console
    passed to it. Passing a ``ConsoleConfig`` that differs from the active one
    re-initializes the instance in place.

    Modes:
        NORMAL  -- Rich output to the terminal (stdout).
        LOGGING -- plain text appended to ``ConsoleConfig.log_file``.
        NULL    -- all output discarded; used by the test suite.

    :ivar _instance: Singleton instance of the `HookConsole` class.
    :vartype _instance: HookConsole
    :ivar _console: The Rich console that performs the actual output.
    :vartype _console: Console | None
    :ivar _cfg: Active configuration.
    :vartype _cfg: ConsoleConfig | None
    :ivar _log_file_handle: Opened file handle for LOGGING mode.
    :vartype _log_file_handle: Any | None
    """
    _instance = None
    _console: Console | None = None
    _cfg: ConsoleConfig | None = None
    _log_file_handle: Any | None = None
    _mode: ConsoleMode | None = None
    _tz_info: ZoneInfo | None = None

    def __new__(cls, cfg: ConsoleConfig | None = None):
        """
        Return the singleton, creating it on first use.

        :param cfg: Optional configuration. When the instance already exists and
            ``cfg`` differs from the active configuration, the console is
            re-initialized with it.
        :returns: The process-wide console instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize(cfg)
        elif cfg is not None and cls._instance._cfg != cfg:
            cls._instance._initialize(cfg)
        return cls._instance

    def _initialize(self, cfg: ConsoleConfig | None = None):
        """
        Set up the Rich console for the configured mode.

        :param cfg: Console settings; defaults to ``ConsoleConfig()``.
        :raises ValueError: When LOGGING mode is selected without a ``log_file``.
        :raises RuntimeError: When the log file cannot be opened.
        """
        self.close()

        self._cfg = cfg if cfg is not None else ConsoleConfig()
        self._mode = self._cfg.mode
        self._tz_info = ZoneInfo(self._cfg.timezone) if self._cfg.timezone else None

        theme = HookDarkTheme()

        if self._mode == ConsoleMode.NULL:
            self._console = Console(quiet=True)

        elif self._mode == ConsoleMode.LOGGING:
            if not self._cfg.log_file:
                raise ValueError("log_file must be specified in ConsoleConfig for logging mode")
            try:
                self._log_file_handle = open(self._cfg.log_file, "a+", encoding="utf-8")
            except OSError as e:
                raise RuntimeError(f"Failed to open log file {self._cfg.log_file}: {e}") from e
            self._console = Console(
                file=self._log_file_handle,
                theme=theme,
                force_terminal=False,
                no_color=True,
                highlight=False,
                width=200,
            )

        elif self._mode == ConsoleMode.NORMAL:
            no_color = not self._cfg.use_colors or self._cfg.color_system is None
            self._console = Console(
                theme=theme,
                no_color=no_color,
                color_system=None if no_color else self._cfg.color_system.value,
                highlight=False,
            )

        else:
            raise ValueError(f"Unsupported console mode: {self._mode}")

    def close(self):
        """Close the log file handle, if one is open."""
        if self._log_file_handle:
            self._log_file_handle.close()
            self._log_file_handle = None

    def print(self, content: str | RenderableType = "", style: str | Style = ""):
        """Print plain text, or a Rich renderable such as a Table or Panel."""
        if hasattr(content, '__rich_console__') or hasattr(content, '__rich__'):
            self._print_message(ContentItem(type="renderable", content=content), with_time=False)
            return
        self._print_message(ContentItem(type="text", content=content, style=style or None, time=time.time()))

    def print_notification(self, content: str):
        self._print_message(ContentItem(type="notification", content=content, time=time.time()))

    def print_info(self, content: str):
        self._print_message(ContentItem(type="info", content=content, time=time.time()))

    def print_warning(self, content: str):
        """Print a warning message, e.g. a bulk registration that was cut short."""
        self._print_message(ContentItem(type="warning", content=content, time=time.time()))

    def print_error(self, content: str):
        self._print_message(ContentItem(type="error", content=content, time=time.time()))

    def rule(self, content: str = "", style: str | Style = "rule.line"):
        if not self._should_do_print():
            return
        self._console.rule(f"[rule.text]{content}[/rule.text]" if content else "", style=style)

    def get_console_config(self) -> ConsoleConfig:
        return self._cfg

    def _should_do_print(self):
        return self._mode != ConsoleMode.NULL

    def _format_time(self, timestamp: float) -> str:
        moment = datetime.datetime.fromtimestamp(timestamp, tz=self._tz_info)
        stamp = moment.strftime(self._cfg.time_format.value)
        return f"[time.brackets]\\[[/time.brackets][time.numbers]{stamp}[/time.numbers][time.brackets]][/time.brackets]"

    def _print_message(self, item: ContentItem, with_time=True):
        if not self._should_do_print():
            return
        if item.is_renderable:
            self._console.print(item.content)
        else:
            text = str(item)
            if with_time and self._cfg.show_time and item.time is not None:
                text = f"{self._format_time(item.time)} {text}"
            self._console.print(text)
        if self._log_file_handle:
            self._log_file_handle.flush()

