from dataclasses import dataclass
from enum import Enum


class TimeFormat(Enum):
    """strftime pattern for message timestamps."""
    TWELVE_HOUR = "%I:%M:%S %p"
    TWENTY_FOUR_HOUR = "%H:%M:%S"
    ISO = "%Y-%m-%dT%H:%M:%S"


class ConsoleMode(Enum):
    """Where console output goes."""
    NORMAL = "normal"     # Rich output on stdout
    LOGGING = "logging"   # plain text appended to log_file
    NULL = "null"         # discarded


class ColorSystem(Enum):
    """Rich color system used in NORMAL mode."""
    AUTO = "auto"
    STANDARD = "standard"
    COLOR_256 = "256"
    TRUECOLOR = "truecolor"
    WINDOWS = "windows"


@dataclass
class ConsoleConfig:
    """
    Configuration for the HookConsole display system.

    :ivar mode: The operating mode for the console (NORMAL, LOGGING, NULL).
    :ivar use_colors: Whether to use colored output.
    :ivar show_time: Whether to show timestamps on messages.
    :ivar time_format: Format for timestamp display.
    :ivar timezone: Timezone for timestamp display (e.g., "UTC", "America/New_York").
    :ivar log_file: Path to log file when using LOGGING mode.
    :ivar color_system: Color system to use for output.
    """
    mode: ConsoleMode = ConsoleMode.NORMAL
    use_colors: bool = True
    show_time: bool = True
    time_format: TimeFormat = TimeFormat.TWENTY_FOUR_HOUR
    timezone: str = "UTC"
    log_file: str | None = None
    color_system: ColorSystem | None = ColorSystem.AUTO

    @classmethod
    def from_dict(cls, data: dict) -> "ConsoleConfig":
        """Build a config from plain values, e.g. a JSON ``console`` section.

        Enum fields accept either the enum member or its value/name string.
        """
        data = dict(data)
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown console settings: {', '.join(sorted(unknown))}")
        if 'mode' in data:
            data['mode'] = _coerce_enum(ConsoleMode, data['mode'], 'mode')
        if 'time_format' in data:
            data['time_format'] = _coerce_enum(TimeFormat, data['time_format'], 'time_format')
        if data.get('color_system') is not None:
            data['color_system'] = _coerce_enum(ColorSystem, data['color_system'], 'color_system')
        return cls(**data)


def _coerce_enum(enum_cls, value, field_name):
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if value == member.value or str(value).upper() == member.name:
            return member
    choices = ', '.join(m.value for m in enum_cls)
    raise ValueError(f"Invalid console {field_name}: {value!r} (expected one of: {choices})")
