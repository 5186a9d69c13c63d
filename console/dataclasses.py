from dataclasses import dataclass
from typing import Literal

from rich.console import RenderableType
from rich.style import Style

from .utils import apply_style


ContentType = Literal[
    "text",
    "notification",
    "warning",
    "error",
    "success",
    "info",
    "renderable",
]

# Icon shown in front of each message type; plain text keeps no icon.
_ICONS = {
    "notification": "»",
    "warning": "!",
    "error": "✖",
    "success": "✔",
    "info": "i",
}


@dataclass
class ContentItem:
    """
    A single message queued for display by the console.

    Text items render as Rich markup: an optional type icon followed by the
    content wrapped in the style registered for that type (for example
    ``warning.content``). Renderable items (tables, panels) are passed to Rich
    untouched.

    :ivar type: The message category, which selects icon and style.
    :ivar content: Markup text, or a Rich renderable when ``type`` is "renderable".
    :ivar style: Explicit style override for "text" items.
    :ivar time: Epoch timestamp of when the item was created.
    """
    type: ContentType
    content: str | RenderableType
    style: str | Style | None = None
    time: float | None = None

    @property
    def is_renderable(self) -> bool:
        return self.type == "renderable"

    def __str__(self) -> str:
        if self.is_renderable:
            return str(self.content)

        text = str(self.content)
        icon = _ICONS.get(self.type)
        if icon is None:
            if isinstance(self.style, Style):
                return apply_style(text, str(self.style))
            if self.style:
                return apply_style(text, self.style)
            return text

        style_name = "success" if self.type == "success" else f"{self.type}.content"
        icon_style = "success" if self.type == "success" else f"{self.type}.icon"
        return f"{apply_style(icon, icon_style)} {apply_style(text, style_name)}"
