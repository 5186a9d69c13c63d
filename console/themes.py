from rich.style import Style
from rich.theme import Theme


class HookDarkTheme(Theme):
    """
    Dark palette for hookchain console output.

    Message types (notification, warning, error, info, success) each get an
    ``.icon`` and ``.content`` style. The ``hook.*`` styles color the status
    table printed by ``python -m hookchain``.
    """
    BLUE = '#61AFEF'
    CYAN = '#56B6C2'
    GREEN = '#98C379'
    YELLOW = '#E5C07B'
    RED = '#E06C75'
    ORANGE = '#D19A66'
    MED_GREY = '#8A8F98'
    PURPLE = '#663399'
    LAVENDER = '#B87FD9'
    MAGENTA = '#BE50AE'
    DEFAULT_TEXT = '#F8E8EC'

    def __init__(self):
        super().__init__({
            "cyan": Style(color=self.CYAN),

            "notification.icon": Style(color=self.PURPLE),
            "notification.content": Style(color=self.BLUE),
            "warning.icon": Style(color=self.ORANGE),
            "warning.content": Style(color=self.YELLOW),
            "error.icon": Style(color=self.RED),
            "error.content": Style(color=self.RED),
            "info.icon": Style(color=self.BLUE),
            "info.content": Style(color=self.DEFAULT_TEXT),
            "success": Style(color=self.GREEN, bold=True),

            "rule.text": Style(color=self.ORANGE),
            "rule.line": Style(color=self.BLUE),
            "time.numbers": Style(color=self.ORANGE),
            "time.brackets": Style(color=self.PURPLE),

            # CLI help
            "detail": Style(color=self.MED_GREY),
            "description": Style(color=self.MED_GREY, italic=True),

            # Status table
            "table.header": Style(color=self.MED_GREY, bold=True),
            "table.border": Style(color=self.BLUE),
            "value.count": Style(color=self.CYAN, bold=True),
            "hook.name": Style(color=self.GREEN, bold=True),
            "hook.callback.immediate": Style(color=self.CYAN),
            "hook.callback.deferred": Style(color=self.MAGENTA),
            "hook.arity": Style(color=self.LAVENDER),
        })
