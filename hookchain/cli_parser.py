"""ArgumentParser subclass that prints help and errors through HookConsole.

``--help`` renders a Rich table of flags plus worked examples, and errors are
reported as a single console error line instead of argparse's usage dump.
"""

import argparse

from rich.markup import escape
from rich.table import Table


class HookArgumentParser(argparse.ArgumentParser):
    """ArgumentParser with console-rendered help and errors.

    Args:
        examples: ``(command, explanation)`` pairs listed at the end of the
            help output.

    Exit codes are 0 after ``--help`` and 1 for any usage error.
    """

    def __init__(self, examples=(), **kwargs):
        kwargs.setdefault('add_help', False)
        super().__init__(**kwargs)
        self.examples = list(examples)
        self.add_argument('-h', '--help', action='help', default=argparse.SUPPRESS,
                          help='Show this help message and exit')

    def error(self, message):
        console = self._help_console()
        console.print_error(escape(message))
        console.print(f'[detail]Run {escape(self.prog)} --help for usage.[/detail]')
        raise SystemExit(1)

    def exit(self, status=0, message=None):
        if message:
            text = escape(message.strip())
            console = self._help_console()
            if status:
                console.print_error(text)
            else:
                console.print(text)
        raise SystemExit(status)

    def print_usage(self, file=None):
        pass

    def print_help(self, file=None):
        console = self._help_console()
        console.rule(self.prog)
        if self.description:
            console.print(f'  {escape(self.description)}')
        console.print()

        options = self.options_table()
        if options.row_count:
            console.print('  [bold]OPTIONS[/bold]')
            console.print(options)
            console.print()

        if self.examples:
            console.print('  [bold]EXAMPLES[/bold]')
            for command, explanation in self.examples:
                console.print(f'    [cyan]{escape(command)}[/cyan]')
                console.print(f'      [description]{escape(explanation)}[/description]')
            console.print()

    def options_table(self) -> Table:
        """Every optional flag except --help, one row each."""
        table = Table(box=None, show_header=False, padding=(0, 2), pad_edge=False)
        table.add_column('flag', no_wrap=True)
        table.add_column('help')
        for action in self._actions:
            if isinstance(action, argparse._HelpAction) or not action.option_strings:
                continue
            table.add_row(
                f'    [cyan]{escape(flag_label(action))}[/cyan]',
                f'[detail]{escape(action.help or "")}[/detail]',
            )
        return table

    def _help_console(self):
        # Help and usage errors end the process before main() applies the
        # configured console, so forcing NORMAL mode here is safe.
        from console import HookConsole, ConsoleConfig, ConsoleMode
        return HookConsole(ConsoleConfig(mode=ConsoleMode.NORMAL, show_time=False))


def flag_label(action: argparse.Action) -> str:
    """``--call NAME`` style label for an optional action."""
    label = ', '.join(action.option_strings)
    if action.nargs == 0:
        return label
    return f'{label} {action.metavar or action.dest.upper()}'
