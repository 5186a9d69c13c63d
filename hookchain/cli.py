"""Command-line inspection of a hook configuration.

Usage:
    python -m hookchain --config hooks.json                 # list registered hooks
    python -m hookchain --config hooks.json --call on_save --data '{"id": 1}'
    python -m hookchain --config hooks.json --call tick --log-file hooks.log

Loads the config, starts a HookServer with it, prints the registered hooks,
optionally runs one hook (printing its JSON-encoded result on stdout), and
stops the server.
"""

import json
from collections.abc import Hashable
from dataclasses import replace

from rich.markup import escape
from rich.table import Table

from console import HookConsole, ConsoleConfig, ConsoleMode

from .callbacks import Callback
from .cli_parser import HookArgumentParser
from .config import HooksConfig, load_config
from .server import HookServer


def build_parser() -> HookArgumentParser:
    parser = HookArgumentParser(
        prog='hookchain',
        description='Load a hook configuration, list its hooks, and optionally run one.',
        examples=[
            ('hookchain --config hooks.json', 'List every registered hook and callback'),
            ('hookchain --config hooks.json --call on_save --data \'{"id": 1}\'',
             'Run on_save with an initial accumulator and print the result'),
            ('hookchain --config hooks.json --call tick --log-file hooks.log',
             'Run tick, sending console output to hooks.log'),
        ],
    )
    parser.add_argument('--config', metavar='PATH',
                        help='JSON hook configuration to load')
    parser.add_argument('--list', action='store_true',
                        help='Print registered hooks (default when --call is not given)')
    parser.add_argument('--call', metavar='NAME',
                        help='Run the named hook and print its result as JSON')
    parser.add_argument('--data', metavar='JSON',
                        help='Initial accumulator for --call, as JSON (default: null)')
    parser.add_argument('--log-file', metavar='PATH',
                        help='Write console output to this file instead of the terminal')
    parser.add_argument('--quiet', action='store_true',
                        help='Suppress console output; --call results are still printed')
    return parser


def build_status_table(status: dict[Hashable, list[Callback]]) -> Table:
    """Render a ``HookServer.status()`` snapshot as a Rich table."""
    table = Table(
        title='Registered hooks',
        header_style='table.header',
        border_style='table.border',
    )
    table.add_column('Hook', style='hook.name')
    table.add_column('#', justify='right', style='value.count')
    table.add_column('Callback')
    table.add_column('Kind')

    for name, callbacks in status.items():
        for position, callback in enumerate(callbacks):
            kind_style = 'hook.callback.deferred' if callback.is_deferred else 'hook.callback.immediate'
            kind = 'deferred' if callback.is_deferred else 'immediate'
            table.add_row(
                escape(str(name)) if position == 0 else '',
                str(position + 1),
                _styled_description(callback),
                f'[{kind_style}]{kind}[/{kind_style}]',
            )
    return table


def _styled_description(callback: Callback) -> str:
    base, _, arity = callback.describe().rpartition('/')
    return f'{escape(base)}/[hook.arity]{arity}[/hook.arity]'


def _console_config(config: HooksConfig, args) -> ConsoleConfig:
    cfg = config.console
    if args.log_file:
        cfg = replace(cfg, mode=ConsoleMode.LOGGING, log_file=args.log_file)
    if args.quiet:
        cfg = replace(cfg, mode=ConsoleMode.NULL)
    return cfg


def _report_startup_error(message: str) -> None:
    HookConsole(ConsoleConfig(mode=ConsoleMode.NORMAL, show_time=False)).print_error(escape(message))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else HooksConfig()
    except (OSError, ValueError) as e:
        _report_startup_error(f"Could not load config: {e}")
        return 1

    data = None
    if args.data is not None:
        try:
            data = json.loads(args.data)
        except json.JSONDecodeError as e:
            parser.error(f"--data is not valid JSON: {e}")

    try:
        console = HookConsole(_console_config(config, args))
    except (RuntimeError, ValueError) as e:
        _report_startup_error(f"Could not set up console: {e}")
        return 1

    with HookServer(config) as server:
        if args.list or not args.call:
            status = server.status()
            if status:
                console.print(build_status_table(status))
            else:
                console.print_notification('No hooks registered')

        if args.call:
            try:
                result = server.call(args.call, data)
            except Exception as e:
                console.print_error(f"Hook '{escape(args.call)}' failed: {escape(repr(e))}")
                return 1
            print(json.dumps(result, default=repr))

    return 0
