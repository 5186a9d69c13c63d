"""Tests for hookchain/cli.py — config loading, listing, and --call output."""

import json

import pytest

from console import HookConsole, ConsoleConfig, ConsoleMode
from hookchain.callbacks import DeferredRef, Unary
from hookchain.cli import build_parser, build_status_table, main
from hookchain.cli_parser import flag_label


@pytest.fixture(autouse=True)
def _restore_null_console():
    """main() switches the console singleton; put it back in NULL mode afterwards."""
    yield
    HookConsole(ConsoleConfig(mode=ConsoleMode.NULL))


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "hooks.json"
    path.write_text(json.dumps({
        "register": {
            "prepend": "hook_helpers:prepend_test/1",
            "params": ["hook_helpers:prepend_param/2"],
            "boom": "hook_helpers:explode/0",
        },
    }), encoding="utf-8")
    return path


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.call is None
        assert not args.list
        assert not args.quiet

    def test_all_flags(self):
        args = build_parser().parse_args([
            "--config", "hooks.json", "--list", "--call", "on_save",
            "--data", "[1]", "--log-file", "out.log", "--quiet",
        ])
        assert args.config == "hooks.json"
        assert args.call == "on_save"
        assert args.data == "[1]"
        assert args.log_file == "out.log"
        assert args.list and args.quiet

    def test_unknown_flag_exits_with_1(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--nope"])
        assert exc_info.value.code == 1

    def test_help_exits_with_0(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--help"])
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "--call NAME" in out
        assert "EXAMPLES" in out

    def test_flag_labels(self):
        labels = {a.dest: flag_label(a) for a in build_parser()._actions}
        assert labels["quiet"] == "--quiet"
        assert labels["data"] == "--data JSON"
        assert build_parser().options_table().row_count == 6


class TestStatusTable:

    def test_one_row_per_callback(self):
        table = build_status_table({
            "a": [Unary(len), DeferredRef("hook_helpers", "answer", 0)],
            "b": [Unary(len)],
        })
        assert table.row_count == 3
        assert [c.header for c in table.columns] == ["Hook", "#", "Callback", "Kind"]


class TestMain:

    def test_call_prints_json_result(self, config_path, capsys):
        code = main(["--config", str(config_path), "--quiet", "--call", "prepend", "--data", "[0]"])
        assert code == 0
        assert json.loads(capsys.readouterr().out) == ["test", 0]

    def test_call_binary_hook(self, config_path, capsys):
        code = main([
            "--config", str(config_path), "--quiet",
            "--call", "params", "--data", '[[0], {"one": 1}]',
        ])
        assert code == 0
        assert json.loads(capsys.readouterr().out) == [1, 0]

    def test_call_unknown_hook_echoes_data(self, config_path, capsys):
        code = main(["--config", str(config_path), "--quiet", "--call", "missing", "--data", '{"x": 1}'])
        assert code == 0
        assert json.loads(capsys.readouterr().out) == {"x": 1}

    def test_call_without_data_uses_null(self, capsys):
        assert main(["--quiet", "--call", "anything"]) == 0
        assert capsys.readouterr().out.strip() == "null"

    def test_listing_goes_to_log_file(self, config_path, tmp_path):
        log_path = tmp_path / "out.log"
        assert main(["--config", str(config_path), "--log-file", str(log_path)]) == 0
        text = log_path.read_text(encoding="utf-8")
        assert "prepend" in text
        assert "hook_helpers:prepend_param/2" in text
        assert "deferred" in text

    def test_empty_listing(self, tmp_path):
        log_path = tmp_path / "out.log"
        assert main(["--log-file", str(log_path)]) == 0
        assert "No hooks registered" in log_path.read_text(encoding="utf-8")

    def test_failing_hook_returns_1(self, config_path, tmp_path, capsys):
        log_path = tmp_path / "out.log"
        code = main(["--config", str(config_path), "--log-file", str(log_path), "--call", "boom"])
        assert code == 1
        assert capsys.readouterr().out == ""
        assert "hook exploded" in log_path.read_text(encoding="utf-8")

    def test_missing_config_returns_1(self, tmp_path):
        assert main(["--config", str(tmp_path / "missing.json")]) == 1

    def test_invalid_config_returns_1(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"register": {}, "extra": true}', encoding="utf-8")
        assert main(["--config", str(path)]) == 1

    def test_logging_console_without_log_file_returns_1(self, tmp_path, capsys):
        """A console section that cannot be set up is a config error, not a traceback."""
        path = tmp_path / "hooks.json"
        path.write_text('{"console": {"mode": "logging"}}', encoding="utf-8")
        assert main(["--config", str(path)]) == 1
        assert "log_file" in capsys.readouterr().out

    def test_unwritable_log_file_returns_1(self, tmp_path):
        assert main(["--log-file", str(tmp_path / "missing" / "out.log")]) == 1

    def test_invalid_data_exits_with_1(self, config_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "--call", "prepend", "--data", "{oops"])
        assert exc_info.value.code == 1
