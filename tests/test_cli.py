"""CLI wiring tests: argument splitting, matcher selection, and output."""

from __future__ import annotations

import io
import os
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from vgrep import cli
from vgrep.matching import GrepMatcher, RegexMatcher
from vgrep.render import Layout
from vgrep.runtime.app import TerminalUnavailable
from vgrep.session import SessionOutcome, SessionState
from vgrep.source import InputUnavailable
from vgrep.theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME

FRUIT = ("apple", "banana", "cherry")


class SplitArgsTests(unittest.TestCase):
    def test_no_separator(self) -> None:
        self.assertEqual(cli.split_args(["-d", "file.txt"]), (["-d", "file.txt"], None))

    def test_separator_splits_passthrough_args(self) -> None:
        self.assertEqual(cli.split_args(["-d", "--", "-i", "-E"]), (["-d"], ["-i", "-E"]))

    def test_trailing_separator_yields_empty_passthrough(self) -> None:
        self.assertEqual(cli.split_args(["--"]), ([], []))

    def test_only_first_separator_splits(self) -> None:
        self.assertEqual(cli.split_args(["--", "-e", "--"]), ([], ["-e", "--"]))


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        patches = [
            mock.patch("vgrep.cli.setup_logging"),
            mock.patch("vgrep.cli.load_theme_name", return_value=None),
            mock.patch("vgrep.cli.load_dual_mode", return_value=False),
            mock.patch("vgrep.cli.load_grep_command", return_value=None),
            mock.patch.dict(os.environ, {}, clear=True),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)
        self.load_lines = self._patch("vgrep.cli.load_lines", return_value=FRUIT)
        self.run_filter = self._patch(
            "vgrep.cli.run_filter",
            return_value=SessionOutcome(SessionState.CONFIRMED, "an", ("banana",)),
        )

    def _patch(self, target: str, **kwargs) -> mock.MagicMock:
        patcher = mock.patch(target, **kwargs)
        self.addCleanup(patcher.stop)
        return patcher.start()

    def _main(self, argv: list[str]) -> str:
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            cli.main(argv)
        return stdout.getvalue()

    def test_default_run_uses_regex_single_column(self) -> None:
        output = self._main([])

        lines, matcher, layout, theme = self.run_filter.call_args.args
        self.assertEqual(lines, FRUIT)
        self.assertIsInstance(matcher, RegexMatcher)
        self.assertIs(layout, Layout.SINGLE)
        self.assertIs(theme, DEFAULT_THEME)
        self.assertEqual(output, "banana\n")
        self.load_lines.assert_called_once_with(None)

    def test_print_pattern_prints_only_pattern(self) -> None:
        self.assertEqual(self._main(["-p"]), "an\n")

    def test_passthrough_args_select_grep(self) -> None:
        self._main(["-d", "notes.txt", "--", "-i"])

        _lines, matcher, layout, _theme = self.run_filter.call_args.args
        self.assertIsInstance(matcher, GrepMatcher)
        self.assertEqual(matcher.extra_args, ("-i",))
        self.assertIs(layout, Layout.DUAL)
        self.load_lines.assert_called_once_with(Path("notes.txt"))

    def test_grep_command_flag_overrides_default(self) -> None:
        self._main(["--grep-command", "ggrep", "--"])
        matcher = self.run_filter.call_args.args[1]
        self.assertEqual(matcher.build_command("x")[0], "ggrep")

    def test_cancelled_session_prints_nothing(self) -> None:
        self.run_filter.return_value = SessionOutcome(SessionState.CANCELLED, "an", ())
        self.assertEqual(self._main([]), "")

    def test_no_color_flag_and_environment_select_plain_theme(self) -> None:
        self._main(["--no-color", "--theme", "ocean"])
        self.assertIs(self.run_filter.call_args.args[3], PLAIN_THEME)

        with mock.patch.dict(os.environ, {"NO_COLOR": "1"}):
            self._main([])
        self.assertIs(self.run_filter.call_args.args[3], PLAIN_THEME)

    def test_config_defaults_apply_when_flags_absent(self) -> None:
        with mock.patch("vgrep.cli.load_theme_name", return_value="ocean"), mock.patch(
            "vgrep.cli.load_dual_mode", return_value=True
        ):
            self._main([])
        _lines, _matcher, layout, theme = self.run_filter.call_args.args
        self.assertIs(layout, Layout.DUAL)
        self.assertIs(theme, OCEAN_THEME)

    def test_unreadable_input_exits_with_message(self) -> None:
        self.load_lines.side_effect = InputUnavailable(Path("gone.txt"), "No such file or directory")
        with self.assertRaises(SystemExit) as ctx:
            self._main(["gone.txt"])
        self.assertEqual(str(ctx.exception.code), "vgrep: cannot read gone.txt: No such file or directory")
        self.run_filter.assert_not_called()

    def test_unwritable_log_file_exits_with_message(self) -> None:
        with mock.patch(
            "vgrep.cli.setup_logging", side_effect=PermissionError(13, "Permission denied", "/root/x.log")
        ):
            with self.assertRaises(SystemExit) as ctx:
                self._main(["--log-file", "/root/x.log"])
        self.assertTrue(str(ctx.exception.code).startswith("vgrep: cannot open log file:"))
        self.assertIn("Permission denied", str(ctx.exception.code))
        self.load_lines.assert_not_called()
        self.run_filter.assert_not_called()

    def test_missing_terminal_exits_with_message(self) -> None:
        self.run_filter.side_effect = TerminalUnavailable("no tty")
        with self.assertRaises(SystemExit) as ctx:
            self._main([])
        self.assertIn("no terminal available", str(ctx.exception.code))


if __name__ == "__main__":
    unittest.main()
