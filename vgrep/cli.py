"""Command-line front door for vgrep.

Splits passthrough grep arguments off at ``--``, parses vgrep's own options,
and loads the input lines. Then runs the interactive session and prints its
outcome.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import load_dual_mode, load_grep_command, load_theme_name
from .logging_config import setup_logging
from .matching import DEFAULT_GREP_COMMAND, build_matcher
from .output import write_outcome
from .render import Layout
from .runtime import run_filter
from .runtime.app import TerminalUnavailable
from .source import InputUnavailable, load_lines
from .theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

PASSTHROUGH_SEPARATOR = "--"


def split_args(argv: Sequence[str]) -> tuple[list[str], list[str] | None]:
    """Split ``argv`` at the first ``--`` into (vgrep args, grep args).

    The grep part is ``None`` when no separator is present.
    """
    args = list(argv)
    if PASSTHROUGH_SEPARATOR in args:
        idx = args.index(PASSTHROUGH_SEPARATOR)
        return args[:idx], args[idx + 1 :]
    return args, None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vgrep",
        description=(
            "Interactively filter lines with a regular expression. "
            "Arguments after -- are passed to grep and switch matching to grep."
        ),
        usage="%(prog)s [options] [path] [-- grep-args...]",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to read when stdin is not piped.")
    parser.add_argument("-d", "--dual", action="store_true", help="Dual-column layout (unmatched | matched).")
    parser.add_argument(
        "-p",
        "--print-pattern",
        action="store_true",
        help="Print the pattern instead of the matched lines.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors (matches use reverse video).")
    parser.add_argument(
        "--grep-command",
        default=None,
        help=f"External search command used after -- (default: {DEFAULT_GREP_COMMAND}).",
    )
    parser.add_argument("--log-file", default=None, help="Append debug logs to this file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments, run the interactive filter, and print the result.

    Cancelling the session prints nothing and exits normally.
    """
    own_args, grep_args = split_args(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(own_args)
    try:
        setup_logging(log_file=args.log_file)
    except OSError as exc:
        raise SystemExit(f"vgrep: cannot open log file: {exc}") from exc

    path = Path(args.path) if args.path is not None else None
    try:
        lines = load_lines(path)
    except InputUnavailable as exc:
        raise SystemExit(f"vgrep: {exc}") from exc

    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))
    theme = resolve_theme(args.theme or load_theme_name(), no_color=no_color)
    layout = Layout.DUAL if args.dual or load_dual_mode() else Layout.SINGLE
    command = args.grep_command or load_grep_command() or DEFAULT_GREP_COMMAND
    matcher = build_matcher(grep_args, command=command)

    try:
        outcome = run_filter(lines, matcher, layout, theme)
    except TerminalUnavailable as exc:
        logger.error("no terminal: %s", exc)
        raise SystemExit("vgrep: no terminal available for interactive input") from exc

    write_outcome(outcome, print_pattern=args.print_pattern)


if __name__ == "__main__":
    main()
