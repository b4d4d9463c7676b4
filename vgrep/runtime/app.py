"""Runtime composition layer for vgrep.

Opens the controlling terminal, builds the session, and runs the loop.
"""

from __future__ import annotations

import contextlib
import logging
import termios
from collections.abc import Sequence

from ..input import KeyReader
from ..matching import Matcher
from ..render import Layout
from ..session import Session, SessionOutcome
from ..theme import Theme
from .loop import RuntimeLoopTiming, run_main_loop
from .terminal import TTY_PATH, TerminalController

logger = logging.getLogger(__name__)


class TerminalUnavailable(Exception):
    """Raised when no controlling terminal can be opened for the UI."""


def run_filter(
    lines: Sequence[str],
    matcher: Matcher,
    layout: Layout,
    theme: Theme,
    *,
    tty_path: str = TTY_PATH,
    timing: RuntimeLoopTiming | None = None,
) -> SessionOutcome:
    """Run one interactive filter session on the controlling terminal."""
    try:
        terminal = TerminalController.open(tty_path)
    except (OSError, termios.error) as exc:
        raise TerminalUnavailable(str(exc)) from exc
    with contextlib.closing(terminal):
        width, height = terminal.size()
        session = Session(lines, matcher, layout=layout, theme=theme, width=width, height=height)
        logger.debug("starting %s session over %d lines at %dx%d", matcher.name, len(lines), width, height)
        return run_main_loop(session, terminal, KeyReader(terminal.fd), timing)
