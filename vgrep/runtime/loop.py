"""Main interactive event loop for the terminal UI.

Polls the terminal size, redraws when the session is dirty, and feeds decoded
keys to the session until it confirms or cancels. Each event is handled to
completion, matcher included, before the next key is read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol

from ..input import KeyReader
from ..render.frame import render_frame
from ..session import Event, KeyEvent, ResizeEvent, Session, SessionOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 100


class Terminal(Protocol):
    fd: int

    def size(self) -> tuple[int, int]: ...

    def raw_mode(self): ...


def terminal_events(
    terminal: Terminal,
    reader: KeyReader,
    timing: RuntimeLoopTiming,
    last_size: tuple[int, int] | None = None,
) -> Iterator[Event]:
    """Yield resize events as the size changes and key events as keys arrive.

    Keys are read with a poll timeout so a resize is noticed even while the
    user is idle.
    """
    while True:
        size = terminal.size()
        if size != last_size:
            last_size = size
            yield ResizeEvent(*size)
        key = reader.read_key(timeout_ms=timing.key_poll_ms)
        if key:
            yield KeyEvent(key)


def run_main_loop(
    session: Session,
    terminal: Terminal,
    reader: KeyReader,
    timing: RuntimeLoopTiming | None = None,
) -> SessionOutcome:
    """Run the interactive loop until the session reaches a terminal state."""
    timing = timing if timing is not None else RuntimeLoopTiming()
    with terminal.raw_mode():
        for event in terminal_events(terminal, reader, timing):
            session.handle_event(event)
            if session.finished:
                break
            if session.dirty:
                render_frame(terminal.fd, session.frame_context())
                session.dirty = False
    outcome = session.outcome()
    logger.debug("session finished in state %s", outcome.state.value)
    return outcome
