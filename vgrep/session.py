"""Interactive filter session as an explicit state machine.

``Session`` owns all mutable UI state (pattern, scroll offset, terminal size,
last valid match result) and reacts to key and resize events. Every pattern
edit re-runs the matcher and renderer synchronously; nothing here touches the
terminal, which keeps the whole interaction testable with plain event lists.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .input import KeyComboBinding, KeyComboRegistry
from .matching import InvalidPattern, MatchError, Matcher, MatchResult
from .prompt import PatternInput
from .render import Layout, RenderedView, render_rows
from .render.frame import FrameContext, format_match_status
from .render.help import help_row_count
from .theme import Theme

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    EDITING = "editing"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


Event = KeyEvent | ResizeEvent


@dataclass(frozen=True)
class SessionOutcome:
    """Final state handed to the output writer."""

    state: SessionState
    pattern: str
    matched_lines: tuple[str, ...]


class Session:
    def __init__(
        self,
        lines: Sequence[str],
        matcher: Matcher,
        *,
        layout: Layout = Layout.SINGLE,
        theme: Theme,
        width: int = 80,
        height: int = 24,
    ) -> None:
        self.lines: tuple[str, ...] = tuple(lines)
        self.matcher = matcher
        self.layout = layout
        self.theme = theme
        self.width = max(1, width)
        self.height = max(2, height)
        self.prompt = PatternInput()
        self.state = SessionState.EDITING
        self.result = MatchResult.empty(len(self.lines))
        self.error: MatchError | None = None
        self.view = RenderedView(rows=())
        self.start = 0
        self.show_help = False
        self.dirty = True
        self._keys = KeyComboRegistry().register_bindings(
            KeyComboBinding(("ENTER",), self.confirm),
            KeyComboBinding(("ESC", "CTRL_C"), self.cancel),
            KeyComboBinding(("UP",), lambda: self.scroll(-1)),
            KeyComboBinding(("DOWN",), lambda: self.scroll(1)),
            KeyComboBinding(("PAGE_UP",), lambda: self.scroll(-self.half_page())),
            KeyComboBinding(("PAGE_DOWN",), lambda: self.scroll(self.half_page())),
            KeyComboBinding(("HOME",), self.scroll_to_top),
            KeyComboBinding(("END",), self.scroll_to_bottom),
            KeyComboBinding(("LEFT",), lambda: self._move_cursor(self.prompt.move, -1)),
            KeyComboBinding(("RIGHT",), lambda: self._move_cursor(self.prompt.move, 1)),
            KeyComboBinding(("CTRL_A",), lambda: self._move_cursor(self.prompt.move_home)),
            KeyComboBinding(("CTRL_E",), lambda: self._move_cursor(self.prompt.move_end)),
            KeyComboBinding(("BACKSPACE",), lambda: self._edit(self.prompt.backspace())),
            KeyComboBinding(("DELETE", "CTRL_D"), lambda: self._edit(self.prompt.delete())),
            KeyComboBinding(("CTRL_W",), lambda: self._edit(self.prompt.delete_word_before())),
            KeyComboBinding(("CTRL_K",), lambda: self._edit(self.prompt.kill_to_end())),
            KeyComboBinding(("CTRL_U",), lambda: self._edit(self.prompt.clear())),
            KeyComboBinding(("CTRL_QUESTION",), self.toggle_help),
        )
        self.apply_pattern()

    @property
    def pattern(self) -> str:
        return self.prompt.text

    @property
    def finished(self) -> bool:
        return self.state is not SessionState.EDITING

    def visible_rows(self) -> int:
        """Content rows above the prompt line, minus any help block."""
        max_lines = self.height - 1
        return max(1, max_lines - help_row_count(max_lines, self.show_help))

    def half_page(self) -> int:
        return max(1, self.visible_rows() // 2)

    def max_start(self) -> int:
        return max(0, len(self.view.rows) - self.visible_rows())

    def _clamp_start(self) -> None:
        self.start = max(0, min(self.start, self.max_start()))

    def apply_pattern(self) -> None:
        """Re-match the current pattern; on failure keep the last valid result."""
        try:
            result = self.matcher.match(self.prompt.text, self.lines)
        except MatchError as exc:
            logger.debug("pattern %r rejected: %s", self.prompt.text, exc)
            self.error = exc
        else:
            self.result = result
            self.error = None
        self.rerender()

    def rerender(self) -> None:
        self.view = render_rows(self.lines, self.result, self.layout, self.width, self.theme)
        self._clamp_start()
        self.dirty = True

    def resize(self, width: int, height: int) -> bool:
        """Record a terminal size change and reflow; return whether size changed."""
        width = max(1, width)
        height = max(2, height)
        if (width, height) == (self.width, self.height):
            return False
        self.width = width
        self.height = height
        self.rerender()
        return True

    def scroll(self, delta: int) -> None:
        previous = self.start
        self.start += delta
        self._clamp_start()
        if self.start != previous:
            self.dirty = True

    def scroll_to_top(self) -> None:
        self.scroll(-self.start)

    def scroll_to_bottom(self) -> None:
        self.scroll(self.max_start() - self.start)

    def toggle_help(self) -> None:
        self.show_help = not self.show_help
        self._clamp_start()
        self.dirty = True

    def _move_cursor(self, move, *args: int) -> None:
        move(*args)
        self.dirty = True

    def _edit(self, changed: bool) -> None:
        if changed:
            self.apply_pattern()

    def confirm(self) -> None:
        logger.info("confirmed pattern %r with %d matches", self.prompt.text, self.result.count)
        self.state = SessionState.CONFIRMED

    def cancel(self) -> None:
        logger.info("cancelled")
        self.result = MatchResult.empty(len(self.lines))
        self.state = SessionState.CANCELLED

    def handle_key(self, key: str) -> None:
        if self.finished or not key:
            return
        if self._keys.dispatch(key):
            return
        if len(key) == 1 and key.isprintable():
            self._edit(self.prompt.insert(key))

    def handle_event(self, event: Event) -> None:
        if self.finished:
            return
        if isinstance(event, ResizeEvent):
            self.resize(event.width, event.height)
        else:
            self.handle_key(event.key)

    def run(self, events: Iterable[Event]) -> SessionOutcome:
        """Feed ``events`` until the session reaches a terminal state."""
        for event in events:
            self.handle_event(event)
            if self.finished:
                break
        return self.outcome()

    def status_text(self) -> str:
        if self.error is None:
            return format_match_status(self.result.count, len(self.lines))
        kind = "regex" if isinstance(self.error, InvalidPattern) else "grep"
        return f"{kind} error: {self.error}"

    def outcome(self) -> SessionOutcome:
        matched: tuple[str, ...] = ()
        if self.state is SessionState.CONFIRMED:
            matched = tuple(self.lines[idx] for idx in self.result.matched_indices())
        return SessionOutcome(state=self.state, pattern=self.prompt.text, matched_lines=matched)

    def frame_context(self) -> FrameContext:
        return FrameContext(
            rows=self.view.rows,
            start=self.start,
            max_lines=self.height - 1,
            width=self.width,
            status=self.status_text(),
            status_is_error=self.error is not None,
            pattern=self.prompt.text,
            cursor=self.prompt.cursor,
            show_help=self.show_help,
            theme=self.theme,
        )
