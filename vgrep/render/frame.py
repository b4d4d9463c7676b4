"""Full-screen frame composition.

Combines the visible slice of content rows, the optional help block, and the
status/prompt line into one ANSI payload written to the terminal in a single
``os.write`` call.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width
from ..theme import Theme
from .help import help_lines, help_row_count

PROMPT_PREFIX = " > "
PATTERN_PLACEHOLDER = "^[.*]$"


@dataclass
class FrameContext:
    rows: Sequence[str]
    start: int
    max_lines: int
    width: int
    status: str
    status_is_error: bool
    pattern: str
    cursor: int
    show_help: bool
    theme: Theme


def format_match_status(count: int, total: int) -> str:
    """Return ``"<percent>% <count>/<total>"`` with the percent padded to six places."""
    percent = (count / total * 100.0) if total else 0.0
    return f"{percent:6.2f}% {count}/{total}"


def _prompt_window(pattern: str, cursor: int, available: int) -> tuple[str, int]:
    """Return the visible slice of ``pattern`` and the cursor offset inside it."""
    if available <= 0:
        return "", 0
    offset = max(0, cursor - available + 1)
    return pattern[offset : offset + available], cursor - offset


def build_prompt_line(context: FrameContext) -> tuple[str, int]:
    """Compose the bottom line and return it with the 1-based cursor column."""
    theme = context.theme
    width = max(1, context.width)
    status = clip_ansi_line(context.status, max(1, width // 2))
    status_style = theme.error if context.status_is_error else theme.status
    prefix_width = display_width(status) + display_width(PROMPT_PREFIX)

    out: list[str] = []
    out.append(f"{status_style}{status}{theme.reset}" if status_style else status)
    out.append(f"{theme.prompt}{PROMPT_PREFIX}{theme.reset}" if theme.prompt else PROMPT_PREFIX)

    available = width - prefix_width - 1
    if context.pattern:
        visible, cursor_offset = _prompt_window(context.pattern, context.cursor, available)
        out.append(visible)
        cursor_col = prefix_width + display_width(visible[:cursor_offset]) + 1
    else:
        placeholder = PATTERN_PLACEHOLDER[: max(0, available)]
        if placeholder:
            out.append(f"{theme.placeholder}{placeholder}{theme.reset}" if theme.placeholder else placeholder)
        cursor_col = prefix_width + 1
    return "".join(out), min(width, cursor_col)


def build_frame(context: FrameContext) -> str:
    """Return the complete ANSI payload for one frame."""
    out: list[str] = ["\033[?25l\033[H"]
    help_rows = help_row_count(context.max_lines, context.show_help)
    content_rows = max(0, context.max_lines - help_rows)
    line_width = max(1, context.width)

    for row in range(content_rows):
        idx = context.start + row
        if 0 <= idx < len(context.rows):
            text = clip_ansi_line(context.rows[idx], line_width)
            out.append(text)
            if "\033" in text:
                out.append("\033[0m")
        out.append("\033[K\r\n")

    help_text = help_lines(context.theme)
    for row in range(help_rows):
        text = clip_ansi_line(help_text[row], line_width)
        out.append(text)
        if "\033" in text:
            out.append("\033[0m")
        out.append("\033[K\r\n")

    prompt, cursor_col = build_prompt_line(context)
    out.append(prompt)
    out.append("\033[0m\033[K")
    out.append(f"\033[{context.max_lines + 1};{cursor_col}H\033[?25h")
    return "".join(out)


def render_frame(fd: int, context: FrameContext) -> None:
    """Write one frame to ``fd``."""
    os.write(fd, build_frame(context).encode("utf-8", errors="replace"))


__all__ = [
    "FrameContext",
    "PATTERN_PLACEHOLDER",
    "PROMPT_PREFIX",
    "build_frame",
    "build_prompt_line",
    "format_match_status",
    "render_frame",
]
