"""Line styling for matched and unmatched rows.

Applies highlight spans to raw line text and neutralizes terminal control
bytes so arbitrary input cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .matching import MatchResult, Span
from .theme import Theme

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch == "\t":
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _styled(text: str, style: str, reset: str) -> str:
    if not text or not style:
        return text
    return f"{style}{text}{reset}"


def highlight_spans(line: str, spans: Sequence[Span], theme: Theme) -> str:
    """Wrap each span of ``line`` in the theme's match style.

    Offsets refer to the raw line, so sanitizing happens per segment after the
    line has been cut at span boundaries.
    """
    out: list[str] = []
    cursor = 0
    for start, end in spans:
        if start < cursor:
            continue
        out.append(sanitize_terminal_text(line[cursor:start]))
        out.append(_styled(sanitize_terminal_text(line[start:end]), theme.match, theme.reset))
        cursor = end
    out.append(sanitize_terminal_text(line[cursor:]))
    return "".join(out)


def style_line(line: str, matched: bool, spans: Sequence[Span], theme: Theme) -> str:
    """Return the display form of one line: highlighted if matched, else dimmed."""
    if matched:
        return highlight_spans(line, spans, theme)
    return _styled(sanitize_terminal_text(line), theme.dim, theme.reset)


def style_lines(lines: Sequence[str], result: MatchResult, theme: Theme) -> list[str]:
    """Style every line of the set against ``result``."""
    return [
        style_line(line, result.matched[idx], result.spans[idx], theme)
        for idx, line in enumerate(lines)
    ]
