"""ANSI-aware text measurement and line shaping utilities.

Provides clipping, padding, and wrapping that preserve escape sequences.
These helpers keep the gutter and the dual columns aligned when color codes,
tabs, and wide characters are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
SGR_RESET = "\033[0m"
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies, ignoring ANSI codes."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            if col + w > max_cols:
                break
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad a styled line so it fills exactly ``width`` columns.

    A reset is emitted before the padding whenever the text carries escape
    codes, so trailing style never leaks into neighbouring cells.
    """
    clipped = clip_ansi_line(text, width)
    gap = " " * max(0, width - display_width(clipped))
    if "\x1b" in clipped:
        return f"{clipped}{SGR_RESET}{gap}"
    return f"{clipped}{gap}"


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Wrap a styled line into chunks that fit ``width`` display columns.

    Escape sequences remain attached to their surrounding chunk, and tab
    expansion respects terminal tab-stop alignment for each wrapped segment.
    """
    if width <= 0:
        return [""]
    if not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                chunk.append(match.group(0))
                i = match.end()
                continue

        if col >= width:
            wrapped.append("".join(chunk))
            chunk = []
            col = 0

        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            if col + w > width and chunk:
                wrapped.append("".join(chunk))
                chunk = []
                col = 0
                w = min(TAB_STOP, width)
            chunk.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > width and chunk:
            wrapped.append("".join(chunk))
            chunk = []
            col = 0
        chunk.append(ch)
        col += char_display_width(ch, col)
        i += 1

    wrapped.append("".join(chunk))
    return wrapped


def wrap_styled_line(text: str, width: int) -> list[str]:
    """Wrap ``text`` like :func:`wrap_ansi_line`, re-opening styles per chunk.

    The SGR sequence active at the end of one chunk is replayed at the start of
    the next, so a highlight split across a wrap keeps its styling on both rows.
    """
    chunks = wrap_ansi_line(text, width)
    if len(chunks) == 1:
        return chunks

    out: list[str] = []
    active = ""
    for chunk in chunks:
        out.append(f"{active}{chunk}")
        for seq in ANSI_ESCAPE_RE.findall(chunk):
            if not seq.endswith("m"):
                continue
            active = "" if seq in {SGR_RESET, "\033[m"} else seq
    return out
