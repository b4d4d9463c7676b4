"""Layout engine for the filter viewport.

Turns a line set and its match result into display rows, either as one
gutter-numbered column or as two side-by-side (unmatched | matched) columns.
Everything here is a pure function of its arguments and is recomputed on every
pattern change and resize.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..ansi import clip_ansi_line, display_width, pad_ansi_line, wrap_styled_line
from ..highlight import style_lines
from ..matching import MatchResult
from ..theme import Theme

DUAL_SEPARATOR = " │ "
MIN_DUAL_WIDTH = 20
FALLBACK_WIDTH = 80


class Layout(enum.Enum):
    SINGLE = "single"
    DUAL = "dual"


@dataclass(frozen=True)
class RenderedView:
    """Display rows for one render pass.

    ``left`` and ``right`` hold the line indices placed in each dual column;
    they stay empty for the single-column layout.
    """

    rows: tuple[str, ...]
    column_width: int = 0
    left: tuple[int, ...] = field(default_factory=tuple)
    right: tuple[int, ...] = field(default_factory=tuple)


def gutter_width(line_count: int) -> int:
    """Width of the line-number field: one more than the digits of ``line_count``."""
    return 1 + len(str(line_count))


def column_width(width: int, separator_width: int | None = None) -> int:
    """Return the width of each dual column for a terminal ``width``.

    Terminals narrower than ``MIN_DUAL_WIDTH`` are laid out as if they were
    ``FALLBACK_WIDTH`` wide.
    """
    if separator_width is None:
        separator_width = display_width(DUAL_SEPARATOR)
    if width < MIN_DUAL_WIDTH:
        width = FALLBACK_WIDTH
    return max(1, (width - separator_width) // 2)


def render_single(
    lines: Sequence[str],
    result: MatchResult,
    width: int,
    theme: Theme,
) -> RenderedView:
    styled = style_lines(lines, result, theme)
    number_width = gutter_width(len(lines))
    rows: list[str] = []
    for idx, text in enumerate(styled):
        gutter = f"{idx + 1:>{number_width}} | "
        if theme.gutter:
            gutter = f"{theme.gutter}{gutter}{theme.reset}"
        rows.append(clip_ansi_line(f"{gutter} {text}", max(1, width)))
    return RenderedView(rows=tuple(rows))


def partition_columns(result: MatchResult) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Split line indices into (unmatched, matched), each in original order."""
    left: list[int] = []
    right: list[int] = []
    for idx, flag in enumerate(result.matched):
        (right if flag else left).append(idx)
    return tuple(left), tuple(right)


def _column_cells(indices: Sequence[int], styled: Sequence[str], col_width: int) -> list[str]:
    cells: list[str] = []
    for idx in indices:
        for chunk in wrap_styled_line(styled[idx], col_width):
            cells.append(pad_ansi_line(chunk, col_width))
    return cells


def render_dual(
    lines: Sequence[str],
    result: MatchResult,
    width: int,
    theme: Theme,
) -> RenderedView:
    """Lay out unmatched lines on the left and matched lines on the right.

    Each column is compacted on its own, so a row pairs unrelated lines. Long
    lines wrap inside their column and the shorter column is padded with blanks.
    """
    col_width = column_width(width)
    left, right = partition_columns(result)
    styled = style_lines(lines, result, theme)
    left_cells = _column_cells(left, styled, col_width)
    right_cells = _column_cells(right, styled, col_width)

    height = max(len(left_cells), len(right_cells))
    blank = " " * col_width
    left_cells.extend([blank] * (height - len(left_cells)))
    right_cells.extend([blank] * (height - len(right_cells)))

    separator = DUAL_SEPARATOR
    if theme.separator:
        separator = f"{theme.separator}{DUAL_SEPARATOR}{theme.reset}"
    rows = tuple(f"{lhs}{separator}{rhs}" for lhs, rhs in zip(left_cells, right_cells))
    return RenderedView(rows=rows, column_width=col_width, left=left, right=right)


def render_rows(
    lines: Sequence[str],
    result: MatchResult,
    layout: Layout,
    width: int,
    theme: Theme,
) -> RenderedView:
    """Render ``lines`` for ``layout`` at terminal ``width``."""
    if layout is Layout.DUAL:
        return render_dual(lines, result, width, theme)
    return render_single(lines, result, width, theme)


__all__ = [
    "DUAL_SEPARATOR",
    "FALLBACK_WIDTH",
    "Layout",
    "MIN_DUAL_WIDTH",
    "RenderedView",
    "column_width",
    "gutter_width",
    "partition_columns",
    "render_dual",
    "render_rows",
    "render_single",
]
