"""Layout tests for single- and dual-column rendering.

Checks gutter formatting, highlight/dim styling, column partitioning, padding,
width fallbacks, and that rendering is a pure function of its inputs.
"""

from __future__ import annotations

import unittest

from vgrep.ansi import ANSI_ESCAPE_RE, display_width
from vgrep.matching import MatchResult, RegexMatcher
from vgrep.render import (
    DUAL_SEPARATOR,
    FALLBACK_WIDTH,
    Layout,
    column_width,
    gutter_width,
    partition_columns,
    render_dual,
    render_rows,
    render_single,
)
from vgrep.theme import DEFAULT_THEME, PLAIN_THEME

FRUIT = ("apple", "banana", "cherry")


def _plain(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


class ColumnWidthTests(unittest.TestCase):
    def test_width_21_with_three_column_separator_gives_nine(self) -> None:
        self.assertEqual(display_width(DUAL_SEPARATOR), 3)
        self.assertEqual(column_width(21, 3), 9)
        self.assertEqual(column_width(21), 9)

    def test_narrow_terminal_falls_back_to_default_width(self) -> None:
        self.assertEqual(column_width(5), (FALLBACK_WIDTH - 3) // 2)
        self.assertEqual(column_width(0), (FALLBACK_WIDTH - 3) // 2)

    def test_column_width_is_never_below_one(self) -> None:
        self.assertEqual(column_width(20, 30), 1)

    def test_gutter_width_is_one_more_than_digit_count(self) -> None:
        self.assertEqual(gutter_width(3), 2)
        self.assertEqual(gutter_width(10), 3)
        self.assertEqual(gutter_width(999), 4)


class SingleColumnTests(unittest.TestCase):
    def test_banana_scenario_highlights_only_matched_substrings(self) -> None:
        result = RegexMatcher().match("an", FRUIT)
        view = render_single(FRUIT, result, 80, DEFAULT_THEME)

        self.assertEqual([_plain(row) for row in view.rows], [" 1 |  apple", " 2 |  banana", " 3 |  cherry"])
        match, dim, reset = DEFAULT_THEME.match, DEFAULT_THEME.dim, DEFAULT_THEME.reset
        self.assertIn(f"b{match}an{reset}{match}an{reset}a", view.rows[1])
        self.assertIn(f"{dim}apple{reset}", view.rows[0])
        self.assertIn(f"{dim}cherry{reset}", view.rows[2])
        self.assertNotIn(match, view.rows[0])

    def test_empty_pattern_dims_every_line(self) -> None:
        result = RegexMatcher().match("", FRUIT)
        view = render_single(FRUIT, result, 80, DEFAULT_THEME)
        for row, line in zip(view.rows, FRUIT):
            self.assertIn(f"{DEFAULT_THEME.dim}{line}{DEFAULT_THEME.reset}", row)
            self.assertNotIn(DEFAULT_THEME.match, row)

    def test_gutter_is_right_aligned_for_ten_lines(self) -> None:
        lines = [str(n) for n in range(10)]
        view = render_single(lines, MatchResult.empty(10), 80, PLAIN_THEME)
        self.assertEqual(view.rows[0], "  1 |  0")
        self.assertEqual(view.rows[9], " 10 |  9")

    def test_rows_are_clipped_to_terminal_width(self) -> None:
        view = render_single(["x" * 100], MatchResult.empty(1), 20, PLAIN_THEME)
        self.assertEqual(display_width(view.rows[0]), 20)

    def test_control_bytes_are_escaped(self) -> None:
        view = render_single(["bell\x07here"], MatchResult.empty(1), 80, PLAIN_THEME)
        self.assertEqual(view.rows[0], " 1 |  bell\\x07here")

    def test_plain_theme_marks_matches_with_reverse_video(self) -> None:
        result = RegexMatcher().match("err", ["an error"])
        view = render_single(["an error"], result, 80, PLAIN_THEME)
        self.assertEqual(view.rows[0], " 1 |  an \033[7merr\033[0mor")


class DualColumnTests(unittest.TestCase):
    LINES = ("alpha", "beta", "gamma", "delta", "epsilon")

    def test_partition_keeps_original_order_within_each_column(self) -> None:
        result = RegexMatcher().match("l", self.LINES)
        left, right = partition_columns(result)
        self.assertEqual(left, (1, 2))
        self.assertEqual(right, (0, 3, 4))

    def test_columns_cover_every_line_and_have_equal_height(self) -> None:
        for pattern in ("", "a", "l", "^e", "zzz", "."):
            with self.subTest(pattern=pattern):
                result = RegexMatcher().match(pattern, self.LINES)
                view = render_dual(self.LINES, result, 41, PLAIN_THEME)
                self.assertEqual(len(view.left) + len(view.right), len(self.LINES))
                self.assertEqual(len(view.rows), max(len(view.left), len(view.right)))
                for row in view.rows:
                    lhs, rhs = _plain(row).split(DUAL_SEPARATOR)
                    self.assertEqual(len(lhs), view.column_width)
                    self.assertEqual(len(rhs), view.column_width)

    def test_columns_are_compacted_independently(self) -> None:
        result = RegexMatcher().match("l", self.LINES)
        view = render_dual(self.LINES, result, 21, PLAIN_THEME)
        self.assertEqual(view.column_width, 9)
        self.assertEqual(
            [_plain(row) for row in view.rows],
            [
                "beta      │ alpha    ",
                "gamma     │ delta    ",
                "          │ epsilon  ",
            ],
        )

    def test_long_lines_wrap_within_their_column(self) -> None:
        lines = ("abcdefghijkl", "short")
        result = RegexMatcher().match("short", lines)
        view = render_dual(lines, result, 21, PLAIN_THEME)
        self.assertEqual(
            [_plain(row) for row in view.rows],
            [
                "abcdefghi │ short    ",
                "jkl       │          ",
            ],
        )

    def test_highlight_split_by_wrap_is_restyled_on_next_row(self) -> None:
        lines = ("xxxxxxxxERROR",)
        result = RegexMatcher().match("ERROR", lines)
        view = render_dual(lines, result, 21, DEFAULT_THEME)
        self.assertEqual(len(view.rows), 2)
        right_second = view.rows[1].split(f"{DUAL_SEPARATOR}{DEFAULT_THEME.reset}")[-1]
        self.assertTrue(right_second.startswith(DEFAULT_THEME.match))
        self.assertEqual(_plain(right_second), "RROR     ")

    def test_resize_reflows_columns(self) -> None:
        result = RegexMatcher().match("a", self.LINES)
        narrow = render_dual(self.LINES, result, 21, PLAIN_THEME)
        wide = render_dual(self.LINES, result, 61, PLAIN_THEME)
        self.assertEqual(narrow.column_width, 9)
        self.assertEqual(wide.column_width, 29)
        self.assertEqual(display_width(wide.rows[0]), 61)


class RenderRowsTests(unittest.TestCase):
    def test_layout_selects_renderer(self) -> None:
        result = RegexMatcher().match("an", FRUIT)
        single = render_rows(FRUIT, result, Layout.SINGLE, 40, PLAIN_THEME)
        dual = render_rows(FRUIT, result, Layout.DUAL, 40, PLAIN_THEME)
        self.assertEqual(len(single.rows), 3)
        self.assertEqual(dual.right, (1,))

    def test_rendering_is_idempotent(self) -> None:
        result = RegexMatcher().match("e", FRUIT)
        for layout in Layout:
            with self.subTest(layout=layout):
                first = render_rows(FRUIT, result, layout, 33, DEFAULT_THEME)
                second = render_rows(FRUIT, RegexMatcher().match("e", FRUIT), layout, 33, DEFAULT_THEME)
                self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
