"""Pattern matching strategies for the filter session.

``RegexMatcher`` compiles the pattern with :mod:`re`; ``GrepMatcher`` hands
the whole line set to an external grep and parses its numbered output. Both
return a :class:`MatchResult` recomputed from scratch for every pattern.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

Span = tuple[int, int]

DEFAULT_GREP_COMMAND = "grep"
GREP_NO_MATCH_EXIT = 1


class MatchError(Exception):
    """Base class for pattern evaluation failures."""


class InvalidPattern(MatchError):
    """Pattern failed to compile."""


class ToolFailure(MatchError):
    """External search tool failed for a reason other than "no matches"."""


@dataclass(frozen=True)
class MatchResult:
    """Per-line match flags plus the highlight spans of each matched line."""

    matched: tuple[bool, ...]
    spans: tuple[tuple[Span, ...], ...]
    count: int = field(init=False)

    def __post_init__(self) -> None:
        if len(self.matched) != len(self.spans):
            raise ValueError("matched and spans must cover the same lines")
        object.__setattr__(self, "count", sum(1 for flag in self.matched if flag))

    @classmethod
    def empty(cls, line_count: int) -> MatchResult:
        """Return a result with every line unmatched."""
        return cls(matched=(False,) * line_count, spans=((),) * line_count)

    def matched_indices(self) -> list[int]:
        return [idx for idx, flag in enumerate(self.matched) if flag]


class Matcher(Protocol):
    """Strategy evaluating one pattern against the full line set."""

    name: str

    def match(self, pattern: str, lines: Sequence[str]) -> MatchResult:
        """Return the match result or raise :class:`MatchError`."""
        ...


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` or raise :class:`InvalidPattern` with the ``re`` message."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPattern(str(exc)) from exc


def occurrence_spans(regex: re.Pattern[str], line: str) -> tuple[Span, ...]:
    """Return every non-empty, non-overlapping occurrence of ``regex`` in ``line``.

    Zero-length occurrences still count toward a match but have nothing to
    highlight, so they are left out.
    """
    return tuple(m.span() for m in regex.finditer(line) if m.end() > m.start())


class RegexMatcher:
    """In-process matcher backed by :mod:`re`."""

    name = "regex"

    def match(self, pattern: str, lines: Sequence[str]) -> MatchResult:
        if not pattern:
            return MatchResult.empty(len(lines))
        regex = compile_pattern(pattern)
        matched: list[bool] = []
        spans: list[tuple[Span, ...]] = []
        for line in lines:
            hit = regex.search(line) is not None
            matched.append(hit)
            spans.append(occurrence_spans(regex, line) if hit else ())
        return MatchResult(matched=tuple(matched), spans=tuple(spans))


def parse_numbered_output(output: str, line_count: int) -> set[int]:
    """Parse ``"<n>:<content>"`` lines into 0-based indices within range.

    Lines without a numeric prefix (context separators, warnings) are skipped.
    """
    indices: set[int] = set()
    for raw in output.splitlines():
        number, sep, _content = raw.partition(":")
        if not sep:
            continue
        try:
            line_number = int(number)
        except ValueError:
            continue
        if 1 <= line_number <= line_count:
            indices.add(line_number - 1)
    return indices


class GrepMatcher:
    """Matcher that delegates to an external grep-compatible tool.

    The line set is written to the tool's stdin, so ``extra_args`` should hold
    options only (for example ``-i`` or ``-E``).
    """

    name = "grep"

    def __init__(self, extra_args: Sequence[str] = (), command: str = DEFAULT_GREP_COMMAND) -> None:
        self.extra_args = tuple(extra_args)
        self.command = command

    def build_command(self, pattern: str) -> list[str]:
        # -a: a NUL byte in any line must not turn the input into a "binary file".
        return [self.command, "-n", "-a", *self.extra_args, "-e", pattern]

    def run(self, pattern: str, lines: Sequence[str]) -> set[int]:
        """Run the tool and return matched 0-based line indices."""
        if shutil.which(self.command) is None:
            raise ToolFailure(f"{self.command} is not installed.")
        cmd = self.build_command(pattern)
        payload = "".join(f"{line}\n" for line in lines)
        logger.debug("running %s", cmd)
        try:
            proc = subprocess.run(
                cmd,
                input=payload,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise ToolFailure(f"failed to run {self.command}: {exc}") from exc

        if proc.returncode == GREP_NO_MATCH_EXIT:
            return set()
        if proc.returncode != 0:
            err = proc.stderr.strip() or f"{self.command} failed with exit code {proc.returncode}"
            logger.warning("%s failed: %s", self.command, err)
            raise ToolFailure(err)
        return parse_numbered_output(proc.stdout, len(lines))

    def match(self, pattern: str, lines: Sequence[str]) -> MatchResult:
        if not pattern:
            return MatchResult.empty(len(lines))
        indices = self.run(pattern, lines)

        # grep reports only line numbers; spans come from the same pattern in-process when it compiles.
        try:
            regex: re.Pattern[str] | None = compile_pattern(pattern)
        except InvalidPattern:
            regex = None
        matched: list[bool] = []
        spans: list[tuple[Span, ...]] = []
        for idx, line in enumerate(lines):
            hit = idx in indices
            matched.append(hit)
            spans.append(occurrence_spans(regex, line) if hit and regex is not None else ())
        return MatchResult(matched=tuple(matched), spans=tuple(spans))


def build_matcher(extra_args: Sequence[str] | None, command: str = DEFAULT_GREP_COMMAND) -> Matcher:
    """Select the matching strategy for a session.

    ``extra_args`` is ``None`` when no ``--`` separator was given on the
    command line; any list (even empty) selects the external tool.
    """
    if extra_args is None:
        logger.debug("using in-process regex matcher")
        return RegexMatcher()
    logger.debug("using %s matcher with args %s", command, list(extra_args))
    return GrepMatcher(extra_args, command=command)


__all__ = [
    "DEFAULT_GREP_COMMAND",
    "GrepMatcher",
    "InvalidPattern",
    "MatchError",
    "MatchResult",
    "Matcher",
    "RegexMatcher",
    "Span",
    "ToolFailure",
    "build_matcher",
    "compile_pattern",
    "occurrence_spans",
    "parse_numbered_output",
]
