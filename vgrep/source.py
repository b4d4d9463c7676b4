"""Input loading for the filter session.

Reads every line from piped stdin or a named file once at startup.
The resulting line set is an immutable tuple for the rest of the session.
"""

from __future__ import annotations

import logging
import os
import stat
import sys
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

NO_INPUT_PLACEHOLDER = "(no input: pipe data or pass a file)"


class InputUnavailable(Exception):
    """Raised when the named input file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


def decode_text(data: bytes) -> str:
    """Decode input bytes as UTF-8 (a leading BOM is dropped), else Latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def split_lines(text: str) -> tuple[str, ...]:
    """Split on ``\\n`` without terminators; a trailing newline adds no line.

    Only newlines delimit lines (a stray form feed stays inside its line), and
    a ``\\r`` before the newline is dropped.
    """
    if not text:
        return ()
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return tuple(part[:-1] if part.endswith("\r") else part for part in parts)


def stdin_is_piped(stream: BinaryIO | None = None) -> bool:
    """Return whether stdin is a pipe or a regular file.

    Character devices (a terminal, or ``/dev/null`` as attached by xargs) are
    not input, so a named file is read instead.
    """
    stream = stream if stream is not None else sys.stdin.buffer
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (OSError, ValueError):
        return False
    return stat.S_ISFIFO(mode) or stat.S_ISREG(mode)


def load_lines(path: Path | None, stdin: BinaryIO | None = None) -> tuple[str, ...]:
    """Return the session line set.

    Piped stdin wins over ``path``; with neither, a single placeholder line is
    returned instead of failing. Raises :class:`InputUnavailable` when ``path``
    cannot be read.
    """
    stdin = stdin if stdin is not None else sys.stdin.buffer
    if stdin_is_piped(stdin):
        lines = split_lines(decode_text(stdin.read()))
        logger.debug("loaded %d lines from stdin", len(lines))
        return lines
    if path is None:
        return (NO_INPUT_PLACEHOLDER,)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise InputUnavailable(path, exc.strerror or str(exc)) from exc
    lines = split_lines(decode_text(data))
    logger.debug("loaded %d lines from %s", len(lines), path)
    return lines
