"""Single-line editor holding the pattern being typed."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PatternInput:
    """Pattern text plus a cursor index in ``[0, len(text)]``.

    Editing methods return ``True`` when the text changed, which is the signal
    for the session to re-run matching.
    """

    text: str = ""
    cursor: int = 0

    def __post_init__(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.text)))

    def insert(self, chars: str) -> bool:
        if not chars:
            return False
        self.text = self.text[: self.cursor] + chars + self.text[self.cursor :]
        self.cursor += len(chars)
        return True

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        return True

    def delete_word_before(self) -> bool:
        """Delete back to the previous word start, like readline's Ctrl+W."""
        if self.cursor == 0:
            return False
        idx = self.cursor
        while idx > 0 and self.text[idx - 1].isspace():
            idx -= 1
        while idx > 0 and not self.text[idx - 1].isspace():
            idx -= 1
        self.text = self.text[:idx] + self.text[self.cursor :]
        self.cursor = idx
        return True

    def kill_to_end(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.text = self.text[: self.cursor]
        return True

    def clear(self) -> bool:
        if not self.text:
            return False
        self.text = ""
        self.cursor = 0
        return True

    def move(self, delta: int) -> None:
        self.cursor = max(0, min(len(self.text), self.cursor + delta))

    def move_home(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self.text)
