"""Terminal control helpers for the TUI session.

Owns the controlling-terminal handle, raw-mode lifecycle, and alternate-screen
switching. The UI talks to ``/dev/tty`` so stdin and stdout stay free for the
piped input and the filtered output.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

TTY_PATH = "/dev/tty"


class TerminalController:
    """Manage terminal mode transitions on one tty file descriptor."""

    def __init__(self, fd: int) -> None:
        """Capture tty state for ``fd``, used for both key input and drawing."""
        self.fd = fd
        self._saved_tty_state = termios.tcgetattr(fd)

    @classmethod
    def open(cls, path: str = TTY_PATH) -> TerminalController:
        """Open the controlling terminal at ``path``.

        Raises ``OSError`` when it cannot be opened and ``termios.error`` when
        it is not a terminal.
        """
        fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
        try:
            return cls(fd)
        except termios.error:
            os.close(fd)
            raise

    def close(self) -> None:
        os.close(self.fd)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, lines)``, falling back to 80x24 when unknown."""
        try:
            size = os.get_terminal_size(self.fd)
        except OSError:
            return 80, 24
        return size.columns or 80, size.lines or 24

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode."""
        tty.setraw(self.fd, termios.TCSAFLUSH)
        # Enter alternate screen and clear it.
        os.write(self.fd, b"\x1b[?1049h\x1b[H\x1b[2J")

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer and the saved tty attributes."""
        # Show cursor and restore the main screen buffer.
        os.write(self.fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
