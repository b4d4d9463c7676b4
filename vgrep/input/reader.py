"""Low-level terminal input decoding.

Reads raw bytes from the terminal and translates them into normalized key
tokens. Handles ESC-sequence timing, CSI/SS3 navigation keys, and multi-byte
UTF-8 characters.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
UNKNOWN_KEY = "UNKNOWN"

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x01": "CTRL_A",
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x05": "CTRL_E",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x09": "TAB",
    b"\x0b": "CTRL_K",
    b"\x0d": "ENTER",
    b"\x0a": "ENTER",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\x1f": "CTRL_QUESTION",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"4": "END",
    b"8": "END",
    b"3": "DELETE",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyReader:
    """Decode key tokens from a terminal file descriptor.

    Bytes read ahead while probing an escape sequence that turned out not to
    be one are kept and replayed on the next call.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Return the next key token, or ``""`` when ``timeout_ms`` elapses first."""
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return ""
            ch = os.read(self.fd, 1)
            if not ch:
                return ""

        if ch in _CONTROL_KEYS:
            return _CONTROL_KEYS[ch]
        if ch == b"\x1b":
            return self._read_escape()
        if ch[0] < 0x20:
            return UNKNOWN_KEY

        length = _utf8_sequence_length(ch[0])
        data = ch
        while len(data) < length:
            nxt = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if nxt is None:
                break
            data += nxt
        return data.decode("utf-8", errors="replace")

    def _read_escape(self) -> str:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq == b"\x1b":
            self._pending.append(seq)
            return "ESC"
        if seq == b"O":
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return "ESC"
            return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)
        if seq != b"[":
            # Alt+<key>: nothing is bound to it.
            return UNKNOWN_KEY

        params = b""
        while True:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return "ESC"
            if 0x40 <= part[0] <= 0x7E:
                break
            params += part
            if len(params) > 16:
                return UNKNOWN_KEY

        if part == b"~":
            # "5;5~" style modifiers are ignored; only the key number matters.
            return _CSI_TILDE_KEYS.get(params.split(b";")[0], UNKNOWN_KEY)
        return _CSI_FINAL_KEYS.get(part, UNKNOWN_KEY)
