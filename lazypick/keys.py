"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into normalized key tokens:
single printable characters, or names such as ``UP``, ``ENTER``, and ``ESC``.
Handles ESC-sequence timing and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_SEQUENCE_BYTES = 32
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_ARROW_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = bytearray(lead)
    for _ in range(_utf8_length(lead[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        if not 0x80 <= part[0] <= 0xBF:
            _PENDING_BYTES.append(part)
            break
        data.extend(part)
    return bytes(data).decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    """Decode the remainder of an ``ESC [`` sequence."""
    params = bytearray()
    while len(params) < MAX_SEQUENCE_BYTES:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "UNKNOWN"
        if 0x40 <= part[0] <= 0x7E:
            if part in _ARROW_KEYS:
                return _ARROW_KEYS[part]
            return "UNKNOWN"
        params.extend(part)
    return "UNKNOWN"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Block for one key and return its token.

    Returns ``""`` on EOF, or when ``timeout_ms`` elapses with no input.
    A lone ESC (no follow-up byte within the sequence timeout) is ``ESC``.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _read_utf8_char(fd, ch)
        return ch.decode("ascii")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        # Application cursor mode: ESC O A..D
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        if final in _ARROW_KEYS:
            return _ARROW_KEYS[final]
        _PENDING_BYTES.append(final)
        return "ESC"
    _PENDING_BYTES.append(seq)
    return "ESC"


def is_printable_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()
