"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Bytes are decoded one at a time, so multi-byte UTF-8 input arrives as
replacement characters that the navigator drops as non-printable.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\x11": "CTRL_Q",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return one key token, or ``""`` when nothing arrived within ``timeout_ms``."""
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

    token = _CONTROL_KEYS.get(ch)
    if token is not None:
        return token

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return "ESC"
    token = _CSI_FINAL_KEYS.get(final)
    if token is not None:
        return token
    # Swallow the rest of an unknown CSI sequence (e.g. ``ESC [ 3 ~``).
    while final is not None and not (b"@" <= final <= b"~"):
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return "UNKNOWN"
