"""ANSI-aware text measurement for boxed panel layout.

Escape sequences never count toward width, and East Asian wide characters
take two columns, so borders stay aligned when rows carry color codes.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns; wide/fullwidth characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the visible column count of a styled string."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad a styled line to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "strip_ansi",
    "display_width",
    "clip_ansi_line",
    "pad_ansi_line",
]
