"""Frame painting for the selector.

``project_view`` builds rows from state; ``render_frame`` writes one full
frame to the terminal, resetting styles at every line end.
"""

from __future__ import annotations

import os
import sys

from .layout import DEFAULT_WINDOW_ROWS, box, join_horizontal, list_window, project_view


def compose_frame(rows: list[str]) -> str:
    """Return the escape-prefixed frame text for ``rows`` in raw terminal mode."""
    out = ["\033[H\033[J"]
    for idx, row in enumerate(rows):
        if idx:
            out.append("\r\n")
        out.append(row)
        if "\033" in row:
            out.append("\033[0m")
    return "".join(out)


def render_frame(rows: list[str], stdout_fd: int | None = None) -> None:
    fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    os.write(fd, compose_frame(rows).encode("utf-8", errors="replace"))


__all__ = [
    "DEFAULT_WINDOW_ROWS",
    "box",
    "join_horizontal",
    "list_window",
    "project_view",
    "compose_frame",
    "render_frame",
]
