"""Selector bootstrap: wire navigator, dispatcher, terminal, and renderer."""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Sequence
from typing import Protocol

from ..render import project_view, render_frame
from ..terminal import TerminalController
from ..ui_theme import UITheme
from .dispatcher import TaskDispatcher
from .loop import (
    InventorySource,
    RuntimeLoopCallbacks,
    RuntimeLoopTiming,
    execute_command,
    run_event_loop,
)
from .navigator import Navigator, SelectorTiming

logger = logging.getLogger(__name__)


class SelectorInventory(InventorySource, Protocol):
    def list_profiles(self) -> Sequence[str]: ...


def run_selector(
    inventory: SelectorInventory,
    theme: UITheme,
    *,
    timing: SelectorTiming | None = None,
    window_rows: int = 20,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> Navigator:
    """Run the interactive selector and return the finished navigator.

    Profiles load synchronously first; if that fails the terminal is never
    switched into TUI mode and the navigator comes back in its error state.
    """
    navigator = Navigator(inventory.list_profiles, timing)
    if navigator.state.finished:
        return navigator

    in_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    out_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(in_fd, out_fd)
    dispatcher = TaskDispatcher()

    def render() -> None:
        term = shutil.get_terminal_size((80, 24))
        rows = project_view(navigator.state, theme, window_rows=window_rows, width=term.columns)
        render_frame(rows, out_fd)

    callbacks = RuntimeLoopCallbacks(
        render=render,
        execute=lambda command: execute_command(command, dispatcher, inventory),
    )
    logger.info("selector started with %d profiles", len(navigator.state.profiles))
    try:
        run_event_loop(navigator, terminal, in_fd, dispatcher, RuntimeLoopTiming(), callbacks)
    finally:
        dispatcher.shutdown()
    return navigator


__all__ = ["SelectorInventory", "run_selector"]
