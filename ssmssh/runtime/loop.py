"""Main interactive event loop for the selector.

One thread owns the navigator: it drains dispatcher results, repaints when
state changed, then waits briefly for a key. Every event is handled to
completion before the next one is looked at.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..input import read_key
from ..inventory import Tag
from .dispatcher import TaskDispatcher
from .messages import (
    Command,
    FetchInstances,
    FetchPreview,
    FetchRegions,
    InstancesLoaded,
    KeyPressed,
    PreviewLoaded,
    Quit,
    RegionsLoaded,
    ScheduleTick,
    Tick,
)
from .navigator import Navigator

logger = logging.getLogger(__name__)


class InventorySource(Protocol):
    def list_regions(self, profile: str) -> list[str]: ...

    def list_instances(self, profile: str, region: str) -> list[str]: ...

    def fetch_tags(self, profile: str, region: str, instance_id: str) -> list[Tag]: ...


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 30


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_event_loop``."""

    render: Callable[[], None]
    execute: Callable[[Command], None]


def execute_command(command: Command, dispatcher: TaskDispatcher, inventory: InventorySource) -> None:
    """Hand one non-quit navigator command to the dispatcher."""
    if isinstance(command, FetchRegions):
        dispatcher.submit(
            lambda: inventory.list_regions(command.profile),
            command.timeout,
            lambda payload, error: RegionsLoaded(tuple(payload or ()), error),
            label="regions",
        )
    elif isinstance(command, FetchInstances):
        dispatcher.submit(
            lambda: inventory.list_instances(command.profile, command.region),
            command.timeout,
            lambda payload, error: InstancesLoaded(tuple(payload or ()), error),
            label="instances",
        )
    elif isinstance(command, FetchPreview):
        dispatcher.submit(
            lambda: inventory.fetch_tags(command.profile, command.region, command.instance_id),
            command.timeout,
            lambda payload, error: PreviewLoaded(command.instance_id, tuple(payload or ()), error),
            label="tags",
        )
    elif isinstance(command, ScheduleTick):
        dispatcher.schedule(command.delay, Tick())
    else:
        raise TypeError(f"unsupported command: {command!r}")


def run_event_loop(
    navigator: Navigator,
    terminal,
    stdin_fd: int,
    dispatcher: TaskDispatcher,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the selector until the navigator asks to quit.

    Each iteration handles delivered async results first, repaints when dirty,
    then decodes and dispatches at most one key.
    """
    dirty = True
    skip_next_lf = False

    def handle(event) -> bool:
        nonlocal dirty
        dirty = True
        should_quit = False
        for command in navigator.update(event):
            if isinstance(command, Quit):
                should_quit = True
            else:
                callbacks.execute(command)
        return should_quit

    with terminal.raw_mode():
        while True:
            if any(handle(message) for message in dispatcher.drain()):
                break

            if dirty:
                callbacks.render()
                dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.key_poll_ms)
            except KeyboardInterrupt:
                key = "CTRL_C"
            if key == "":
                continue
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue
            if key == "ENTER_CR":
                key = "ENTER"
                skip_next_lf = True
            elif key == "ENTER_LF":
                key = "ENTER"
                skip_next_lf = False
            else:
                skip_next_lf = False

            if handle(KeyPressed(key)):
                break

    logger.debug("event loop finished at stage %s", navigator.state.stage.value)


__all__ = [
    "InventorySource",
    "RuntimeLoopTiming",
    "RuntimeLoopCallbacks",
    "execute_command",
    "run_event_loop",
]
