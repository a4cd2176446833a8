"""Event and command types exchanged between the loop and the navigator.

Events flow into ``Navigator.update``; commands flow back out and are
executed by the loop through the task dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..errors import SelectorError
from ..inventory import Tag


@dataclass(frozen=True)
class KeyPressed:
    """One normalized key token from the terminal reader."""

    key: str


@dataclass(frozen=True)
class RegionsLoaded:
    regions: tuple[str, ...] = ()
    error: SelectorError | None = None


@dataclass(frozen=True)
class InstancesLoaded:
    instances: tuple[str, ...] = ()
    error: SelectorError | None = None


@dataclass(frozen=True)
class PreviewLoaded:
    """Tag lookup outcome, carrying the instance id it was requested for."""

    instance_id: str
    tags: tuple[Tag, ...] = ()
    error: SelectorError | None = None


@dataclass(frozen=True)
class Tick:
    """Spinner animation step."""


Event = Union[KeyPressed, RegionsLoaded, InstancesLoaded, PreviewLoaded, Tick]


@dataclass(frozen=True)
class FetchRegions:
    profile: str
    timeout: float


@dataclass(frozen=True)
class FetchInstances:
    profile: str
    region: str
    timeout: float


@dataclass(frozen=True)
class FetchPreview:
    profile: str
    region: str
    instance_id: str
    timeout: float


@dataclass(frozen=True)
class ScheduleTick:
    delay: float


@dataclass(frozen=True)
class Quit:
    """Stop the event loop after the current message."""


Command = Union[FetchRegions, FetchInstances, FetchPreview, ScheduleTick, Quit]


__all__ = [
    "KeyPressed",
    "RegionsLoaded",
    "InstancesLoaded",
    "PreviewLoaded",
    "Tick",
    "Event",
    "FetchRegions",
    "FetchInstances",
    "FetchPreview",
    "ScheduleTick",
    "Quit",
    "Command",
]
