"""Stage navigator: the profile -> region -> instance state machine.

``Navigator.update`` consumes one event, mutates the single ``SelectorState``
it owns, and returns the commands the loop should execute next. Nothing here
touches threads or the terminal, so every transition is testable directly.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..errors import ConfigurationError, EmptySelectionError, SelectorError
from ..filtering import extract_instance_id, filter_items
from .messages import (
    Command,
    Event,
    FetchInstances,
    FetchRegions,
    InstancesLoaded,
    KeyPressed,
    PreviewLoaded,
    Quit,
    RegionsLoaded,
    ScheduleTick,
    Tick,
)
from .preview import PreviewCoordinator, PreviewState

logger = logging.getLogger(__name__)

SPINNER_FRAMES: tuple[str, ...] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
QUIT_KEYS = frozenset({"ESC", "CTRL_C", "CTRL_Q"})


class Stage(enum.Enum):
    PROFILE = "profile"
    REGION = "region"
    INSTANCE = "instance"
    DONE = "done"


@dataclass(frozen=True)
class SelectorTiming:
    """Deadlines and tick interval, in seconds."""

    list_timeout: float = 15.0
    preview_timeout: float = 5.0
    tick_interval: float = 0.08


@dataclass(frozen=True)
class Selection:
    profile: str
    region: str
    instance_id: str


@dataclass
class SelectorState:
    stage: Stage = Stage.PROFILE
    profiles: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    instances: tuple[str, ...] = ()
    filtered: list[str] = field(default_factory=list)
    query: str = ""
    cursor: int = 0
    loading: bool = False
    spinner_frame: int = 0
    tick_pending: bool = False
    selected_profile: str = ""
    selected_region: str = ""
    selected_instance: str = ""
    preview: PreviewState = field(default_factory=PreviewState)
    error: SelectorError | None = None

    @property
    def finished(self) -> bool:
        return self.stage is Stage.DONE or self.error is not None

    def stage_items(self) -> tuple[str, ...]:
        if self.stage is Stage.PROFILE:
            return self.profiles
        if self.stage is Stage.REGION:
            return self.regions
        if self.stage is Stage.INSTANCE:
            return self.instances
        return ()

    def highlighted(self) -> str | None:
        if not self.filtered:
            return None
        return self.filtered[self.cursor]


class Navigator:
    """Drive ``SelectorState`` one event at a time."""

    def __init__(
        self,
        list_profiles: Callable[[], Sequence[str]],
        timing: SelectorTiming | None = None,
    ) -> None:
        self.timing = timing or SelectorTiming()
        self.preview = PreviewCoordinator(self.timing.preview_timeout)
        self.state = SelectorState()
        try:
            profiles = tuple(list_profiles())
        except SelectorError as exc:
            self._fail(exc)
            return
        except OSError as exc:
            self._fail(ConfigurationError(f"cannot read AWS profiles: {exc}"))
            return
        if not profiles:
            self._fail(ConfigurationError("no AWS profiles found"))
            return
        self.state.profiles = profiles
        self.state.filtered = list(profiles)

    def selection(self) -> Selection | None:
        state = self.state
        if state.stage is not Stage.DONE or state.error is not None:
            return None
        return Selection(state.selected_profile, state.selected_region, state.selected_instance)

    def update(self, event: Event) -> list[Command]:
        if isinstance(event, KeyPressed):
            return self._handle_key(event.key)
        if isinstance(event, RegionsLoaded):
            return self._handle_list_loaded(Stage.PROFILE, Stage.REGION, event.regions, event.error)
        if isinstance(event, InstancesLoaded):
            return self._handle_list_loaded(Stage.REGION, Stage.INSTANCE, event.instances, event.error)
        if isinstance(event, PreviewLoaded):
            self.preview.apply(event)
            self._sync_preview()
            return []
        if isinstance(event, Tick):
            return self._handle_tick()
        raise TypeError(f"unsupported event: {event!r}")

    def _fail(self, error: SelectorError) -> list[Command]:
        logger.error("selector failed: %s", error)
        self.state.error = error
        self.state.loading = False
        return [Quit()]

    def _sync_preview(self) -> None:
        self.state.preview = self.preview.state

    def _start_ticking(self) -> list[Command]:
        if self.state.tick_pending:
            return []
        self.state.tick_pending = True
        return [ScheduleTick(self.timing.tick_interval)]

    def _handle_tick(self) -> list[Command]:
        state = self.state
        state.tick_pending = False
        state.spinner_frame = (state.spinner_frame + 1) % len(SPINNER_FRAMES)
        if state.loading and not state.finished:
            return self._start_ticking()
        return []

    def _handle_key(self, key: str) -> list[Command]:
        state = self.state
        if key in QUIT_KEYS:
            return [Quit()]
        if state.loading or state.finished:
            return []

        if key == "UP" or (key == "k" and not state.query):
            self._move_cursor(-1)
        elif key == "DOWN" or (key == "j" and not state.query):
            self._move_cursor(1)
        elif key == "ENTER":
            return self._confirm()
        elif key == "BACKSPACE":
            state.query = state.query[:-1]
        elif len(key) == 1 and 32 <= ord(key) <= 126:
            state.query += key

        self._refilter()
        return self._retarget_preview()

    def _move_cursor(self, delta: int) -> None:
        state = self.state
        state.cursor = max(0, min(state.cursor + delta, len(state.filtered) - 1))

    def _refilter(self) -> None:
        state = self.state
        state.filtered = filter_items(state.stage_items(), state.query)
        if not state.filtered:
            state.cursor = 0
        else:
            state.cursor = max(0, min(state.cursor, len(state.filtered) - 1))

    def _retarget_preview(self) -> list[Command]:
        state = self.state
        if state.stage is not Stage.INSTANCE:
            return []
        command = self.preview.retarget(
            state.highlighted(), state.selected_profile, state.selected_region
        )
        self._sync_preview()
        return [command] if command is not None else []

    def _confirm(self) -> list[Command]:
        state = self.state
        highlighted = state.highlighted()
        if state.stage is Stage.PROFILE:
            if highlighted is None:
                return self._fail(EmptySelectionError("no AWS profiles found"))
            state.selected_profile = highlighted
            state.loading = True
            logger.info("profile selected: %s", highlighted)
            return [FetchRegions(highlighted, self.timing.list_timeout), *self._start_ticking()]
        if state.stage is Stage.REGION:
            if highlighted is None:
                return self._fail(EmptySelectionError("no regions found"))
            state.selected_region = highlighted
            state.loading = True
            logger.info("region selected: %s", highlighted)
            return [
                FetchInstances(state.selected_profile, highlighted, self.timing.list_timeout),
                *self._start_ticking(),
            ]
        if state.stage is Stage.INSTANCE:
            if highlighted is None:
                return self._fail(EmptySelectionError("no instances found"))
            state.selected_instance = extract_instance_id(highlighted)
            state.stage = Stage.DONE
            logger.info("instance selected: %s", state.selected_instance)
            return [Quit()]
        return []

    def _handle_list_loaded(
        self,
        expected: Stage,
        next_stage: Stage,
        items: Sequence[str],
        error: SelectorError | None,
    ) -> list[Command]:
        state = self.state
        if state.stage is not expected or not state.loading:
            logger.debug("ignoring %s list outside its loading window", next_stage.value)
            return []
        state.loading = False
        if error is not None:
            return self._fail(error)

        if next_stage is Stage.REGION:
            state.regions = tuple(items)
        else:
            state.instances = tuple(items)
        state.stage = next_stage
        state.query = ""
        state.cursor = 0
        state.filtered = list(items)
        logger.info("%s stage loaded %d entries", next_stage.value, len(state.filtered))
        return self._retarget_preview()


__all__ = [
    "SPINNER_FRAMES",
    "QUIT_KEYS",
    "Stage",
    "SelectorTiming",
    "Selection",
    "SelectorState",
    "Navigator",
]
