"""Selector runtime: messages, dispatcher, navigator, preview, and event loop.

``run_selector`` lives in ``ssmssh.runtime.app`` because it pulls in rendering.
"""

from .dispatcher import TaskDispatcher
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, execute_command, run_event_loop
from .navigator import Navigator, Selection, SelectorState, SelectorTiming, Stage
from .preview import PreviewCoordinator, PreviewState

__all__ = [
    "TaskDispatcher",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "execute_command",
    "run_event_loop",
    "Navigator",
    "Selection",
    "SelectorState",
    "SelectorTiming",
    "Stage",
    "PreviewCoordinator",
    "PreviewState",
]
