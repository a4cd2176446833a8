"""Background task dispatcher feeding results back to the event loop.

Each submitted operation runs on its own daemon thread and races a deadline.
Exactly one message per submission lands in the inbox; a result that arrives
after its deadline is left in an abandoned one-slot queue and never delivered.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from queue import Empty, Queue
from typing import Any

from ..errors import InventoryLookupError, LookupTimeoutError, SelectorError

logger = logging.getLogger(__name__)

WrapResult = Callable[[Any, SelectorError | None], object]


def _as_selector_error(exc: BaseException, label: str) -> SelectorError:
    if isinstance(exc, SelectorError):
        return exc
    return InventoryLookupError(f"{label}: {exc}")


class TaskDispatcher:
    """Thread-per-task dispatcher with a single inbox for the loop thread."""

    def __init__(self) -> None:
        self._inbox: Queue[object] = Queue()
        self._lock = threading.Lock()
        self._timers: set[threading.Timer] = set()
        self._closed = False

    def _post(self, message: object) -> None:
        with self._lock:
            if self._closed:
                return
        self._inbox.put(message)

    def submit(
        self,
        operation: Callable[[], Any],
        timeout: float,
        wrap: WrapResult,
        *,
        label: str = "lookup",
    ) -> None:
        """Run ``operation`` off-thread; post ``wrap(payload, error)`` exactly once."""
        slot: Queue[tuple[Any, BaseException | None]] = Queue(maxsize=1)

        def worker() -> None:
            try:
                payload = operation()
            except Exception as exc:
                slot.put((None, exc))
                return
            slot.put((payload, None))

        def supervisor() -> None:
            try:
                payload, exc = slot.get(timeout=max(0.0, timeout))
            except Empty:
                logger.warning("%s timed out after %.1fs", label, timeout)
                self._post(wrap(None, LookupTimeoutError(f"timeout loading {label}")))
                return
            if exc is not None:
                logger.warning("%s failed: %s", label, exc)
                self._post(wrap(None, _as_selector_error(exc, label)))
                return
            self._post(wrap(payload, None))

        logger.debug("dispatching %s (deadline %.1fs)", label, timeout)
        threading.Thread(target=worker, name=f"ssmssh-{label}", daemon=True).start()
        threading.Thread(target=supervisor, name=f"ssmssh-{label}-deadline", daemon=True).start()

    def schedule(self, delay: float, message: object) -> None:
        """Post ``message`` after ``delay`` seconds."""
        timer: threading.Timer

        def fire() -> None:
            with self._lock:
                self._timers.discard(timer)
            self._post(message)

        timer = threading.Timer(max(0.0, delay), fire)
        timer.daemon = True
        with self._lock:
            if self._closed:
                return
            self._timers.add(timer)
        timer.start()

    def drain(self) -> list[object]:
        """Return every delivered message in arrival order without blocking."""
        out: list[object] = []
        while True:
            try:
                out.append(self._inbox.get_nowait())
            except Empty:
                break
        return out

    def wait(self, timeout: float | None = None) -> object | None:
        """Block for the next delivered message, or ``None`` on timeout."""
        try:
            return self._inbox.get(timeout=timeout)
        except Empty:
            return None

    def shutdown(self) -> None:
        """Cancel pending timers and drop any later deliveries."""
        with self._lock:
            self._closed = True
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()


__all__ = ["TaskDispatcher"]
