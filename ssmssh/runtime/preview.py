"""Tag preview tracking for the highlighted instance.

Every highlight change retargets the preview and asks for a fresh tag fetch.
Results are applied only when they still belong to the current target, so
out-of-order completions from superseded fetches are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..filtering import extract_instance_id
from ..inventory import Tag
from .messages import FetchPreview, PreviewLoaded

logger = logging.getLogger(__name__)


@dataclass
class PreviewState:
    target_id: str = ""
    tags: list[Tag] = field(default_factory=list)
    loading: bool = False
    fetched: bool = False
    error: str = ""


class PreviewCoordinator:
    """Own ``PreviewState`` and decide when a tag fetch is needed."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        self.state = PreviewState()

    def clear(self) -> None:
        """Show the empty-selection panel; in-flight results become stale."""
        self.state = PreviewState()

    def retarget(self, entry: str | None, profile: str, region: str) -> FetchPreview | None:
        """Point the preview at ``entry`` and return the fetch to dispatch, if any.

        A fetch is skipped only when the target id is unchanged and a fetch for
        it is already in flight or has completed successfully.
        """
        if entry is None:
            self.clear()
            return None
        instance_id = extract_instance_id(entry)
        state = self.state
        if instance_id == state.target_id and (state.loading or state.fetched):
            return None
        self.state = PreviewState(target_id=instance_id, loading=True)
        return FetchPreview(
            profile=profile,
            region=region,
            instance_id=instance_id,
            timeout=self.timeout,
        )

    def apply(self, result: PreviewLoaded) -> bool:
        """Apply ``result`` if it matches the current target; return whether it did."""
        state = self.state
        if result.instance_id != state.target_id:
            logger.debug(
                "dropping stale preview for %s (current %s)",
                result.instance_id,
                state.target_id or "<none>",
            )
            return False
        if result.error is not None:
            logger.info("no tags for %s: %s", result.instance_id, result.error)
            self.state = PreviewState(
                target_id=state.target_id,
                tags=[],
                loading=False,
                fetched=False,
                error=str(result.error),
            )
            return True
        self.state = PreviewState(
            target_id=state.target_id,
            tags=list(result.tags),
            loading=False,
            fetched=True,
        )
        return True


__all__ = ["PreviewState", "PreviewCoordinator"]
