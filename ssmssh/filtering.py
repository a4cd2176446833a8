"""List narrowing and host-entry helpers shared by navigator and renderer."""

from __future__ import annotations

from collections.abc import Sequence


def filter_items(items: Sequence[str], query: str) -> list[str]:
    """Return ``items`` whose text contains ``query``, ignoring case.

    An empty query keeps every item. Relative order always follows ``items``.
    """
    if not query:
        return list(items)
    folded_query = query.lower()
    return [item for item in items if folded_query in item.lower()]


def extract_instance_id(entry: str) -> str:
    """Return the canonical instance id from an ``"<id> (<name>)"`` entry."""
    return entry.split(" ", 1)[0]


def format_instance_entry(instance_id: str, name: str = "") -> str:
    """Build the display entry for one instance."""
    if name:
        return f"{instance_id} ({name})"
    return instance_id


__all__ = ["filter_items", "extract_instance_id", "format_instance_entry"]
