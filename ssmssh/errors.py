"""Error taxonomy for the selector and its inventory collaborators.

Fatal errors end the run with the error view; preview lookup failures are
absorbed into the "no tags" panel state by the preview coordinator.
"""

from __future__ import annotations


class SelectorError(Exception):
    """Base class for every error the selector surfaces to the operator."""


class ConfigurationError(SelectorError):
    """No AWS profiles could be discovered from local configuration."""


class InventoryLookupError(SelectorError):
    """A region, instance, or tag lookup failed."""


class LookupTimeoutError(InventoryLookupError, TimeoutError):
    """A lookup did not finish before its deadline."""


class EmptySelectionError(SelectorError):
    """Confirm was pressed while the filtered list had no candidates."""


class SessionError(SelectorError):
    """The session hand-off command could not be run or exited non-zero."""


__all__ = [
    "SelectorError",
    "ConfigurationError",
    "InventoryLookupError",
    "LookupTimeoutError",
    "EmptySelectionError",
    "SessionError",
]
