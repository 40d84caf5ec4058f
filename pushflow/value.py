"""
Pushflow Value Container - The "No Value Yet" Marker
====================================================

A node's value is either a concrete payload of any type (``None`` included) or
the dedicated ``NO_VALUE`` marker meaning nothing has been computed or written
yet. ``NO_VALUE`` is the only instance of ``NoValue``, so identity checks are
always safe.
"""

from typing import Any

# ============================================================================
# SENTINEL
# ============================================================================


class NoValue:
    """Marker type for a node that has not been computed or written yet."""

    __slots__ = ()

    _instance = None

    def __new__(cls) -> "NoValue":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __reduce__(self) -> str:
        return "NO_VALUE"

    def __copy__(self) -> "NoValue":
        return self

    def __deepcopy__(self, memo: dict) -> "NoValue":
        return self


NO_VALUE = NoValue()


def has_value(value: Any) -> bool:
    """True when ``value`` is a real payload rather than ``NO_VALUE``."""
    return value is not NO_VALUE
