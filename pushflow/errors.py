"""Pushflow error hierarchy.

Errors raised by user recompute functions and change hooks are never wrapped;
only misuse detected by the engine itself raises these.
"""


class PushflowError(Exception):
    """Base error for all pushflow operations."""


class ManualStreamError(PushflowError, RuntimeError):
    """Recomputation was attempted on a stream that only accepts explicit values."""


class InvalidConstructionError(PushflowError, TypeError):
    """A node was built with producers and a recompute function that don't fit."""
