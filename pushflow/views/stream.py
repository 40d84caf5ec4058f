"""
DiscreteValueStream - Values That Arrive
========================================

A stream receives values either explicitly (``add_value``) or in reaction to
the streams it follows. Only the most recent value is kept.

Streams don't compute at construction: a derived stream stays empty until one
of its upstreams receives a value.

    >>> origin = DiscreteValueStream.manual()
    >>> follower = origin + 1
    >>> follower.is_empty
    True
    >>> origin.add_value(5)
    >>> follower.most_recent_value
    6
"""

import logging
from typing import Any, Callable, Optional, TypeVar

from ..errors import ManualStreamError
from ..value import NO_VALUE
from .base import NodeView

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DiscreteValueStream(NodeView[T]):
    __slots__ = ()

    _eager = False

    @classmethod
    def manual(cls, key: Optional[str] = None) -> "DiscreteValueStream[T]":
        """
        Create an empty stream fed only by ``add_value``.

        Its recompute path always raises ``ManualStreamError``.
        """
        name = key or "<manual>"

        def refuse_recompute() -> Any:
            logger.debug("Recompute attempted on manual stream %s", name)
            raise ManualStreamError(
                f"Manual stream {name!r} only accepts values through add_value()"
            )

        return cls.follows(fn=refuse_recompute, key=name)

    @classmethod
    def follows(
        cls,
        *upstream: Any,
        fn: Optional[Callable[..., T]] = None,
        key: Optional[str] = None,
    ) -> "DiscreteValueStream[T]":
        """
        Create a stream that reacts to values added to ``upstream``.

        ``fn`` receives the most recent value of each upstream and its result
        is added to this stream. Without ``fn`` there must be exactly one
        upstream, whose values are passed through unchanged.
        """
        return super().follows(*upstream, fn=fn, key=key)

    @property
    def most_recent_value(self) -> Any:
        """The last value added, or ``NO_VALUE`` for an empty stream."""
        return self._node.value

    @property
    def is_empty(self) -> bool:
        """True if no value has ever been added."""
        return self._node.value is NO_VALUE

    def add_value(self, new_value: T) -> None:
        self._node.set_value(new_value)

    def on_addition(self, callback: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """
        Call ``callback`` with each value added to the stream.

        This is the way out to non-reactive code, e.g. updating a widget.
        Replaces any previously registered callback.
        """
        return self._node.on_change(callback)
