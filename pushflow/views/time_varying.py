"""
TimeVaryingValue - A Value That Exists At All Times
===================================================

A time-varying value changes in one of three ways:

- explicitly, via ``change_to``
- by following other values, recomputing whenever one of them changes
- by tracking a ``DiscreteValueStream``, adopting each value added to it

Unlike a bare node, a time-varying value computes as soon as it is built, so
it reflects its upstreams' current values immediately:

    >>> origin = TimeVaryingValue.starting_with(5)
    >>> follower = origin + 1
    >>> follower.current
    6
    >>> origin.change_to(700)
    >>> follower.current
    701
"""

from typing import Any, Callable, Optional, TypeVar

from ..errors import InvalidConstructionError
from .base import NodeView
from .stream import DiscreteValueStream

T = TypeVar("T")


class TimeVaryingValue(NodeView[T]):
    __slots__ = ()

    _eager = True

    @classmethod
    def starting_with(cls, initial_value: T, key: Optional[str] = None) -> "TimeVaryingValue[T]":
        """
        Create a value that follows nothing.

        Only ``change_to`` can change it afterwards.
        """
        return cls.follows(fn=lambda: initial_value, key=key)

    @classmethod
    def follows(
        cls,
        *upstream: Any,
        fn: Optional[Callable[..., T]] = None,
        key: Optional[str] = None,
    ) -> "TimeVaryingValue[T]":
        """
        Create a value that recomputes whenever a followed value changes.

        ``fn`` receives the current values of ``upstream`` in order. Without
        ``fn`` there must be exactly one upstream, and its value is adopted
        as is.

        Example:
            >>> verb = TimeVaryingValue.starting_with("vote")
            >>> adverb = TimeVaryingValue.starting_with("early")
            >>> slogan = TimeVaryingValue.follows(verb, adverb, fn=lambda v, a: f"{v} {a}!")
            >>> adverb.change_to("often")
            >>> slogan.current
            'vote often!'
        """
        return super().follows(*upstream, fn=fn, key=key)

    @classmethod
    def tracks_stream(
        cls,
        stream: DiscreteValueStream,
        initial_value: T,
        key: Optional[str] = None,
    ) -> "TimeVaryingValue[T]":
        """
        Create a value that adopts each value added to ``stream``.

        It starts at ``initial_value`` even if the stream already holds values.
        """
        if not isinstance(stream, DiscreteValueStream):
            raise InvalidConstructionError(
                f"tracks_stream needs a DiscreteValueStream, got {type(stream).__name__}"
            )
        tracker = cls.follows(stream, key=key)
        tracker.change_to(initial_value)
        return tracker

    @property
    def current(self) -> Any:
        """The current value. Earlier values are not kept."""
        return self._node.value

    def change_to(self, new_value: T) -> None:
        self._node.set_value(new_value)

    def on_change(self, callback: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """Call ``callback`` with every new value, replacing any previous callback."""
        return self._node.on_change(callback)
