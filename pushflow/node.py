"""
Pushflow Node - The Propagation Engine
======================================

A ``Node`` holds a value, a fixed ordered list of upstream producers, an
append-only list of downstream dependents, a recompute function and a single
change hook.

Propagation is push-based and synchronous:

1. ``propagate(v)`` stores ``v``
2. calls the change hook with ``v``
3. calls ``recompute()`` on every downstream node, in registration order

The walk is depth-first with no deduplication and no topological ordering.
In a diamond (A -> B -> D and A -> C -> D) a change to A recomputes D twice:
once right after B updates, while C still holds its old value (a glitch),
and again after C updates. D's hook sees both values.

Edges only appear at construction time: a node registers itself as a
dependent of each upstream ``Node``. Plain (non-node) producers are captured
as they are and never notify anyone.

Example:
    >>> origin = Node.follows(fn=lambda: 0)
    >>> doubled = Node.follows(origin, fn=lambda o: o * 2)
    >>> origin.set_value(21)
    >>> doubled.value
    42
"""

import logging
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

from .errors import InvalidConstructionError
from .operations import OperatorMixin
from .value import NO_VALUE

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _identity(value: Any) -> Any:
    return value


def _ignore(value: Any) -> None:
    return None


def _resolve_producer(producer: Any) -> Any:
    """Unwrap views (anything exposing ``__pushflow_node__``) to their node."""
    hook = getattr(type(producer), "__pushflow_node__", None)
    if hook is None:
        return producer
    return hook(producer)


class Node(OperatorMixin, Generic[T]):
    """
    A unit of the dataflow graph.

    Args:
        *upstream: Producers, in order. ``Node`` producers contribute their
            current value at each recompute; anything else is captured once.
        fn: Recompute function taking one argument per producer. Defaults to
            identity, which needs exactly one producer.
        eager: Recompute once at the end of construction.
        key: Name used in ``repr`` and log messages.

    Raises:
        InvalidConstructionError: ``fn`` is omitted with zero or several
            producers, or is not callable. Nothing is registered in that case.

    Edges are registered before an eager node's first recompute. If ``fn``
    raises there, the exception escapes the constructor but the node stays in
    its producers' dependents and is recomputed on their next change.
    """

    __slots__ = ("_key", "_value", "_upstream", "_downstream", "_fn", "_hook", "_eager")

    def __init__(
        self,
        *upstream: Any,
        fn: Optional[Callable[..., T]] = None,
        eager: bool = False,
        key: Optional[str] = None,
    ) -> None:
        producers = tuple(_resolve_producer(p) for p in upstream)

        if fn is None:
            if len(producers) != 1:
                raise InvalidConstructionError(
                    f"A node without a recompute function must follow exactly one "
                    f"producer, got {len(producers)}"
                )
            fn = _identity
        elif not callable(fn):
            raise InvalidConstructionError(
                f"Recompute function must be callable, got {type(fn).__name__}"
            )

        self._key = key or "<unnamed>"
        self._value: Any = NO_VALUE
        self._upstream: Tuple[Any, ...] = producers
        self._downstream: List["Node"] = []
        self._fn = fn
        self._hook: Callable[[Any], Any] = _ignore
        self._eager = eager

        for producer in producers:
            if isinstance(producer, Node):
                producer._add_dependent(self)

        logger.debug(
            "Created %r following %d producer(s)%s",
            self,
            len(producers),
            " (eager)" if eager else "",
        )

        if eager:
            self.recompute()

    @classmethod
    def follows(
        cls,
        *upstream: Any,
        fn: Optional[Callable[..., T]] = None,
        key: Optional[str] = None,
    ) -> "Node[T]":
        """Build a deferred node; nothing is computed until something triggers it."""
        return cls(*upstream, fn=fn, key=key)

    # ========================================================================
    # READ / WRITE
    # ========================================================================

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> Any:
        """Current value, or ``NO_VALUE`` if never computed or written."""
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set_value(new_value)

    @property
    def has_value(self) -> bool:
        return self._value is not NO_VALUE

    @property
    def eager(self) -> bool:
        return self._eager

    @property
    def upstream(self) -> Tuple[Any, ...]:
        return self._upstream

    @property
    def downstream(self) -> Tuple["Node", ...]:
        return tuple(self._downstream)

    def set_value(self, new_value: T) -> None:
        """Write a value from outside the graph, bypassing the recompute function."""
        self.propagate(new_value)

    def on_change(self, callback: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """
        Replace the change hook.

        There is a single hook per node; registering a new one discards the
        previous one. Returns ``callback`` so this works as a decorator.

        Raises:
            InvalidConstructionError: ``callback`` is not callable.
        """
        if not callable(callback):
            raise InvalidConstructionError(
                f"Change hook must be callable, got {type(callback).__name__}"
            )
        self._hook = callback
        return callback

    # ========================================================================
    # PROPAGATION
    # ========================================================================

    def recompute(self) -> None:
        """Apply the recompute function to the producers' current values and propagate."""
        self.propagate(self._fn(*self._current_inputs()))

    def propagate(self, new_value: T) -> None:
        """
        Store ``new_value``, fire the hook, then recompute each dependent.

        An exception from the hook or from any dependent's recompute function
        escapes immediately; dependents not yet visited keep their old values.
        """
        self._value = new_value
        logger.debug(
            "%s <- %r, notifying %d dependent(s)",
            self._key,
            new_value,
            len(self._downstream),
        )
        self._hook(new_value)
        for dependent in self._downstream:
            dependent.recompute()

    def _current_inputs(self) -> List[Any]:
        return [p._value if isinstance(p, Node) else p for p in self._upstream]

    def _add_dependent(self, node: "Node") -> None:
        self._downstream.append(node)

    # ========================================================================
    # DERIVATION
    # ========================================================================

    def _derive(self, fn: Callable[..., Any], *operands: Any) -> "Node":
        return type(self)(self, *operands, fn=fn, eager=self._eager)

    def __repr__(self) -> str:
        return (
            f"Node({self._key!r}, {self._value!r}, "
            f"upstream={len(self._upstream)}, downstream={len(self._downstream)})"
        )
