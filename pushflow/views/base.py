"""
Pushflow Views - Shared Plumbing
================================

A view wraps exactly one ``Node`` and renames its vocabulary. Views never add
propagation behavior: the only thing that differs between them is whether
their nodes compute at construction time (``_eager``).
"""

from typing import Any, Callable, Generic, Optional, TypeVar

from ..node import Node
from ..operations import OperatorMixin

T = TypeVar("T")


class NodeView(OperatorMixin, Generic[T]):
    """Base for the two view types. Subclasses set ``_eager`` and add names."""

    __slots__ = ("_node",)

    _eager = False

    def __init__(self, node: Node) -> None:
        self._node = node

    @classmethod
    def follows(
        cls,
        *upstream: Any,
        fn: Optional[Callable[..., T]] = None,
        key: Optional[str] = None,
    ):
        """Follow ``upstream`` (nodes, views or plain values), recomputing with ``fn``."""
        return cls(Node(*upstream, fn=fn, eager=cls._eager, key=key))

    @property
    def node(self) -> Node:
        """The underlying node, for code that works on the graph directly."""
        return self._node

    def __pushflow_node__(self) -> Node:
        return self._node

    def _derive(self, fn: Callable[..., Any], *operands: Any):
        return type(self).follows(self, *operands, fn=fn)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._node.key!r}, {self._node.value!r})"
