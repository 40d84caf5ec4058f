"""
Pushflow Operations - Implicit Node Construction From Expressions
=================================================================

Applying an operator to a node doesn't compute anything by itself: it builds
a new node that follows the receiver and every operand, and whose recompute
function re-applies the same operator to their current values.

    origin = TimeVaryingValue.starting_with(8)
    follower = origin + 1          # follows (origin, 1)
    origin.change_to(33)
    follower.current               # 34

Node operands contribute their live value on every recompute. Plain operands
are captured when the expression is built; rebinding the variable that held
them later has no effect on the derived node.

The supported vocabulary is fixed:

- ``derive(fn, *operands)`` for arbitrary functions
- ``call_method(name, *operands)`` for method-style calls on the value
- arithmetic, bitwise, comparison and unary operators, plus ``node[key]``

``==``, ``!=`` and hashing keep identity semantics, since nodes are stored in
each other's edge lists.
"""

import operator
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .node import Node


def _reflected(op: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    def apply(value: Any, other: Any) -> Any:
        return op(other, value)

    apply.__name__ = f"r{op.__name__}"
    return apply


def _method_caller(name: str) -> Callable[..., Any]:
    def call(receiver: Any, *args: Any) -> Any:
        return getattr(receiver, name)(*args)

    call.__name__ = name
    return call


class OperatorMixin:
    """
    Operator overloading that builds derived nodes.

    Classes using this mixin implement ``_derive(fn, *operands)``, returning a
    new object of their own kind that follows ``(self, *operands)``.
    """

    __slots__ = ()

    def _derive(self, fn: Callable[..., Any], *operands: Any) -> Any:
        raise NotImplementedError

    def derive(self, fn: Callable[..., Any], *operands: Any) -> Any:
        """Follow ``self`` and ``operands``, recomputing with ``fn(self, *operands)``."""
        return self._derive(fn, *operands)

    def call_method(self, name: str, *operands: Any) -> Any:
        """Follow ``self`` and ``operands``, recomputing with ``self.<name>(*operands)``."""
        return self._derive(_method_caller(name), *operands)

    # Arithmetic

    def __add__(self, other: Any) -> Any:
        return self._derive(operator.add, other)

    def __radd__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.add), other)

    def __sub__(self, other: Any) -> Any:
        return self._derive(operator.sub, other)

    def __rsub__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.sub), other)

    def __mul__(self, other: Any) -> Any:
        return self._derive(operator.mul, other)

    def __rmul__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.mul), other)

    def __truediv__(self, other: Any) -> Any:
        return self._derive(operator.truediv, other)

    def __rtruediv__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.truediv), other)

    def __floordiv__(self, other: Any) -> Any:
        return self._derive(operator.floordiv, other)

    def __rfloordiv__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.floordiv), other)

    def __mod__(self, other: Any) -> Any:
        return self._derive(operator.mod, other)

    def __rmod__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.mod), other)

    def __pow__(self, other: Any) -> Any:
        return self._derive(operator.pow, other)

    def __rpow__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.pow), other)

    def __matmul__(self, other: Any) -> Any:
        return self._derive(operator.matmul, other)

    def __rmatmul__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.matmul), other)

    # Bitwise

    def __and__(self, other: Any) -> Any:
        return self._derive(operator.and_, other)

    def __rand__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.and_), other)

    def __or__(self, other: Any) -> Any:
        return self._derive(operator.or_, other)

    def __ror__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.or_), other)

    def __xor__(self, other: Any) -> Any:
        return self._derive(operator.xor, other)

    def __rxor__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.xor), other)

    def __lshift__(self, other: Any) -> Any:
        return self._derive(operator.lshift, other)

    def __rlshift__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.lshift), other)

    def __rshift__(self, other: Any) -> Any:
        return self._derive(operator.rshift, other)

    def __rrshift__(self, other: Any) -> Any:
        return self._derive(_reflected(operator.rshift), other)

    # Comparison

    def __lt__(self, other: Any) -> Any:
        return self._derive(operator.lt, other)

    def __le__(self, other: Any) -> Any:
        return self._derive(operator.le, other)

    def __gt__(self, other: Any) -> Any:
        return self._derive(operator.gt, other)

    def __ge__(self, other: Any) -> Any:
        return self._derive(operator.ge, other)

    # Unary

    def __neg__(self) -> Any:
        return self._derive(operator.neg)

    def __pos__(self) -> Any:
        return self._derive(operator.pos)

    def __abs__(self) -> Any:
        return self._derive(operator.abs)

    def __invert__(self) -> Any:
        return self._derive(operator.invert)

    # Containers

    def __getitem__(self, key: Any) -> Any:
        return self._derive(operator.getitem, key)

    def __iter__(self):
        # __getitem__ would otherwise make every node an endless sequence
        raise TypeError(
            f"{type(self).__name__} is not iterable; use derive() to transform its value"
        )


def derive(fn: Callable[..., Any], *operands: Any) -> "Node":
    """
    Build a deferred node from any mix of nodes, views and plain values.

    Example:
        >>> from pushflow import Node
        >>> a = Node.follows(fn=lambda: 0)
        >>> total = derive(lambda x, y: x + y, a, 10)
        >>> a.set_value(5)
        >>> total.value
        15
    """
    from .node import Node

    return Node(*operands, fn=fn)
