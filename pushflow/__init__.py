"""
Pushflow - Push-Based Dataflow Values
=====================================

Nodes wired into a dependency graph, where changing one value synchronously
recomputes everything that depends on it.

Two ways to look at the same engine:

- ``TimeVaryingValue``: a value that exists at all times and changes
- ``DiscreteValueStream``: a stream of values that arrive one at a time

Operators on either build new derived values:

    >>> price = TimeVaryingValue.starting_with(10)
    >>> with_tax = price * 1.2
    >>> price.change_to(20)
    >>> with_tax.current
    24.0

Propagation is depth-first and makes no glitch-freedom promise: a value that
depends on the same source through two paths recomputes once per path.
"""

import logging

from .errors import InvalidConstructionError, ManualStreamError, PushflowError
from .node import Node
from .operations import OperatorMixin, derive
from .value import NO_VALUE, NoValue, has_value
from .views import DiscreteValueStream, NodeView, TimeVaryingValue

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Views
    "TimeVaryingValue",
    "DiscreteValueStream",
    "NodeView",
    # Engine
    "Node",
    "OperatorMixin",
    "derive",
    # Sentinel
    "NO_VALUE",
    "NoValue",
    "has_value",
    # Exceptions
    "PushflowError",
    "ManualStreamError",
    "InvalidConstructionError",
]
