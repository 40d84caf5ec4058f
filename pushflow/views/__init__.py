"""
Pushflow Views
==============

Two names for the same engine:

- ``TimeVaryingValue`` computes at construction and always has a value
- ``DiscreteValueStream`` stays empty until a value arrives
"""

from .base import NodeView
from .stream import DiscreteValueStream
from .time_varying import TimeVaryingValue

__all__ = ["NodeView", "DiscreteValueStream", "TimeVaryingValue"]
