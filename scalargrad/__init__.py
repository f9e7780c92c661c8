"""
scalargrad: a scalar reverse-mode automatic differentiation engine.

Expressions built from Value objects are recorded as a graph; calling
backward() on the output fills in the gradient of every node that
contributed to it.
"""

from scalargrad.engine import Value, add, backward, div, mul, neg, power, relu, sub
from scalargrad import nn
from scalargrad.utils import draw_dot, trace

__version__ = "0.1.0"
__all__ = [
    "Value",
    "add",
    "backward",
    "div",
    "mul",
    "neg",
    "power",
    "relu",
    "sub",
    "nn",
    "draw_dot",
    "trace",
]
