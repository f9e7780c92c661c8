import numbers
import uuid

import numpy as np


def _power(base, exponent):
    """IEEE-754 power: 0 ** -1 is inf and (-8) ** 0.5 is nan, never an exception."""
    with np.errstate(all='ignore'):
        return float(np.power(np.float64(base), np.float64(exponent)))


class Value:
    """
    Wraps a scalar and tracks operations for automatic differentiation.

    The Value class is the core of the autograd engine. It stores a float and its
    gradient, and builds a computational graph by recording the operands of every
    operation between Values.

    Two Values are equal only if they are the same graph node: equality and hashing
    use the ``uuid`` identity token, never ``data`` or ``grad``.

    Example:
        >>> x = Value(2.0)
        >>> y = Value(3.0)
        >>> z = x * y + x
        >>> z.backward()  # Compute gradients
        >>> print(x.grad)  # dz/dx = y + 1 = 4.0
    """

    def __init__(self, data, _children=(), _op='', name=""):
        """
        Initialize a Value object.

        Args:
            data: The numerical data (int or float)
            _children: Ordered tuple of operand Values (internal use for autograd)
            _op: Tag of the operation that created this Value (internal)
            name: Optional name for debugging and visualization
        """
        if not isinstance(data, numbers.Real):
            raise TypeError(f"Value only accepts real scalars, got {type(data).__name__}")

        self.data = float(data)
        self.grad = 0.0
        self.name = name
        self.uuid = uuid.uuid4()

        # Internal variables for building the computational graph
        self._backward = lambda: None  # Local gradient rule
        self._prev = tuple(_children)   # Operands, in order
        self._op = _op                  # Operation that created this node

    def __hash__(self):
        return hash(self.uuid)

    def __eq__(self, other):
        return isinstance(other, Value) and self.uuid == other.uuid

    def __add__(self, other):
        """
        Addition: d(a+b)/da = 1, d(a+b)/db = 1

        Example:
            >>> c = Value(1.0) + 2  # c.data = 3.0
        """
        other = _as_value(other)
        if other is NotImplemented:
            return other

        out = Value(self.data + other.data, (self, other), '+')

        def _backward():
            self.grad += out.grad
            other.grad += out.grad

        out._backward = _backward
        return out

    def __mul__(self, other):
        """
        Multiplication: d(a*b)/da = b, d(a*b)/db = a

        Example:
            >>> c = Value(3.0) * Value(4.0)  # c.data = 12.0
        """
        other = _as_value(other)
        if other is NotImplemented:
            return other

        out = Value(self.data * other.data, (self, other), '*')

        def _backward():
            self.grad += other.data * out.grad
            other.grad += self.data * out.grad

        out._backward = _backward
        return out

    def __pow__(self, other):
        """
        Power operation: raises Value to a constant exponent.

        The exponent is kept as the second operand so it shows up in exported
        graphs, but it is never differentiated: its grad stays 0.

        Example:
            >>> x = Value(3.0)
            >>> y = x ** 2  # y.data = 9.0
        """
        other = _as_value(other)
        if other is NotImplemented:
            return other

        out = Value(_power(self.data, other.data), (self, other), '**')

        def _backward():
            """Power rule: d(x^p)/dx = p * x^(p-1)"""
            p = other.data
            with np.errstate(all='ignore'):
                self.grad += float(p * np.power(np.float64(self.data), p - 1) * out.grad)

        out._backward = _backward
        return out

    def relu(self):
        """
        ReLU activation: max(x, 0)

        Example:
            >>> Value(-1.5).relu().data
            0.0
        """
        out = Value(self.data if self.data > 0 else 0.0, (self,), 'ReLU')

        def _backward():
            # Gradient only flows where the input was positive
            self.grad += out.grad if out.data > 0 else 0.0

        out._backward = _backward
        return out

    def topological_order(self):
        """
        Return every node reachable from this one, each exactly once, operands
        before the nodes that consume them.

        This is a depth-first post-order over ``_prev`` with a visited set keyed by
        node identity, written with an explicit stack so deep graphs do not hit the
        recursion limit. The graph must be acyclic, which the operators guarantee.
        """
        topo = []
        visited = set()
        stack = [(self, False)]
        while stack:
            v, expanded = stack.pop()
            if expanded:
                topo.append(v)
                continue
            if v in visited:
                continue
            visited.add(v)
            stack.append((v, True))
            for child in reversed(v._prev):
                if child not in visited:
                    stack.append((child, False))
        return topo

    def backward(self):
        """
        Perform backpropagation: compute gradients for all Values in the graph.

        Seeds this node's gradient with 1 (dL/dL = 1) and runs every local gradient
        rule once, in reverse topological order, so a node's rule only fires after
        all of its consumers have added their contributions.

        Gradients accumulate: calling backward twice without zeroing adds to the
        existing values.

        Example:
            >>> x = Value(2.0)
            >>> y = x * 3 + 1
            >>> y.backward()
            >>> print(x.grad)  # dy/dx = 3.0
        """
        topo = self.topological_order()

        self.grad = 1.0

        for v in reversed(topo):
            v._backward()

    def zero_grad(self):
        """Reset this node's gradient accumulator."""
        self.grad = 0.0

    # Derived operations (built from the primitives above)

    def __neg__(self):
        """Negation: -x = x * -1"""
        return self * -1

    def __radd__(self, other):
        """Right addition: other + self (when other is not a Value)"""
        return self + other

    def __sub__(self, other):
        """Subtraction: a - b = a + (-b)"""
        other = _as_value(other)
        if other is NotImplemented:
            return other
        return self + (-other)

    def __rsub__(self, other):
        """Right subtraction: other - self"""
        return other + (-self)

    def __rmul__(self, other):
        """Right multiplication: other * self (when other is not a Value)"""
        return self * other

    def __truediv__(self, other):
        """Division: a / b = a * b^(-1)"""
        other = _as_value(other)
        if other is NotImplemented:
            return other
        return self * other**-1

    def __rtruediv__(self, other):
        """Right division: other / self"""
        return other * self**-1

    def __repr__(self):
        name_str = f"'{self.name}' " if self.name else ""
        op_str = f" from {self._op}" if self._op else ""
        return f"Value({name_str}data={self.data}, grad={self.grad}{op_str})"


def _as_value(x):
    if isinstance(x, Value):
        return x
    if isinstance(x, numbers.Real):
        return Value(x)
    return NotImplemented


def _operand(x):
    v = _as_value(x)
    if v is NotImplemented:
        raise TypeError(f"unsupported operand type: {type(x).__name__}")
    return v


# Named-function API, equivalent to the operator overloads


def add(a, b):
    return _operand(a) + _operand(b)


def mul(a, b):
    return _operand(a) * _operand(b)


def power(a, p):
    return _operand(a) ** _operand(p)


def relu(x):
    return _operand(x).relu()


def neg(x):
    return -_operand(x)


def sub(a, b):
    return _operand(a) - _operand(b)


def div(a, b):
    return _operand(a) / _operand(b)


def backward(root):
    root.backward()
