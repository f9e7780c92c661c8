"""
Neural network building blocks for scalargrad.

Every weight is its own scalar Value, so a forward pass builds one graph node per
multiply and add. These classes only compose engine operations; they never touch
gradients except through zero_grad().
"""

import numpy as np
from scalargrad.engine import Value


class Module:
    """
    Base class for all neural network modules.

    Provides common functionality for managing parameters and gradients.
    """

    def zero_grad(self):
        """
        Reset all gradients to zero.

        Call this before each backward pass to avoid accumulating gradients
        from multiple backward passes.
        """
        for p in self.parameters():
            p.zero_grad()

    def parameters(self):
        """
        Return a list of all trainable parameters.

        Override this in subclasses to return actual parameters.
        """
        return []


class Neuron(Module):
    """
    A single unit computing sum(w_i * x_i) + b, optionally followed by ReLU.

    Args:
        nin: Number of inputs
        nonlin: If True, apply ReLU activation (default: True)
        weights: Optional initial weights (length nin); uniform in [-1, 1) otherwise
        bias: Optional initial bias (default: 0.0)

    Example:
        >>> n = Neuron(2, nonlin=False, weights=[0.5, -1.0], bias=1.0)
        >>> n([1.0, -2.0]).data
        3.5
    """

    def __init__(self, nin, nonlin=True, weights=None, bias=None):
        if weights is None:
            weights = np.random.uniform(-1, 1, nin).tolist()
        if len(weights) != nin:
            raise ValueError(f"expected {nin} weights, got {len(weights)}")

        self.w = [Value(wi) for wi in weights]
        self.b = Value(0.0 if bias is None else bias)
        self.nonlin = nonlin

    def __call__(self, x):
        if len(x) != len(self.w):
            raise ValueError(f"expected {len(self.w)} inputs, got {len(x)}")

        act = sum((wi * xi for wi, xi in zip(self.w, x)), self.b)
        return act.relu() if self.nonlin else act

    def parameters(self):
        """Bias first, then the weights in input order."""
        return [self.b] + self.w

    def __repr__(self):
        return f"{'ReLU' if self.nonlin else 'Linear'}Neuron({len(self.w)})"


class Layer(Module):
    """
    A fully-connected layer of independent neurons sharing the same inputs.

    Args:
        nin: Number of inputs per neuron
        nout: Number of neurons (outputs)
        nonlin: If True, every neuron applies ReLU (default: True)
    """

    def __init__(self, nin, nout, nonlin=True):
        self.neurons = [Neuron(nin, nonlin=nonlin) for _ in range(nout)]

    def __call__(self, x):
        return [n(x) for n in self.neurons]

    def parameters(self):
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):
    """
    Multi-Layer Perceptron: a sequence of fully-connected layers.

    The last layer has no activation (linear output), so its scores can be fed
    straight into a margin or squared loss.

    Args:
        nin: Number of input features
        nouts: List of output sizes for each layer
               Example: [16, 16, 1] creates 3 layers: input→16→16→1

    Example:
        >>> mlp = MLP(2, [16, 16, 1])
        >>> score = mlp([1.0, -2.0])[0]
        >>> mlp.zero_grad()
        >>> score.backward()
        >>> for p in mlp.parameters():
        ...     p.data -= learning_rate * p.grad
    """

    def __init__(self, nin, nouts):
        sizes = [nin] + list(nouts)
        self.layers = [
            Layer(sizes[i], sizes[i + 1], nonlin=i != len(nouts) - 1)
            for i in range(len(nouts))
        ]

    def __call__(self, x):
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self):
        """Return all trainable parameters from all layers."""
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        layer_str = ' → '.join(str(layer) for layer in self.layers)
        return f"MLP[\n  {layer_str}\n]"
