"""
Visualization utilities for scalargrad computational graphs.

This module exports the graph built by Value objects to Graphviz, showing the
flow of data and gradients through operations. It only reads the graph.
"""

from graphviz import Digraph


def trace(root):
    """
    Trace the computational graph starting from a root Value node.

    Walks operand edges from the root, visiting each node once (nodes are keyed
    by identity, so a shared operand is listed a single time no matter how many
    nodes consume it).

    Args:
        root: A Value object representing the output of a computation

    Returns:
        tuple: (nodes, edges) where:
            - nodes: list of all Value objects in the graph, in discovery order
            - edges: list of (operand, result) tuples, one per operand slot

    Example:
        >>> from scalargrad.engine import Value
        >>> x = Value(2.0)
        >>> y = Value(3.0)
        >>> z = x * y + x
        >>> nodes, edges = trace(z)
        >>> len(nodes)  # x, y, x*y and z
        4
    """
    seen = {}
    edges = []
    stack = [root]
    while stack:
        v = stack.pop()
        if v in seen:
            continue
        seen[v] = None
        for child in v._prev:
            edges.append((child, v))
            if child not in seen:
                stack.append(child)
    return list(seen), edges


def _short_repr(x):
    return f"{x:.4f}"


def draw_dot(root, format='svg', rankdir='LR'):
    """
    Visualize the computational graph of a Value object as a directed graph.

    Creates a Graphviz diagram showing:
    - Value nodes with their name, data and gradient
    - Operation nodes (+, *, **, ReLU)
    - Edges showing data flow through the computation

    Args:
        root: A Value object (typically the loss) to visualize from
        format: Output format ('svg', 'png', 'pdf', etc.)
        rankdir: Graph direction - 'LR' (left-right) or 'TB' (top-bottom)

    Returns:
        Digraph: A graphviz Digraph object that can be rendered or displayed

    Example:
        >>> from scalargrad.engine import Value
        >>> x = Value(2.0, name='x')
        >>> y = Value(-3.0, name='y')
        >>> z = x * y
        >>> z.backward()
        >>> draw_dot(z).render('computation_graph')

    Note:
        Rendering needs the Graphviz binaries (apt install graphviz); building the
        Digraph and reading its .source does not.
    """
    if rankdir not in ('LR', 'TB'):
        raise ValueError(f"rankdir must be 'LR' or 'TB', got {rankdir!r}")

    nodes, edges = trace(root)

    dot = Digraph(format=format, graph_attr={'rankdir': rankdir})

    for n in nodes:
        uid = str(n.uuid)
        label = f'{{ {n.name} | data {_short_repr(n.data)} | grad {_short_repr(n.grad)} }}'
        dot.node(name=uid, label=label, shape='record')

        # If this node was created by an operation, add an operation node
        if n._op:
            dot.node(name=uid + n._op, label=n._op)
            dot.edge(uid + n._op, uid)

    for n1, n2 in edges:
        # Connect operand (n1) to the operation that created the result (n2)
        dot.edge(str(n1.uuid), str(n2.uuid) + n2._op)

    return dot
