"""
Train an MLP on the moons dataset with a max-margin loss and plain SGD.

Usage:
    python -m scalargrad.train make_moons.csv
    python -m scalargrad.train make_moons.csv --steps 50 --seed 1337 --plot
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from scalargrad.data import load_moons_data
from scalargrad.engine import Value
from scalargrad.nn import MLP

logger = logging.getLogger(__name__)


@dataclass
class TrainConfig:
    """Hyperparameters for the moons demo."""

    layer_sizes: List[int] = field(default_factory=lambda: [16, 16, 1])
    steps: int = 100
    alpha: float = 1e-4  # L2 regularization strength

    # Learning rate decays linearly from lr_start to lr_start - lr_decay
    lr_start: float = 1.0
    lr_decay: float = 0.9

    seed: Optional[int] = None


def loss(model, xs, ys, alpha=1e-4):
    """
    SVM "max-margin" loss over the whole dataset plus L2 regularization.

    Returns:
        tuple: (total_loss, accuracy) where total_loss is a Value ready for
        backward() and accuracy is the fraction of points whose score sign
        matches the label sign.
    """
    if len(xs) != len(ys):
        raise ValueError(f"got {len(xs)} inputs but {len(ys)} labels")
    if not xs:
        raise ValueError("cannot compute loss over an empty dataset")

    inputs = [[Value(xi) for xi in xrow] for xrow in xs]
    scores = [model(xrow)[0] for xrow in inputs]

    losses = [(1 + -yi * scorei).relu() for yi, scorei in zip(ys, scores)]
    data_loss = sum(losses) / len(losses)

    reg_loss = alpha * sum(p * p for p in model.parameters())
    total_loss = data_loss + reg_loss

    accuracy = [(yi > 0) == (scorei.data > 0) for yi, scorei in zip(ys, scores)]
    return total_loss, sum(accuracy) / len(accuracy)


def sgd_step(parameters, learning_rate):
    """Gradient descent update, applied to leaf parameters in place."""
    for p in parameters:
        p.data -= learning_rate * p.grad


def train(model, xs, ys, config=None):
    """
    Run config.steps full-batch optimization steps.

    Returns:
        list of (loss, accuracy) tuples, one per step, measured before the update.
    """
    config = config or TrainConfig()
    history = []

    for k in range(config.steps):
        # forward
        total_loss, acc = loss(model, xs, ys, alpha=config.alpha)

        # backward
        model.zero_grad()
        total_loss.backward()

        # update (sgd)
        learning_rate = config.lr_start - config.lr_decay * k / config.steps
        sgd_step(model.parameters(), learning_rate)

        logger.info("step %d loss %.3f, accuracy %.2f%%", k, total_loss.data, acc * 100)
        history.append((total_loss.data, acc))

    return history


def render_decision_boundary(model, bound=20, scale=2.0):
    """ASCII contour of the model's decision: '*' where the score is positive."""
    rows = []
    for y in range(-bound, bound):
        row = []
        for x in range(-bound, bound):
            score = model([x / bound * scale, -y / bound * scale])[0]
            row.append("*" if score.data > 0 else ".")
        rows.append(" ".join(row))
    return "\n".join(rows)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Train an MLP on the moons dataset")
    parser.add_argument("csv", help="CSV file with x, y, label columns and a header row")
    parser.add_argument("--steps", type=int, default=TrainConfig.steps)
    parser.add_argument("--alpha", type=float, default=TrainConfig.alpha)
    parser.add_argument("--seed", type=int, default=None, help="numpy seed for weight init")
    parser.add_argument("--plot", action="store_true", help="print an ASCII decision boundary")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = TrainConfig(steps=args.steps, alpha=args.alpha, seed=args.seed)
    if config.seed is not None:
        np.random.seed(config.seed)

    try:
        xs, ys = load_moons_data(args.csv)
    except (OSError, ValueError) as e:
        logger.error("Could not load %s: %s", args.csv, e)
        return 1
    if not xs:
        logger.error("%s contains no data points", args.csv)
        return 1

    model = MLP(len(xs[0]), config.layer_sizes)
    logger.info("%s with %d parameters", model, len(model.parameters()))

    train(model, xs, ys, config)

    if args.plot:
        print(render_decision_boundary(model))
    return 0


if __name__ == "__main__":
    sys.exit(main())
