"""
Toy dataset loading for the training demo.

The moons data lives in a CSV file with a header row and three numeric columns:
the two input coordinates and a label of -1 or 1.
"""

import logging
from typing import List, NamedTuple, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class DataPoint(NamedTuple):
    x: float
    y: float
    label: float


def read_csv_file(path) -> List[DataPoint]:
    """
    Parse a header-prefixed CSV of (x, y, label) rows.

    Columns past the third are ignored. Raises FileNotFoundError if the file is
    missing and ValueError if a row is not numeric or has fewer than three fields.
    """
    rows = np.loadtxt(path, delimiter=",", skiprows=1, ndmin=2)
    if rows.size == 0:
        return []
    if rows.shape[1] < 3:
        raise ValueError(f"{path}: expected 3 columns (x, y, label), got {rows.shape[1]}")

    points = [DataPoint(float(x), float(y), float(label)) for x, y, label in rows[:, :3]]
    logger.debug("Read %d data points from %s", len(points), path)
    return points


def load_moons_data(path="make_moons.csv") -> Tuple[List[List[float]], List[float]]:
    """Return (xs, ys): inputs as [x, y] pairs and their labels."""
    points = read_csv_file(path)
    xs = [[p.x, p.y] for p in points]
    ys = [p.label for p in points]
    return xs, ys
