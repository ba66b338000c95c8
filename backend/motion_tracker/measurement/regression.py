"""Ordinary least-squares line fit over two numeric series."""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class RegressionResult:
    """Best-fit line y = slope * x + intercept."""
    slope: float
    intercept: float
    r_squared: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def linear_regression(points: Iterable[Tuple[float, float]]) -> Optional[RegressionResult]:
    """
    Fit a line through (x, y) pairs.

    Returns None with fewer than 2 points or when every x is identical.
    A constant y series is treated as perfectly explained (r_squared = 1).
    """
    data = np.asarray(list(points), dtype=np.float64).reshape(-1, 2)
    n = len(data)
    if n < 2:
        return None

    x = data[:, 0]
    y = data[:, 1]
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))

    # Identical x values can leave a rounding residue in the denominator
    if np.all(x == x[0]):
        return None

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    predicted = slope * x + intercept
    ss_tot = float(np.sum((y - sum_y / n) ** 2))
    ss_res = float(np.sum((y - predicted) ** 2))
    r_squared = 1.0 if ss_tot == 0 else 1.0 - ss_res / ss_tot

    return RegressionResult(slope=slope, intercept=intercept, r_squared=r_squared)
