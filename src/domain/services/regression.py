"""Closed-form ordinary least squares over a single feature."""

from typing import Sequence

import numpy as np

from src.domain.entities.errors import InvalidInputError
from src.domain.entities.forecast import RegressionModel


def train_linear_regression(
    xs: Sequence[float], ys: Sequence[float]
) -> RegressionModel:
    """
    Fit ``y = slope * x + intercept`` by least squares.

    A constant ``xs`` yields a flat line through the mean of ``ys``.

    Raises:
        InvalidInputError: If the sequences are empty or differ in length.
    """
    if len(xs) == 0 or len(xs) != len(ys):
        raise InvalidInputError(
            "Invalid data for linear regression",
            details={"x_length": len(xs), "y_length": len(ys)},
        )

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)

    dx = x - x.mean()
    denominator = float(np.dot(dx, dx))
    numerator = float(np.dot(dx, y - y.mean()))

    slope = 0.0 if denominator == 0 else numerator / denominator
    intercept = float(y.mean()) - slope * float(x.mean())
    return RegressionModel(slope=slope, intercept=intercept)


def predict_linear(model: RegressionModel, x: float) -> float:
    return model.slope * x + model.intercept
