"""In-sample goodness-of-fit metrics for the regression line."""

from typing import Sequence

import numpy as np
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from src.domain.entities.forecast import FitMetrics, RegressionModel
from src.domain.services.regression import predict_linear


def evaluate_fit(
    model: RegressionModel, xs: Sequence[float], ys: Sequence[float]
) -> FitMetrics:
    y_true = np.asarray(ys, dtype=float)
    y_pred = np.asarray([predict_linear(model, x) for x in xs], dtype=float)

    mae = float(mean_absolute_error(y_true, y_pred))
    rmse = float(np.sqrt(mean_squared_error(y_true, y_pred)))

    # R² is undefined for a single sample or a constant target.
    r2 = None
    if y_true.size >= 2 and np.ptp(y_true) > 0:
        r2 = float(r2_score(y_true, y_pred))

    return FitMetrics(mae=mae, rmse=rmse, r2=r2)
