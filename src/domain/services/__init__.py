"""
Domain Services Package

Pure forecasting algorithms: feature extraction, regression, clustering,
smoothing, prediction, ranking and alerting.
"""

from .alerts import build_congestion_alerts
from .clustering import choose_cluster_count, classify, train_kmeans
from .feature_extractor import extract_hourly_features
from .fit_metrics import evaluate_fit
from .predictor import predict_congestion
from .regression import predict_linear, train_linear_regression
from .smoothing import moving_average
from .suggestions import build_suggestion_grid, top_suggestions

__all__ = [
    "build_congestion_alerts",
    "build_suggestion_grid",
    "choose_cluster_count",
    "classify",
    "evaluate_fit",
    "extract_hourly_features",
    "moving_average",
    "predict_congestion",
    "predict_linear",
    "top_suggestions",
    "train_kmeans",
    "train_linear_regression",
]
