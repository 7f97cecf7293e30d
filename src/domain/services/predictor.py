"""Serve forecasts from a loaded artifact bundle."""

from src.domain.entities.forecast import ArtifactBundle, Prediction, encode_slot
from src.domain.services.clustering import classify
from src.domain.services.regression import predict_linear


def predict_congestion(
    bundle: ArtifactBundle, weekday: int, hour_slot: int
) -> Prediction:
    """Forecast the event count for a slot and classify its severity."""
    value = predict_linear(bundle.lin_model, encode_slot(weekday, hour_slot))
    return Prediction(value=value, level=classify(bundle.kmeans, value))
