"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .prediction_dto import (
    AlertDTO,
    AlertsResponseDTO,
    PredictionDTO,
    PredictionRequestDTO,
    PredictionResponseDTO,
    SuggestionDTO,
    SuggestionsResponseDTO,
)
from .training_dto import (
    BundleMetadataDTO,
    FitMetricsDTO,
    TrainingRequestDTO,
    TrainingResponseDTO,
    WeeklyUpdateRequestDTO,
)

__all__ = [
    "AlertDTO",
    "AlertsResponseDTO",
    "BundleMetadataDTO",
    "FitMetricsDTO",
    "PredictionDTO",
    "PredictionRequestDTO",
    "PredictionResponseDTO",
    "SuggestionDTO",
    "SuggestionsResponseDTO",
    "TrainingRequestDTO",
    "TrainingResponseDTO",
    "WeeklyUpdateRequestDTO",
]
