"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .access_event import AccessEvent
from .errors import (
    ArtifactStoreError,
    DomainError,
    InsufficientDataError,
    InvalidInputError,
    ModelNotTrainedError,
    NoTrainingDataError,
    TrainingInProgressError,
)
from .forecast import (
    Alert,
    ArtifactBundle,
    BundleMetadata,
    ClusterModel,
    CongestionLevel,
    FeatureRow,
    FitMetrics,
    Prediction,
    RegressionModel,
    Suggestion,
    encode_slot,
    level_rank,
)

__all__ = [
    "AccessEvent",
    "Alert",
    "ArtifactBundle",
    "BundleMetadata",
    "ClusterModel",
    "CongestionLevel",
    "FeatureRow",
    "FitMetrics",
    "Prediction",
    "RegressionModel",
    "Suggestion",
    "encode_slot",
    "level_rank",
    "DomainError",
    "InvalidInputError",
    "InsufficientDataError",
    "NoTrainingDataError",
    "ModelNotTrainedError",
    "ArtifactStoreError",
    "TrainingInProgressError",
]
