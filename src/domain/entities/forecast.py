"""
Domain Entities - Forecast

Value objects produced and consumed by the congestion forecasting
pipeline: aggregated features, trained models, the persisted artifact
bundle and the ephemeral predictions, suggestions and alerts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

ARTIFACT_BUNDLE_VERSION = 1


class CongestionLevel(str, Enum):
    """Ordinal severity derived from cluster rank."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


LEVELS_BY_RANK = [CongestionLevel.LOW, CongestionLevel.MEDIUM, CongestionLevel.HIGH]
LEVEL_RANKS: Dict[str, int] = {
    level.value: rank for rank, level in enumerate(LEVELS_BY_RANK)
}


def level_rank(level: Any, default: int = 0) -> int:
    """Return the ordinal rank of a level name; unknown names get ``default``."""
    value = getattr(level, "value", level)
    return LEVEL_RANKS.get(value, default) if isinstance(value, str) else default


@dataclass(slots=True, frozen=True)
class FeatureRow:
    """Event count for one (weekday, hour) bucket. Sunday is weekday 0."""

    weekday: int
    hour_slot: int
    count: int

    @property
    def hour_index(self) -> int:
        return encode_slot(self.weekday, self.hour_slot)


def encode_slot(weekday: int, hour_slot: int) -> int:
    """Numeric encoding of a weekday/hour slot used as the regression input."""
    return weekday * 24 + hour_slot


@dataclass(slots=True, frozen=True)
class RegressionModel:
    slope: float
    intercept: float


@dataclass(slots=True, frozen=True)
class ClusterModel:
    """Trained 1-D k-means centroids and the severity label of each cluster."""

    centroids: List[float]
    cluster_labels: Dict[int, CongestionLevel]

    @property
    def k(self) -> int:
        return len(self.centroids)


@dataclass(slots=True, frozen=True)
class BundleMetadata:
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    n: int = 0
    version: int = ARTIFACT_BUNDLE_VERSION


@dataclass(slots=True, frozen=True)
class ArtifactBundle:
    """Complete output of one training run; the unit of persistence."""

    lin_model: RegressionModel
    ma_series: List[float]
    kmeans: ClusterModel
    metadata: BundleMetadata


@dataclass(slots=True, frozen=True)
class Prediction:
    value: float
    level: CongestionLevel


@dataclass(slots=True, frozen=True)
class Suggestion:
    """A ranked weekday/hour candidate with its forecast."""

    weekday: int
    hour_slot: int
    value: float
    level: CongestionLevel


@dataclass(slots=True, frozen=True)
class Alert:
    weekday: int
    hour_slot: int
    expected: float
    level: str
    type: str = "congestion"


@dataclass(slots=True, frozen=True)
class FitMetrics:
    """In-sample goodness of fit of the regression line."""

    mae: float
    rmse: float
    r2: Optional[float] = None
